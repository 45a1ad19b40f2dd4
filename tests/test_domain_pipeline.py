from __future__ import annotations

from pathlib import Path

import pytest

from pdfextract.domain.pipeline.errors import (
    ExtractionError,
    InvalidInputError,
    RasterizeError,
    SplitError,
)
from pdfextract.domain.pipeline.orchestrator import TextExtractionPipeline
from pdfextract.infrastructure.storage.temp_workspace_adapter import TempWorkspaceAdapter

from tests.fakes import FakeRasterizer, FakeSplitter, FakeVision


def _source(tmp_path: Path) -> Path:
    src = tmp_path / "Student Book.pdf"
    src.write_bytes(b"%PDF-1.4\n%source\n")
    return src


def _pipeline(tmp_path: Path, *, splitter=None, rasterizer=None, vision=None, concurrency: int = 1):
    return TextExtractionPipeline(
        splitter=splitter or FakeSplitter(),
        rasterizer=rasterizer or FakeRasterizer(),
        vision=vision or FakeVision(),
        workspace=TempWorkspaceAdapter(root=tmp_path / "work"),
        source_path=_source(tmp_path),
        concurrency=concurrency,
    )


def _leftover_workspaces(tmp_path: Path) -> list[Path]:
    root = tmp_path / "work"
    return list(root.iterdir()) if root.exists() else []


@pytest.mark.asyncio
async def test_run_pipeline_happy_path(tmp_path: Path) -> None:
    splitter = FakeSplitter()
    pipeline = _pipeline(tmp_path, splitter=splitter)

    result = await pipeline.run("2-4", run_id="run-1")

    assert splitter.calls == [(tmp_path / "Student Book.pdf", "2-4")]
    assert result.text == (
        "\n--- Page page-1 ---\ntext 1\n"
        "\n--- Page page-2 ---\ntext 2\n"
        "\n--- Page page-3 ---\ntext 3\n"
    )
    assert _leftover_workspaces(tmp_path) == []


@pytest.mark.asyncio
async def test_pages_follow_numeric_order_past_nine(tmp_path: Path) -> None:
    pipeline = _pipeline(tmp_path, rasterizer=FakeRasterizer(pages=12))

    result = await pipeline.run("1-12")

    assert [p.page_id for p in result.pages] == [f"page-{n}" for n in range(1, 13)]
    assert result.text.count("--- Page ") == 12
    assert result.text.index("page-2 ---") < result.text.index("page-10 ---")


@pytest.mark.asyncio
async def test_split_failure_skips_later_stages(tmp_path: Path) -> None:
    rasterizer = FakeRasterizer()
    vision = FakeVision()
    pipeline = _pipeline(
        tmp_path,
        splitter=FakeSplitter(error=RuntimeError("Invalid ranges: 99-100")),
        rasterizer=rasterizer,
        vision=vision,
    )

    with pytest.raises(SplitError) as exc_info:
        await pipeline.run("99-100")

    assert "Invalid ranges: 99-100" in str(exc_info.value)
    assert rasterizer.work_dirs == []
    assert vision.calls == []
    assert _leftover_workspaces(tmp_path) == []


@pytest.mark.asyncio
async def test_missing_source_fails_before_remote_call(tmp_path: Path) -> None:
    splitter = FakeSplitter()
    pipeline = _pipeline(tmp_path, splitter=splitter)
    pipeline.source_path.unlink()

    with pytest.raises(SplitError, match="Source document not found"):
        await pipeline.run("1-2")
    assert splitter.calls == []


@pytest.mark.asyncio
async def test_rasterizer_failure_skips_extraction_and_cleans_up(tmp_path: Path) -> None:
    rasterizer = FakeRasterizer(error=RasterizeError("pdftoppm exited with code 1: Syntax Error"))
    vision = FakeVision()
    pipeline = _pipeline(tmp_path, rasterizer=rasterizer, vision=vision)

    with pytest.raises(RasterizeError, match="Syntax Error"):
        await pipeline.run("1-3")

    assert vision.calls == []
    assert len(rasterizer.work_dirs) == 1
    assert not rasterizer.work_dirs[0].exists()


@pytest.mark.asyncio
async def test_empty_rasterization_is_an_error(tmp_path: Path) -> None:
    pipeline = _pipeline(tmp_path, rasterizer=FakeRasterizer(pages=0))

    with pytest.raises(RasterizeError, match="no page images"):
        await pipeline.run("1")


@pytest.mark.asyncio
async def test_vision_failure_discards_partial_text(tmp_path: Path) -> None:
    vision = FakeVision(fail_on_call=2)
    pipeline = _pipeline(tmp_path, vision=vision)

    with pytest.raises(ExtractionError) as exc_info:
        await pipeline.run("1-3")

    assert "vision service unavailable" in str(exc_info.value)
    # page 3 is never requested after page 2 failed
    assert vision.calls == ["image 1", "image 2"]
    assert _leftover_workspaces(tmp_path) == []


@pytest.mark.asyncio
async def test_concurrent_extraction_keeps_page_order(tmp_path: Path) -> None:
    vision = FakeVision(delays={1: 0.05, 2: 0.02})
    pipeline = _pipeline(tmp_path, rasterizer=FakeRasterizer(pages=4), vision=vision, concurrency=4)

    result = await pipeline.run("1-4")

    assert [p.page_number for p in result.pages] == [1, 2, 3, 4]
    assert [p.text for p in result.pages] == ["text 1", "text 2", "text 3", "text 4"]


@pytest.mark.asyncio
async def test_repeated_runs_are_identical_and_independent(tmp_path: Path) -> None:
    rasterizer = FakeRasterizer()
    pipeline = _pipeline(tmp_path, rasterizer=rasterizer)

    first = await pipeline.run("2-4")
    second = await pipeline.run("2-4")

    assert first.text == second.text
    assert len(rasterizer.work_dirs) == 2
    assert rasterizer.work_dirs[0] != rasterizer.work_dirs[1]
    assert all(d.name.startswith("pdf-process-") for d in rasterizer.work_dirs)
    assert _leftover_workspaces(tmp_path) == []


@pytest.mark.asyncio
async def test_blank_ranges_rejected(tmp_path: Path) -> None:
    splitter = FakeSplitter()
    pipeline = _pipeline(tmp_path, splitter=splitter)

    with pytest.raises(InvalidInputError):
        await pipeline.run("   ")
    assert splitter.calls == []


@pytest.mark.asyncio
async def test_concurrent_failure_cancels_pending_pages(tmp_path: Path) -> None:
    vision = FakeVision(fail_on_call=2, delays={3: 5.0, 4: 5.0})
    pipeline = _pipeline(tmp_path, rasterizer=FakeRasterizer(pages=4), vision=vision, concurrency=3)

    with pytest.raises(ExtractionError, match="vision service unavailable"):
        await pipeline.run("1-4")

    assert "text 3" not in vision.completed
    assert "text 4" not in vision.completed
    assert _leftover_workspaces(tmp_path) == []
