from __future__ import annotations

from pathlib import Path

import pytest

from pdfextract.domain.pipeline.errors import WorkspaceError
from pdfextract.infrastructure.storage.temp_workspace_adapter import TempWorkspaceAdapter


def test_workspace_created_and_removed(tmp_path: Path) -> None:
    adapter = TempWorkspaceAdapter(root=tmp_path)

    with adapter.open("run-1") as work_dir:
        assert work_dir.is_dir()
        assert work_dir.parent == tmp_path
        assert work_dir.name.startswith("pdf-process-")
        (work_dir / "page-1.jpg").write_bytes(b"x")

    assert not work_dir.exists()


def test_workspace_removed_when_block_raises(tmp_path: Path) -> None:
    adapter = TempWorkspaceAdapter(root=tmp_path)

    with pytest.raises(RuntimeError):
        with adapter.open("run-1") as work_dir:
            (work_dir / "splitted.pdf").write_bytes(b"%PDF")
            raise RuntimeError("boom")

    assert list(tmp_path.iterdir()) == []


def test_workspaces_are_unique(tmp_path: Path) -> None:
    adapter = TempWorkspaceAdapter(root=tmp_path)
    with adapter.open("a") as first, adapter.open("b") as second:
        assert first != second


def test_keep_leaves_workspace_on_disk(tmp_path: Path) -> None:
    adapter = TempWorkspaceAdapter(root=tmp_path, keep=True)
    with adapter.open("run-1") as work_dir:
        pass
    assert work_dir.is_dir()


def test_unusable_root_raises_workspace_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")
    adapter = TempWorkspaceAdapter(root=blocker)

    with pytest.raises(WorkspaceError):
        with adapter.open("run-1"):
            pass
