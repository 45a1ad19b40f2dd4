from __future__ import annotations

from pathlib import Path

from pdfextract.domain.pipeline.errors import RasterizeError, StageError
from pdfextract.domain.pipeline.models import PageImage, RunContext
from pdfextract.domain.ports.rasterizer_port import RasterizerPort


async def run_rasterize(context: RunContext, *, rasterizer: RasterizerPort) -> RunContext:
    """Render every page of the split document into the workspace.

    Attaches the page images, sorted by page number, under
    context.artifacts["page_images"]. An empty rendering is an error.
    """
    pdf_path = context.artifacts.get("split_pdf_path")
    if not isinstance(pdf_path, Path) or context.work_dir is None:
        raise StageError("Split document path missing from context for rasterize stage")
    try:
        images: list[PageImage] = await rasterizer.rasterize(pdf_path, context.work_dir)
    except RasterizeError:
        raise
    except Exception as exc:
        raise RasterizeError(f"Rasterization failed: {exc}") from exc

    if not images:
        raise RasterizeError(f"Rasterizer produced no page images for {pdf_path.name}")

    context.artifacts["page_images"] = sorted(images, key=lambda img: img.page_number)
    context.meta["pages"] = len(images)
    return context
