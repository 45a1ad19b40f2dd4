from __future__ import annotations

from pathlib import Path

from pdfextract.domain.pipeline.errors import SplitError
from pdfextract.domain.pipeline.models import RunContext
from pdfextract.domain.ports.splitter_port import SplitterPort


async def run_split(context: RunContext, *, splitter: SplitterPort, source_path: Path) -> RunContext:
    """Cut the requested range out of the source document.

    Attaches the resulting PDF bytes under context.artifacts["split_pdf"].
    """
    if not source_path.is_file():
        raise SplitError(f"Source document not found: {source_path}")
    try:
        data = await splitter.split(source_path, context.ranges)
    except SplitError:
        raise
    except Exception as exc:
        raise SplitError(f"Split failed: {exc}") from exc

    if not data:
        raise SplitError("Split service returned an empty document")

    context.artifacts["split_pdf"] = data
    context.meta["split_bytes"] = len(data)
    return context
