from __future__ import annotations

from pdfextract.domain.pipeline.constants import SPLIT_PDF_FILENAME
from pdfextract.domain.pipeline.errors import StageError, WorkspaceError
from pdfextract.domain.pipeline.models import RunContext


def run_materialize(context: RunContext) -> RunContext:
    """Write the split document into the run's workspace.

    Moves the bytes out of the artifacts and stores the file path under
    context.artifacts["split_pdf_path"].
    """
    data = context.artifacts.pop("split_pdf", None)
    if not isinstance(data, bytes):
        raise StageError("Split document missing from context for materialize stage")
    if context.work_dir is None:
        raise StageError("work_dir is not set in RunContext for materialize stage")

    target = context.work_dir / SPLIT_PDF_FILENAME
    try:
        target.write_bytes(data)
    except OSError as exc:
        raise WorkspaceError(f"Failed to write {target}: {exc}") from exc

    context.artifacts["split_pdf_path"] = target
    return context
