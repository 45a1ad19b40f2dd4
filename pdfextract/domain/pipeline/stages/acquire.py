from __future__ import annotations

from pdfextract.domain.pipeline.errors import InvalidInputError
from pdfextract.domain.pipeline.models import RunContext


def run_acquire(context: RunContext) -> RunContext:
    """Validate base fields on the context.

    Only presence is checked; the range syntax is left to the splitting service.
    """
    if not context.run_id:
        raise InvalidInputError("run_id is required in RunContext")
    if not context.ranges or not context.ranges.strip():
        raise InvalidInputError("Split range is required.")
    return context
