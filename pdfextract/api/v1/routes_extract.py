from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from pdfextract.application.usecases.extract_text import extract_text
from pdfextract.core.dependencies import get_pipeline
from pdfextract.core.logging import get_logger
from pdfextract.domain.pipeline.orchestrator import TextExtractionPipeline
from pdfextract.models.schemas import ErrorResponse, ProcessingErrorResponse
from pdfextract.observability.errors import to_error_response

router = APIRouter(tags=["extract"])


@router.get(
    "/extract",
    response_class=PlainTextResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ProcessingErrorResponse}},
)
async def extract(
    ranges: str | None = Query(default=None, description='Page ranges passed to the splitter, e.g. "2-8"'),
    pipeline: TextExtractionPipeline = Depends(get_pipeline),
) -> Response:
    logger = get_logger(__name__)
    if not ranges or not ranges.strip():
        return to_error_response("MISSING_RANGES")

    logger.info("extract_request_received", extra={"ranges": ranges})
    try:
        text = await extract_text(pipeline=pipeline, ranges=ranges)
    except Exception as e:
        logger.error("pipeline_failed", extra={"ranges": ranges, "error": str(e)}, exc_info=True)
        return to_error_response("PROCESSING_FAILED", details=str(e))
    return PlainTextResponse(content=text)
