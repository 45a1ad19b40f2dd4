"""FastAPI dependency injection functions."""

from fastapi import Request

from pdfextract.application.services.factories import build_pipeline
from pdfextract.domain.pipeline.orchestrator import TextExtractionPipeline


def get_pipeline(request: Request) -> TextExtractionPipeline:
    """Return the process-wide pipeline, building it on first use if startup did not."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        pipeline = build_pipeline()
        request.app.state.pipeline = pipeline
    return pipeline
