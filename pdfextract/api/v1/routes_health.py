from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pdfextract.core.config import get_settings
from pdfextract.core.dependencies import get_pipeline
from pdfextract.domain.pipeline.orchestrator import TextExtractionPipeline
from pdfextract.models.schemas import HealthResponse, ReadyResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check: process is up."""
    settings = get_settings()
    return {"status": "ok", "service": settings.APP_NAME}


@router.get("/ready", response_model=ReadyResponse)
async def ready(pipeline: TextExtractionPipeline = Depends(get_pipeline)):
    """Readiness check: the source document and the rasterizer are in place."""
    settings = get_settings()
    is_available = getattr(pipeline.rasterizer, "is_available", None)
    checks = {
        "source_pdf": pipeline.source_path.is_file(),
        "rasterizer": bool(callable(is_available) and is_available()),
    }
    ok = all(checks.values())
    return JSONResponse(
        status_code=200 if ok else 503,
        content={"status": "ok" if ok else "degraded", "service": settings.APP_NAME, "checks": checks},
    )
