from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from pdfextract.api.v1.routes_extract import router as extract_router
from pdfextract.api.v1.routes_health import router as health_router
from pdfextract.application.services.factories import build_pipeline
from pdfextract.core.config import get_settings
from pdfextract.core.logging import RequestIdMiddleware, configure_logging, get_logger
from pdfextract.observability.metrics import MetricsMiddleware
from pdfextract.observability.metrics import router as metrics_router

# Initialize settings and logging
settings = get_settings()
configure_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = get_logger(__name__)
    app.state.pipeline = build_pipeline(settings)
    logger.info(
        "service_startup",
        extra={
            "env": settings.ENV,
            "log_level": settings.LOG_LEVEL,
            "path": str(settings.source_pdf_path),
        },
    )
    if not settings.source_pdf_path.is_file():
        logger.warning("source_pdf_missing", extra={"path": str(settings.source_pdf_path)})
    try:
        yield
    finally:
        await app.state.pipeline.aclose()
        logger.info("service_shutdown")


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# Middlewares
app.add_middleware(RequestIdMiddleware)
app.add_middleware(MetricsMiddleware)

# Routers
app.include_router(health_router)
app.include_router(extract_router)
app.include_router(metrics_router)


def run() -> None:
    """Console entry point: serve the app on HOST:PORT."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
