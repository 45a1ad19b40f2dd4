from __future__ import annotations

import time
from typing import Awaitable, Callable

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware


http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests processed",
    labelnames=("endpoint", "method", "status"),
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("endpoint", "method"),
    buckets=(0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0),
)
pipeline_duration_seconds = Histogram(
    "pipeline_duration_seconds",
    "End-to-end pipeline duration in seconds",
    buckets=(0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 60.0, 120.0, 300.0),
)
pipeline_stage_duration_seconds = Histogram(
    "pipeline_stage_duration_seconds",
    "Pipeline stage duration in seconds",
    labelnames=("stage",),
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0),
)
pages_extracted_total = Counter("pages_extracted_total", "Pages whose text was extracted")
pipelines_failed_total = Counter(
    "pipelines_failed_total",
    "Pipeline runs that ended in an error",
    labelnames=("error_type",),
)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            endpoint = _endpoint_label(request)
            http_requests_total.labels(endpoint=endpoint, method=request.method, status="500").inc()
            http_request_duration_seconds.labels(endpoint=endpoint, method=request.method).observe(
                time.perf_counter() - start
            )
            raise
        endpoint = _endpoint_label(request)
        status = getattr(response, "status_code", 200)
        http_requests_total.labels(endpoint=endpoint, method=request.method, status=str(status)).inc()
        http_request_duration_seconds.labels(endpoint=endpoint, method=request.method).observe(
            time.perf_counter() - start
        )
        return response


def _endpoint_label(request: Request) -> str:
    # Use the route path template when routing matched
    route = request.scope.get("route")
    path = getattr(route, "path", None) or getattr(route, "path_format", None)
    if isinstance(path, str) and path:
        return path
    return request.url.path


def record_pipeline_duration(seconds: float) -> None:
    pipeline_duration_seconds.observe(seconds)


def record_stage_durations(totals: dict[str, float]) -> None:
    for stage, seconds in totals.items():
        pipeline_stage_duration_seconds.labels(stage=stage).observe(seconds)


def inc_pages_extracted(count: int) -> None:
    pages_extracted_total.inc(count)


def inc_pipeline_failed(error_type: str) -> None:
    pipelines_failed_total.labels(error_type=error_type).inc()


# Router to expose /metrics
router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics_endpoint():
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
