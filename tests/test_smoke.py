from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from pdfextract.core.dependencies import get_pipeline
from pdfextract.domain.pipeline.orchestrator import TextExtractionPipeline
from pdfextract.infrastructure.storage.temp_workspace_adapter import TempWorkspaceAdapter
from pdfextract.main import app

from tests.fakes import FakeRasterizer, FakeSplitter, FakeVision

client = TestClient(app)


def _pipeline(source: Path) -> TextExtractionPipeline:
    return TextExtractionPipeline(
        splitter=FakeSplitter(),
        rasterizer=FakeRasterizer(),
        vision=FakeVision(),
        workspace=TempWorkspaceAdapter(),
        source_path=source,
    )


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_ready_when_source_present(tmp_path: Path):
    src = tmp_path / "Student Book.pdf"
    src.write_bytes(b"%PDF-1.4\n%")
    app.dependency_overrides[get_pipeline] = lambda: _pipeline(src)
    try:
        resp = client.get("/ready")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 200
    assert resp.json()["checks"] == {"source_pdf": True, "rasterizer": True}


def test_ready_degraded_without_source(tmp_path: Path):
    app.dependency_overrides[get_pipeline] = lambda: _pipeline(tmp_path / "missing.pdf")
    try:
        resp = client.get("/ready")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 503
    body = resp.json()
    assert body["status"] == "degraded"
    assert body["checks"]["source_pdf"] is False


def test_metrics_endpoint_exposes_http_requests_total():
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "http_requests_total" in resp.text
    assert "/health" in resp.text
