from __future__ import annotations

from pdfextract.core.config import Settings, get_settings
from pdfextract.domain.pipeline.orchestrator import TextExtractionPipeline
from pdfextract.infrastructure.clients.ilovepdf_http import ILovePdfClient
from pdfextract.infrastructure.clients.vision_openai import OpenAIVisionClient
from pdfextract.infrastructure.rasterizer.pdftoppm import PdftoppmRasterizer
from pdfextract.infrastructure.storage.temp_workspace_adapter import TempWorkspaceAdapter


def build_splitter(s: Settings | None = None) -> ILovePdfClient:
    s = s or get_settings()
    return ILovePdfClient(
        public_key=s.ILOVEPDF_PUBLIC_KEY,
        secret_key=s.ILOVEPDF_SECRET_KEY.get_secret_value(),
        base_url=s.ILOVEPDF_BASE_URL,
        timeout_seconds=s.ILOVEPDF_TIMEOUT_SECONDS,
    )


def build_rasterizer(s: Settings | None = None) -> PdftoppmRasterizer:
    s = s or get_settings()
    return PdftoppmRasterizer(
        s.PDFTOPPM_PATH,
        dpi=s.RASTERIZE_DPI,
        timeout_seconds=s.RASTERIZE_TIMEOUT_SECONDS,
    )


def build_vision_client(s: Settings | None = None) -> OpenAIVisionClient:
    s = s or get_settings()
    return OpenAIVisionClient(
        api_key=s.OPENAI_API_KEY.get_secret_value(),
        model=s.OPENAI_MODEL,
        max_tokens=s.OPENAI_MAX_TOKENS,
        timeout_seconds=s.OPENAI_TIMEOUT_SECONDS,
        base_url=s.OPENAI_BASE_URL,
    )


def build_workspace(s: Settings | None = None) -> TempWorkspaceAdapter:
    s = s or get_settings()
    return TempWorkspaceAdapter(root=s.WORK_DIR, keep=s.KEEP_WORKSPACE)


def build_pipeline(s: Settings | None = None) -> TextExtractionPipeline:
    s = s or get_settings()
    return TextExtractionPipeline(
        splitter=build_splitter(s),
        rasterizer=build_rasterizer(s),
        vision=build_vision_client(s),
        workspace=build_workspace(s),
        source_path=s.source_pdf_path,
        concurrency=s.EXTRACT_CONCURRENCY,
    )
