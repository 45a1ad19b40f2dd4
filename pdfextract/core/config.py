from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide configuration, read once from the environment (or .env)."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = Field(default="pdf-page-extract")
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=False)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)

    SOURCE_PDF: Path = Field(default=Path("Student Book.pdf"))
    WORK_DIR: Path | None = Field(default=None)
    KEEP_WORKSPACE: bool = Field(default=False)

    # Credentials are not validated here; a missing key fails on the first remote call.
    ILOVEPDF_PUBLIC_KEY: str = Field(default="")
    ILOVEPDF_SECRET_KEY: SecretStr = Field(default=SecretStr(""))
    ILOVEPDF_BASE_URL: str = Field(default="https://api.ilovepdf.com")
    ILOVEPDF_TIMEOUT_SECONDS: float = Field(default=120.0)

    OPENAI_API_KEY: SecretStr = Field(default=SecretStr(""))
    OPENAI_BASE_URL: str | None = Field(default=None)
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    OPENAI_MAX_TOKENS: int = Field(default=4096)
    OPENAI_TIMEOUT_SECONDS: float = Field(default=120.0)

    PDFTOPPM_PATH: str = Field(default="pdftoppm")
    RASTERIZE_DPI: int = Field(default=150)
    RASTERIZE_TIMEOUT_SECONDS: float | None = Field(default=None)

    EXTRACT_CONCURRENCY: int = Field(default=1, ge=1)

    @property
    def source_pdf_path(self) -> Path:
        return self.SOURCE_PDF.expanduser().resolve()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
