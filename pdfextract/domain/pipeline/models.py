"""Domain models for the extraction pipeline.

All of them are request-scoped; nothing here outlives a single run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from pdfextract.domain.pipeline.constants import PAGE_HEADER_TEMPLATE


class PageImage(BaseModel):
    """One rasterized page on disk."""

    page_number: int
    page_id: str
    path: Path


class PageText(BaseModel):
    """Text returned by the vision model for a single page image."""

    page_number: int
    page_id: str
    text: str

    def render(self) -> str:
        return PAGE_HEADER_TEMPLATE.format(page_id=self.page_id, text=self.text)


class ExtractionResult(BaseModel):
    """Accumulated extraction output, one section per page in page order."""

    ranges: str
    pages: list[PageText] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(p.render() for p in self.pages)


class RunContext(BaseModel):
    """Context flowing between stages during a pipeline run."""

    run_id: str
    ranges: str
    work_dir: Path | None = None
    artifacts: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict)
