"""RasterizerPort protocol for turning PDF pages into images."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pdfextract.domain.pipeline.models import PageImage


class RasterizerPort(Protocol):  # pragma: no cover - contract
    """Abstraction over the rasterizer used by the pipeline.

    Implementations write one image per page into ``out_dir`` and return them
    sorted by page number.
    """

    async def rasterize(self, pdf_path: Path, out_dir: Path) -> list[PageImage]: ...
