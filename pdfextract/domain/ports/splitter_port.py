"""SplitterPort protocol for the remote document-splitting service."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class SplitterPort(Protocol):  # pragma: no cover - contract
    """Abstraction over the service that cuts a page range out of a PDF."""

    async def split(self, source_path: Path, ranges: str) -> bytes: ...
