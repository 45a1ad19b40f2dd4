"""VisionPort protocol for multimodal text extraction."""

from __future__ import annotations

from typing import Protocol


class VisionPort(Protocol):  # pragma: no cover - contract
    """Abstraction over the vision-language model service."""

    async def extract_text(self, image_bytes: bytes) -> str: ...
