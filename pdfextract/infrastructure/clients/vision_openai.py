"""OpenAI chat-completions adapter implementing VisionPort."""

from __future__ import annotations

import base64
import logging

import httpx
from openai import AsyncOpenAI

from pdfextract.domain.pipeline.constants import DEFAULT_MAX_TOKENS, EXTRACT_PROMPT
from pdfextract.domain.ports.vision_port import VisionPort

logger = logging.getLogger(__name__)


def build_image_messages(image_bytes: bytes, prompt: str = EXTRACT_PROMPT) -> list[dict]:
    """Single user turn carrying the instruction and the page as a JPEG data URL."""
    image_b64 = base64.b64encode(image_bytes).decode("utf-8")
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_b64}"}},
            ],
        }
    ]


class OpenAIVisionClient(VisionPort):
    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gpt-4o-mini",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout_seconds: float = 120.0,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url
        self._http_client = http_client
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        # Built on first use so a missing key only fails the first request, not startup.
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout_seconds,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    async def extract_text(self, image_bytes: bytes) -> str:
        response = await self._get_client().chat.completions.create(
            model=self._model,
            messages=build_image_messages(image_bytes),
            max_tokens=self._max_tokens,
        )
        if not response.choices:
            raise RuntimeError("Vision completion returned no choices")
        content = response.choices[0].message.content
        logger.debug("vision_completion", extra={"model": self._model, "usage": getattr(response, "usage", None)})
        return content or ""

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
