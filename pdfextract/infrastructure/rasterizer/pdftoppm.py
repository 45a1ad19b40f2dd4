"""Poppler ``pdftoppm`` adapter implementing RasterizerPort."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import shutil
from pathlib import Path

from pdfextract.domain.pipeline.constants import (
    DEFAULT_DPI,
    PAGE_IMAGE_PATTERN,
    PAGE_IMAGE_PREFIX,
)
from pdfextract.domain.pipeline.errors import RasterizeError
from pdfextract.domain.pipeline.models import PageImage
from pdfextract.domain.ports.rasterizer_port import RasterizerPort

logger = logging.getLogger(__name__)

STDERR_MAX_CHARS = 2000


def collect_page_images(out_dir: Path) -> list[PageImage]:
    """List ``page-<n>.jpg`` files in ``out_dir`` ordered by the numeric page index.

    Sorting by the parsed number keeps page-10 after page-9 even when the
    rasterizer did not zero-pad the index.
    """
    images: list[PageImage] = []
    for path in out_dir.iterdir():
        match = PAGE_IMAGE_PATTERN.match(path.name)
        if match is None or not path.is_file():
            continue
        images.append(PageImage(page_number=int(match.group(1)), page_id=path.stem, path=path))
    images.sort(key=lambda img: img.page_number)
    return images


class PdftoppmRasterizer(RasterizerPort):
    """Runs ``pdftoppm -jpeg -r <dpi> <pdf> <out_dir>/page`` as a subprocess."""

    def __init__(
        self,
        executable: str = "pdftoppm",
        *,
        dpi: int = DEFAULT_DPI,
        timeout_seconds: float | None = None,
    ) -> None:
        self._executable = executable
        self._dpi = dpi
        self._timeout_seconds = timeout_seconds

    def is_available(self) -> bool:
        return shutil.which(self._executable) is not None

    def build_command(self, pdf_path: Path, out_dir: Path) -> list[str]:
        return [
            self._executable,
            "-jpeg",
            "-r",
            str(self._dpi),
            str(pdf_path),
            str(out_dir / PAGE_IMAGE_PREFIX),
        ]

    async def rasterize(self, pdf_path: Path, out_dir: Path) -> list[PageImage]:
        cmd = self.build_command(pdf_path, out_dir)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise RasterizeError(f"Failed to start {self._executable}: {exc}") from exc

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout_seconds)
        except asyncio.TimeoutError as exc:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            raise RasterizeError(f"{self._executable} timed out after {self._timeout_seconds}s") from exc

        if proc.returncode != 0:
            err = (stderr or b"").decode("utf-8", errors="replace").strip()[:STDERR_MAX_CHARS]
            raise RasterizeError(f"{self._executable} exited with code {proc.returncode}: {err}")

        images = collect_page_images(out_dir)
        logger.debug("pdftoppm_completed", extra={"pages": len(images), "path": str(pdf_path)})
        return images
