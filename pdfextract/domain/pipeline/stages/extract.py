from __future__ import annotations

import asyncio
import logging

from pdfextract.domain.pipeline.errors import ExtractionError, StageError
from pdfextract.domain.pipeline.models import ExtractionResult, PageImage, PageText, RunContext
from pdfextract.domain.ports.vision_port import VisionPort

logger = logging.getLogger(__name__)


async def _extract_page(image: PageImage, *, vision: VisionPort, run_id: str) -> PageText:
    try:
        image_bytes = image.path.read_bytes()
    except OSError as exc:
        raise ExtractionError(f"Failed to read page image {image.path.name}: {exc}") from exc
    try:
        text = await vision.extract_text(image_bytes)
    except ExtractionError:
        raise
    except Exception as exc:
        raise ExtractionError(f"Text extraction failed for {image.page_id}: {exc}") from exc
    logger.info("page_extracted", extra={"run_id": run_id, "page_id": image.page_id})
    return PageText(page_number=image.page_number, page_id=image.page_id, text=text)


async def run_extract(context: RunContext, *, vision: VisionPort, concurrency: int = 1) -> RunContext:
    """Send every page image to the vision model and accumulate the text.

    With concurrency == 1 pages are processed strictly one after another.
    Larger values fan out at most ``concurrency`` requests at a time; results
    are always reassembled in page order. The first failure aborts the stage
    and no partial result is attached.
    """
    images = context.artifacts.get("page_images")
    if not isinstance(images, list):
        raise StageError("Page images missing from context for extract stage")

    pages: list[PageText] = []
    if concurrency <= 1:
        for image in images:
            pages.append(await _extract_page(image, vision=vision, run_id=context.run_id))
    else:
        semaphore = asyncio.Semaphore(concurrency)

        async def _bounded(image: PageImage) -> PageText:
            async with semaphore:
                return await _extract_page(image, vision=vision, run_id=context.run_id)

        tasks = [asyncio.create_task(_bounded(image)) for image in images]
        try:
            pages = list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        pages.sort(key=lambda p: p.page_number)

    context.artifacts["extraction_result"] = ExtractionResult(ranges=context.ranges, pages=pages)
    return context
