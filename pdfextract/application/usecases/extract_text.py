"""Extract-text use-case.

Application-layer wrapper around the domain pipeline: assigns a run id,
reports timings and outcome to metrics, and returns the accumulated text.
"""

from __future__ import annotations

import logging
import uuid

from pdfextract.domain.pipeline.orchestrator import TextExtractionPipeline
from pdfextract.observability.metrics import (
    inc_pages_extracted,
    inc_pipeline_failed,
    record_pipeline_duration,
    record_stage_durations,
)
from pdfextract.utils.timing import StageTimers

logger = logging.getLogger(__name__)


async def extract_text(*, pipeline: TextExtractionPipeline, ranges: str, run_id: str | None = None) -> str:
    rid = run_id or uuid.uuid4().hex
    timers = StageTimers()
    try:
        result = await pipeline.run(ranges, run_id=rid, timers=timers)
    except Exception as exc:
        inc_pipeline_failed(type(exc).__name__)
        logger.info(
            "pipeline_aborted",
            extra={
                "run_id": rid,
                "ranges": ranges,
                "stage": timers.failed_stage,
                "stage_ms": timers.as_millis(),
                "error": str(exc),
            },
        )
        raise
    finally:
        record_stage_durations(timers.totals)
        record_pipeline_duration(timers.elapsed_seconds())

    inc_pages_extracted(len(result.pages))
    logger.info(
        "pipeline_completed",
        extra={
            "run_id": rid,
            "ranges": ranges,
            "pages": len(result.pages),
            "duration_ms": int(timers.elapsed_seconds() * 1000),
            "stage_ms": timers.as_millis(),
        },
    )
    return result.text
