"""Domain pipeline orchestrator.

Runs split -> materialize -> rasterize -> extract inside a per-run workspace
that is released on every exit path.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from pdfextract.domain.pipeline.models import ExtractionResult, RunContext
from pdfextract.domain.pipeline.stages.acquire import run_acquire
from pdfextract.domain.pipeline.stages.extract import run_extract
from pdfextract.domain.pipeline.stages.materialize import run_materialize
from pdfextract.domain.pipeline.stages.rasterize import run_rasterize
from pdfextract.domain.pipeline.stages.split import run_split
from pdfextract.domain.ports.rasterizer_port import RasterizerPort
from pdfextract.domain.ports.splitter_port import SplitterPort
from pdfextract.domain.ports.vision_port import VisionPort
from pdfextract.domain.ports.workspace_port import WorkspacePort
from pdfextract.utils.timing import StageTimers

logger = logging.getLogger(__name__)


class TextExtractionPipeline:
    """Page-range text extraction over a fixed source document.

    All collaborators and configuration come in through the constructor so
    the pipeline never reads process state on its own.
    """

    def __init__(
        self,
        *,
        splitter: SplitterPort,
        rasterizer: RasterizerPort,
        vision: VisionPort,
        workspace: WorkspacePort,
        source_path: Path,
        concurrency: int = 1,
    ) -> None:
        self._splitter = splitter
        self._rasterizer = rasterizer
        self._vision = vision
        self._workspace = workspace
        self._source_path = source_path
        self._concurrency = max(1, concurrency)

    @property
    def source_path(self) -> Path:
        return self._source_path

    @property
    def rasterizer(self) -> RasterizerPort:
        return self._rasterizer

    async def aclose(self) -> None:
        """Release collaborators that hold connections (those exposing ``aclose``)."""
        for collaborator in (self._splitter, self._rasterizer, self._vision):
            close = getattr(collaborator, "aclose", None)
            if callable(close):
                await close()

    async def run(self, ranges: str, *, run_id: str | None = None, timers: StageTimers | None = None) -> ExtractionResult:
        timers = timers or StageTimers()
        ctx = run_acquire(RunContext(run_id=run_id or uuid.uuid4().hex, ranges=ranges))

        with timers.timer("split"):
            ctx = await run_split(ctx, splitter=self._splitter, source_path=self._source_path)
        logger.info(
            "split_completed",
            extra={"run_id": ctx.run_id, "ranges": ctx.ranges, "split_bytes": ctx.meta.get("split_bytes")},
        )

        with self._workspace.open(ctx.run_id) as work_dir:
            ctx.work_dir = work_dir
            with timers.timer("materialize"):
                ctx = run_materialize(ctx)
            with timers.timer("rasterize"):
                ctx = await run_rasterize(ctx, rasterizer=self._rasterizer)
            logger.info("rasterize_completed", extra={"run_id": ctx.run_id, "pages": ctx.meta.get("pages")})
            with timers.timer("extract"):
                ctx = await run_extract(ctx, vision=self._vision, concurrency=self._concurrency)

        result: ExtractionResult = ctx.artifacts["extraction_result"]
        logger.info("extraction_completed", extra={"run_id": ctx.run_id, "pages": len(result.pages)})
        return result
