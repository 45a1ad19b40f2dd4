"""
Wall-clock bookkeeping for a single extraction run.

The use-case layer creates one `StageTimers` per request and hands it to
the pipeline; the pipeline wraps each stage in `timer(name)`. Afterwards
the use-case reads per-stage totals for metrics, the overall elapsed time
for the completion log, and `failed_stage` for the abort log.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional


class StageTimers:
    """Per-stage elapsed seconds for one run, plus the run's own clock."""

    def __init__(self) -> None:
        self.totals: Dict[str, float] = {}
        self.failed_stage: Optional[str] = None
        self._started = time.perf_counter()

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        """Time the enclosed block under ``name``.

        A block that raises still counts, and the first such stage is kept
        in ``failed_stage``.
        """
        start_time = time.perf_counter()
        try:
            yield
        except BaseException:
            if self.failed_stage is None:
                self.failed_stage = name
            raise
        finally:
            self.totals[name] = self.totals.get(name, 0.0) + (time.perf_counter() - start_time)

    def elapsed_seconds(self) -> float:
        return time.perf_counter() - self._started

    def as_millis(self) -> Dict[str, int]:
        return {name: int(seconds * 1000) for name, seconds in self.totals.items()}
