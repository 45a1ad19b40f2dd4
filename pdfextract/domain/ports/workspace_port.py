"""WorkspacePort protocol for per-run scratch directories."""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol


class WorkspacePort(Protocol):  # pragma: no cover - contract
    """Abstraction over the disposable directory that holds a run's files.

    ``open`` yields a fresh, uniquely named directory and releases it when
    the ``with`` block exits, whether it succeeded or raised.
    """

    def open(self, run_id: str) -> AbstractContextManager[Path]: ...
