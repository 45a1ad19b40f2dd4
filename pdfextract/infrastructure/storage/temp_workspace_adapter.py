"""Temporary-directory workspace adapter implementing WorkspacePort."""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pdfextract.domain.pipeline.constants import WORKSPACE_PREFIX
from pdfextract.domain.pipeline.errors import WorkspaceError
from pdfextract.domain.ports.workspace_port import WorkspacePort

logger = logging.getLogger(__name__)


class TempWorkspaceAdapter(WorkspacePort):
    """Creates ``<root>/pdf-process-XXXXXXXX`` per run and removes it afterwards.

    ``root`` defaults to the system temp directory. With ``keep=True`` the
    directory is left on disk and its path is logged.
    """

    def __init__(self, root: Path | None = None, *, keep: bool = False) -> None:
        self._root = root
        self._keep = keep

    @contextmanager
    def open(self, run_id: str) -> Iterator[Path]:
        try:
            if self._root is not None:
                self._root.mkdir(parents=True, exist_ok=True)
            work_dir = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=self._root))
        except OSError as exc:
            raise WorkspaceError(f"Failed to create workspace: {exc}") from exc

        logger.debug("workspace_created", extra={"run_id": run_id, "work_dir": str(work_dir)})
        try:
            yield work_dir
        finally:
            if self._keep:
                logger.info("workspace_kept", extra={"run_id": run_id, "work_dir": str(work_dir)})
            else:
                # Cleanup must not mask the error that ended the run
                shutil.rmtree(work_dir, ignore_errors=True)
                if work_dir.exists():
                    logger.warning("workspace_cleanup_incomplete", extra={"run_id": run_id, "work_dir": str(work_dir)})
                else:
                    logger.info("workspace_removed", extra={"run_id": run_id, "work_dir": str(work_dir)})
