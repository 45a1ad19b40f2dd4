"""Domain-level errors for the pipeline.

Mapping to HTTP is handled by the route.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base error for domain pipeline failures."""


class InvalidInputError(PipelineError):
    """Raised when the run context is missing required input (e.g. an empty page range)."""


class SplitError(PipelineError):
    """Raised when the splitting service rejects the job or the source file is unavailable."""


class WorkspaceError(PipelineError):
    """Raised when the temporary workspace cannot be created or written."""


class RasterizeError(PipelineError):
    """Raised when the rasterizer cannot be started, exits non-zero or renders nothing."""


class ExtractionError(PipelineError):
    """Raised when a vision completion request fails for any page."""


class StageError(PipelineError):
    """Raised when a stage finds the artifacts of the previous stage missing."""
