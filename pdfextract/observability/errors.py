from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse


ERROR_REGISTRY: dict[str, dict[str, Any]] = {
    "MISSING_RANGES": {
        "status": 400,
        "message": 'Please provide page ranges using the "ranges" query parameter.',
    },
    "PROCESSING_FAILED": {
        "status": 500,
        "message": "Failed to process PDF.",
    },
}


def to_error_response(code: str, *, details: str | None = None, status: int | None = None) -> JSONResponse:
    """Build the ``{"error": ..., "details": ...}`` envelope for a registered error code."""
    meta = ERROR_REGISTRY.get(code, {"status": 500, "message": code})
    status_code = int(status or meta.get("status", 500))
    content: dict[str, str] = {"error": str(meta.get("message", code))}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)
