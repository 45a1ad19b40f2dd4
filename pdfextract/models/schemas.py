from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str


class ProcessingErrorResponse(ErrorResponse):
    details: str


class HealthResponse(BaseModel):
    status: Literal["ok"]
    service: str


class ReadyResponse(BaseModel):
    status: Literal["ok", "degraded"]
    service: str
    checks: dict[str, bool]
