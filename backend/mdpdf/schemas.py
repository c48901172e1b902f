from __future__ import annotations

from pydantic import BaseModel


class ConvertRequest(BaseModel):
    url: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    fetch_timeout_s: float
    max_fetch_bytes: int
