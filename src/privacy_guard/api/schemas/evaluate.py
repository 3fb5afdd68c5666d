"""Evaluate API schemas."""

from __future__ import annotations

__all__ = [
    "EvaluateRequest",
    "EvaluateResponse",
]

from typing import Literal

from pydantic import BaseModel, Field


class EvaluateRequest(BaseModel):
    """Request body for POST /api/evaluate."""

    app_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)


class EvaluateResponse(BaseModel):
    """Compliance decision for one (app, user) pair."""

    result: Literal["grant", "deny"]
    cache_hit: bool
    latency_ms: float
    fingerprint: str
    service: str
    timestamp: str
