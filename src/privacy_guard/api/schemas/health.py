"""Health and info API schemas."""

from __future__ import annotations

__all__ = [
    "ApiInfoResponse",
    "HealthResponse",
]

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str


class ApiInfoResponse(BaseModel):
    """Landing page: name, version and available endpoints."""

    name: str
    version: str
    service: str
    endpoints: list[str]
