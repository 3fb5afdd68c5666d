"""Health check and API info endpoints.

Routes mounted at: /health and /
"""

from __future__ import annotations

__all__ = ["router"]

import time

from fastapi import APIRouter

from privacy_guard import __version__
from privacy_guard.api.deps import ServiceDep
from privacy_guard.api.schemas import ApiInfoResponse, HealthResponse
from privacy_guard.utils.logging import format_iso8601

router = APIRouter()

ENDPOINTS = [
    "GET /health",
    "POST /api/evaluate",
    "GET /api/users",
    "GET /api/users/{user_id}",
    "POST /api/users",
    "PUT /api/users/{user_id}/preferences",
    "GET /api/apps",
    "GET /api/apps/{app_id}",
    "POST /api/apps",
    "GET /api/policy",
    "GET /api/cache/stats",
    "DELETE /api/cache",
]


@router.get("/health")
async def health(service: ServiceDep) -> HealthResponse:
    return HealthResponse(status="healthy", service=service.service_id, timestamp=format_iso8601(time.time()))


@router.get("/")
async def api_info(service: ServiceDep) -> ApiInfoResponse:
    """Describe the API and list its endpoints."""
    return ApiInfoResponse(
        name="privacy-guard",
        version=__version__,
        service=service.service_id,
        endpoints=ENDPOINTS,
    )
