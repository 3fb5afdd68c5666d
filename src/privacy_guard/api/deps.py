"""Shared dependencies for API routes.

FastAPI convention: deps.py contains reusable request dependencies.
All route files should import dependencies from here rather than
defining their own helper functions.

Usage with Annotated:
    from privacy_guard.api.deps import ServiceDep

    @router.get("/stats")
    async def get_stats(service: ServiceDep) -> CacheStatsResponse:
        ...
"""

from __future__ import annotations

__all__ = [
    "get_service",
    "ServiceDep",
]

from typing import Annotated, cast

from fastapi import Depends, HTTPException, Request

from privacy_guard.service import PrivacyGuardService


def get_service(request: Request) -> PrivacyGuardService:
    """Get PrivacyGuardService from app.state.

    Raises:
        HTTPException: 503 if the service is not available.
    """
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Service not available. It may still be starting.",
        )
    return cast(PrivacyGuardService, service)


# Clean route signatures:
#     async def endpoint(service: ServiceDep) -> Response:
ServiceDep = Annotated[PrivacyGuardService, Depends(get_service)]
