"""Decision cache endpoints.

Routes mounted at: /api/cache
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, HTTPException

from privacy_guard.api.deps import ServiceDep
from privacy_guard.api.schemas import CacheStatsResponse, ClearCacheResponse
from privacy_guard.exceptions import CacheUnavailable

router = APIRouter()


@router.get("/stats")
async def get_cache_stats(service: ServiceDep) -> CacheStatsResponse:
    """Cache statistics. May include expired entries (lazy expiry).

    Raises:
        HTTPException: 503 if the cache is unavailable.
    """
    try:
        stats = service.cache_stats()
    except CacheUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Decision cache unavailable: {e}") from e
    return CacheStatsResponse(**stats.model_dump(), service=service.service_id)


@router.delete("")
async def clear_cache(service: ServiceDep) -> ClearCacheResponse:
    """Drop every cached decision.

    Raises:
        HTTPException: 503 if the cache is unavailable.
    """
    try:
        deleted = service.clear_cache()
    except CacheUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Decision cache unavailable: {e}") from e
    return ClearCacheResponse(
        message="Cache cleared",
        deleted_count=deleted,
        service=service.service_id,
    )
