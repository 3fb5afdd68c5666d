"""Decision cache API schemas."""

from __future__ import annotations

__all__ = [
    "CacheStatsResponse",
    "ClearCacheResponse",
]

from pydantic import BaseModel

from privacy_guard.cache.store import CacheStats


class CacheStatsResponse(CacheStats):
    """Cache statistics plus the answering service.

    Counts include expired entries (lazy expiry).
    """

    service: str


class ClearCacheResponse(BaseModel):
    message: str
    deleted_count: int
    service: str
