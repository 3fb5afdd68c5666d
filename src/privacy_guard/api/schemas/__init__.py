"""API schemas (Pydantic models) for request/response validation.

Centralized schemas for all API routes.
"""

from __future__ import annotations

# Cache schemas
from privacy_guard.api.schemas.cache import (
    CacheStatsResponse,
    ClearCacheResponse,
)

# Evaluate schemas
from privacy_guard.api.schemas.evaluate import (
    EvaluateRequest,
    EvaluateResponse,
)

# Health schemas
from privacy_guard.api.schemas.health import (
    ApiInfoResponse,
    HealthResponse,
)

# Policy schemas
from privacy_guard.api.schemas.policy import (
    PolicyNodeResponse,
    PolicyResponse,
    nodes_of,
)

# Record schemas
from privacy_guard.api.schemas.records import (
    AppCreate,
    AppListResponse,
    AppResponse,
    PreferenceBody,
    UserCreate,
    UserListResponse,
    UserResponse,
)

__all__ = [
    # Cache
    "CacheStatsResponse",
    "ClearCacheResponse",
    # Evaluate
    "EvaluateRequest",
    "EvaluateResponse",
    # Health
    "ApiInfoResponse",
    "HealthResponse",
    # Policy
    "PolicyNodeResponse",
    "PolicyResponse",
    "nodes_of",
    # Records
    "AppCreate",
    "AppListResponse",
    "AppResponse",
    "PreferenceBody",
    "UserCreate",
    "UserListResponse",
    "UserResponse",
]
