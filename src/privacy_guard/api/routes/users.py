"""User record endpoints.

Routes mounted at: /api/users

Replacing a preference drops every cached decision of that user before
the response is sent.
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, HTTPException, Query

from privacy_guard.api.deps import ServiceDep
from privacy_guard.api.schemas import PreferenceBody, UserCreate, UserListResponse, UserResponse
from privacy_guard.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from privacy_guard.exceptions import CacheUnavailable, RecordNotFound

router = APIRouter()


@router.get("")
async def list_users(
    service: ServiceDep,
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    skip: int = Query(default=0, ge=0),
) -> UserListResponse:
    users = service.store.list_users(limit=limit, skip=skip)
    return UserListResponse(
        users=[UserResponse.from_record(user) for user in users],
        total=service.store.count_users(),
        limit=limit,
        skip=skip,
    )


@router.get("/{user_id}")
async def get_user(user_id: str, service: ServiceDep) -> UserResponse:
    """Raises HTTPException 404 if the user does not exist."""
    try:
        return UserResponse.from_record(service.store.get_user(user_id))
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("", status_code=201)
async def create_user(body: UserCreate, service: ServiceDep) -> UserResponse:
    user = service.store.create_user(
        full_name=body.full_name,
        preference=body.privacy_preference.model_dump(),
    )
    return UserResponse.from_record(user)


@router.put("/{user_id}/preferences")
async def update_preferences(user_id: str, body: PreferenceBody, service: ServiceDep) -> UserResponse:
    """Replace a user's privacy preference.

    Raises:
        HTTPException: 404 if the user does not exist.
        HTTPException: 503 if cached decisions could not be invalidated.
    """
    try:
        user = service.update_preference(user_id, body.to_preference(user_id))
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except CacheUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Decision cache unavailable: {e}") from e
    return UserResponse.from_record(user)
