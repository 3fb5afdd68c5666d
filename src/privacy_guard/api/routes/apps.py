"""App record endpoints.

Routes mounted at: /api/apps
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, HTTPException, Query

from privacy_guard.api.deps import ServiceDep
from privacy_guard.api.schemas import AppCreate, AppListResponse, AppResponse
from privacy_guard.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from privacy_guard.exceptions import RecordNotFound

router = APIRouter()


@router.get("")
async def list_apps(
    service: ServiceDep,
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    skip: int = Query(default=0, ge=0),
) -> AppListResponse:
    apps = service.store.list_apps(limit=limit, skip=skip)
    return AppListResponse(
        apps=[AppResponse.from_record(app) for app in apps],
        total=service.store.count_apps(),
        limit=limit,
        skip=skip,
    )


@router.get("/{app_id}")
async def get_app(app_id: str, service: ServiceDep) -> AppResponse:
    try:
        return AppResponse.from_record(service.store.get_app(app_id))
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("", status_code=201)
async def create_app(body: AppCreate, service: ServiceDep) -> AppResponse:
    """Register an app. A changed app is registered as a new record."""
    app = service.store.create_app(
        name=body.name,
        attributes=body.attributes,
        purposes=body.purposes,
        retention_seconds=body.retention_seconds,
    )
    return AppResponse.from_record(app)
