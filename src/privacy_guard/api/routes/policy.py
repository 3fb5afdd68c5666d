"""Policy endpoint.

Routes mounted at: /api/policy

Read-only: the trees are fixed for the lifetime of the service.
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter

from privacy_guard.api.deps import ServiceDep
from privacy_guard.api.schemas import PolicyResponse, nodes_of

router = APIRouter()


@router.get("")
async def get_policy(service: ServiceDep) -> PolicyResponse:
    """Both taxonomies with their computed nested-set intervals."""
    return PolicyResponse(
        policy_version=service.policy_version,
        attributes_count=len(service.attributes),
        purposes_count=len(service.purposes),
        attributes=nodes_of(service.attributes),
        purposes=nodes_of(service.purposes),
    )
