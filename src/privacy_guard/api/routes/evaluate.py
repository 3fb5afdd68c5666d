"""Compliance evaluation endpoint.

Routes mounted at: /api/evaluate

Error mapping (all fail closed, none of them is a grant):
- RecordNotFound -> 404
- UnknownPolicyNode -> 422, detail carries result "deny"
- PolicyEvaluationFailure -> 500, detail carries result "deny"
- CacheUnavailable -> 503
"""

from __future__ import annotations

__all__ = ["router"]

import time

from fastapi import APIRouter, HTTPException

from privacy_guard.api.deps import ServiceDep
from privacy_guard.api.schemas import EvaluateRequest, EvaluateResponse
from privacy_guard.exceptions import (
    CacheUnavailable,
    PolicyEvaluationFailure,
    RecordNotFound,
    UnknownPolicyNode,
)
from privacy_guard.utils.logging import format_iso8601

router = APIRouter()


@router.post("")
async def evaluate(body: EvaluateRequest, service: ServiceDep) -> EvaluateResponse:
    """Decide whether an app may process a user's data.

    Raises:
        HTTPException: 404 if the app or user does not exist.
        HTTPException: 422 if a record references an unknown policy node.
        HTTPException: 500 if evaluation failed unexpectedly.
        HTTPException: 503 if the decision cache is unavailable.
    """
    try:
        outcome = service.evaluate(body.app_id, body.user_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except UnknownPolicyNode as e:
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(e),
                "result": "deny",
                "node_id": e.node_id,
                "kind": e.kind,
            },
        ) from e
    except PolicyEvaluationFailure as e:
        raise HTTPException(
            status_code=500,
            detail={"message": str(e), "result": "deny"},
        ) from e
    except CacheUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Decision cache unavailable: {e}") from e

    return EvaluateResponse(
        result=outcome.result.value,
        cache_hit=outcome.cache_hit,
        latency_ms=round(outcome.latency_ms, 3),
        fingerprint=outcome.fingerprint,
        service=service.service_id,
        timestamp=format_iso8601(time.time()),
    )
