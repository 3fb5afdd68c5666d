"""Decision audit event model."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DecisionEvent(BaseModel):
    """One compliance decision log entry (audit/decisions.jsonl).

    Records the outcome of a single evaluation request, whether it was served
    from cache, and timing. Records carry ids and the fingerprint only, never
    preference contents.
    """

    # --- core ---
    time: str | None = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )
    event: Literal["compliance_decision"] = "compliance_decision"

    # --- decision outcome ---
    decision: Literal["grant", "deny", "error"]
    cache_hit: bool

    # --- context summary ---
    user_id: str
    app_id: str
    fingerprint: str

    # --- policy ---
    policy_version: str

    # --- performance ---
    eval_ms: float | None = None  # Evaluator time (misses only)
    total_ms: float

    # --- failures ---
    error_type: str | None = None
    cache_degraded: bool = False  # Cache lookup or store failed during this request

    model_config = ConfigDict(extra="forbid")
