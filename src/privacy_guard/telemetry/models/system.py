"""System event models (system/policy_history.jsonl)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PolicyHistoryEvent(BaseModel):
    """One policy lifecycle entry.

    Versions increase ("v1", "v2", ...) whenever the policy file content
    changes: on creation over an existing history and when a load sees a
    checksum different from the last recorded one.
    """

    time: str | None = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )
    event: Literal[
        "policy_created",
        "policy_loaded",
        "manual_change_detected",
        "policy_validation_failed",
    ]
    message: str | None = None

    policy_version: str
    previous_version: str | None = None
    change_type: Literal["initial_creation", "startup_load", "manual_edit", "validation_error"]
    component: str
    policy_path: str
    source: str
    checksum: str

    # Counts instead of full snapshots: taxonomies can be large
    attributes_count: int | None = None
    purposes_count: int | None = None

    error_type: str | None = None
    error_message: str | None = None

    model_config = ConfigDict(extra="forbid")
