"""Pydantic models for log events."""

from privacy_guard.telemetry.models.decision import DecisionEvent
from privacy_guard.telemetry.models.system import PolicyHistoryEvent

__all__ = [
    "DecisionEvent",
    "PolicyHistoryEvent",
]
