"""Audit logging for compliance decisions."""

from privacy_guard.telemetry.audit.decision_logger import create_decision_logger

__all__ = [
    "create_decision_logger",
]
