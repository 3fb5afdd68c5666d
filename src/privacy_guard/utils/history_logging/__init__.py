"""History logging for versioned configuration files."""

from privacy_guard.utils.history_logging.policy_logger import (
    log_policy_created,
    log_policy_loaded,
    log_policy_validation_failed,
)

__all__ = [
    "log_policy_created",
    "log_policy_loaded",
    "log_policy_validation_failed",
]
