"""Decision logging for compliance evaluations.

This module provides logging for compliance decisions (GRANT, DENY, error).
Logs are written to <log_dir>/privacy_guard_logs/audit/decisions.jsonl.

Decision logs are ALWAYS enabled (not controlled by log_level).
"""

import logging
from pathlib import Path

from privacy_guard.utils.logging.logger_setup import setup_jsonl_logger

DECISION_LOGGER_NAME = "privacy-guard.audit.decisions"


def create_decision_logger(log_path: Path) -> logging.Logger:
    """Create logger for decision events.

    Args:
        log_path: Path to decisions.jsonl file.

    Returns:
        Configured logger instance.
    """
    return setup_jsonl_logger(DECISION_LOGGER_NAME, log_path, log_level=logging.INFO)
