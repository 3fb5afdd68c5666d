"""System logger for operational events.

Writes to stderr until configure_system_logger() points it at
<log_dir>/privacy_guard_logs/system/system.jsonl.

Usage:
    _system_logger = get_system_logger()
    _system_logger.warning({"event": "cache_lookup_failed", "error": "..."})
"""

from __future__ import annotations

__all__ = [
    "SYSTEM_LOGGER_NAME",
    "configure_system_logger",
    "get_system_logger",
]

import logging
from pathlib import Path

from privacy_guard.utils.logging.logger_setup import setup_jsonl_logger, setup_stream_logger

SYSTEM_LOGGER_NAME = "privacy-guard.system"

_configured = False


def get_system_logger() -> logging.Logger:
    """Get the system logger, attaching a stderr handler on first use."""
    global _configured
    if not _configured:
        setup_stream_logger(SYSTEM_LOGGER_NAME, logging.INFO)
        _configured = True
    return logging.getLogger(SYSTEM_LOGGER_NAME)


def configure_system_logger(log_path: Path, log_level: int = logging.INFO) -> logging.Logger:
    """Redirect the system logger to a JSON Lines file.

    Args:
        log_path: Path to system.jsonl.
        log_level: Minimum level to record.

    Returns:
        The reconfigured system logger.
    """
    global _configured
    _configured = True
    return setup_jsonl_logger(SYSTEM_LOGGER_NAME, log_path, log_level)
