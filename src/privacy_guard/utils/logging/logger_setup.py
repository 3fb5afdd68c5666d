"""Logger setup for JSON Lines log files.

All privacy-guard loggers take dict messages:

    logger.info({"event": "cache_cleared", "deleted_count": 3})

ISO8601Formatter serializes the dict as one JSON line and prepends the
record time, so every line in every .jsonl file has the same shape:

    {"time": "2025-01-01T12:00:00.000Z", "event": "cache_cleared", ...}

Plain string messages are wrapped as {"message": "..."}.
"""

from __future__ import annotations

__all__ = [
    "ISO8601Formatter",
    "format_iso8601",
    "setup_jsonl_logger",
    "setup_stream_logger",
]

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def format_iso8601(timestamp: float) -> str:
    """Format epoch seconds as ISO 8601 UTC with milliseconds and a Z suffix."""
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ISO8601Formatter(logging.Formatter):
    """Format dict log messages as JSON Lines with an ISO 8601 UTC time."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {"time": format_iso8601(record.created)}

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        if record.levelno >= logging.WARNING:
            payload.setdefault("level", record.levelname)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_jsonl_logger(name: str, log_path: Path, log_level: int = logging.INFO) -> logging.Logger:
    """Create (or reconfigure) a logger that appends JSON Lines to a file.

    Creates the parent directory if needed. Calling again with the same name
    replaces the previous handler, so repeated setup never duplicates lines.

    Args:
        name: Logger name (e.g., "privacy-guard.audit.decisions").
        log_path: Target .jsonl file.
        log_level: Minimum level to record.

    Returns:
        Configured logger that does not propagate to the root logger.
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    _reset_handlers(logger)
    logger.setLevel(log_level)
    logger.propagate = False

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(ISO8601Formatter())
    logger.addHandler(handler)
    return logger


def setup_stream_logger(name: str, log_level: int = logging.INFO) -> logging.Logger:
    """Create (or reconfigure) a logger that writes JSON Lines to stderr."""
    logger = logging.getLogger(name)
    _reset_handlers(logger)
    logger.setLevel(log_level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ISO8601Formatter())
    logger.addHandler(handler)
    return logger
