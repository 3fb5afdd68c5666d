"""Logging utilities for privacy-guard."""

from privacy_guard.utils.logging.logger_setup import (
    ISO8601Formatter,
    format_iso8601,
    setup_jsonl_logger,
    setup_stream_logger,
)

__all__ = [
    "ISO8601Formatter",
    "format_iso8601",
    "setup_jsonl_logger",
    "setup_stream_logger",
]
