"""System (operational) logging."""

from privacy_guard.telemetry.system.system_logger import (
    configure_system_logger,
    get_system_logger,
)

__all__ = [
    "configure_system_logger",
    "get_system_logger",
]
