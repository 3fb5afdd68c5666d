"""Policy history logging.

Logs policy lifecycle events to policy_history.jsonl:
- policy_created: Written by CLI init
- policy_loaded: Loaded at service startup
- manual_change_detected: File modified outside of privacy-guard
- policy_validation_failed: Invalid JSON, schema or taxonomy
"""

from __future__ import annotations

from pathlib import Path

from privacy_guard.constants import INITIAL_VERSION
from privacy_guard.pdp.policy import PrivacyPolicy
from privacy_guard.telemetry.models.system import PolicyHistoryEvent
from privacy_guard.utils.file_helpers import (
    VersionInfo,
    get_history_logger,
    get_last_version_info,
    get_next_version,
)
from privacy_guard.utils.policy import compute_policy_checksum

__all__ = [
    "log_policy_created",
    "log_policy_loaded",
    "log_policy_validation_failed",
]

POLICY_HISTORY_LOGGER_NAME = "privacy-guard.policy.history"


def _get_last_policy_version_info(policy_history_path: Path) -> VersionInfo:
    return get_last_version_info(policy_history_path, version_field="policy_version")


def _log_policy_history_event(policy_history_path: Path, event: PolicyHistoryEvent) -> None:
    logger = get_history_logger(policy_history_path, POLICY_HISTORY_LOGGER_NAME)
    logger.info(event.model_dump(exclude={"time"}, exclude_none=True))


def log_policy_created(
    policy_history_path: Path,
    policy_path: Path,
    policy: PrivacyPolicy,
    source: str = "cli_init",
) -> str:
    """Log policy creation with versioning.

    If history already exists (init --force), the version is incremented.

    Args:
        policy_history_path: Path to policy_history.jsonl.
        policy_path: Path to the policy file (for checksum computation).
        policy: The policy that was written.
        source: Source of creation.

    Returns:
        str: The new policy version (e.g., "v1", or "v2" when overwriting).
    """
    checksum = compute_policy_checksum(policy_path)

    last_info = _get_last_policy_version_info(policy_history_path)
    if last_info.version is not None:
        new_version = get_next_version(last_info.version)
        previous_version = last_info.version
    else:
        new_version = INITIAL_VERSION
        previous_version = None

    event = PolicyHistoryEvent(
        event="policy_created",
        message="Policy created",
        policy_version=new_version,
        previous_version=previous_version,
        change_type="initial_creation",
        component="cli",
        policy_path=str(policy_path),
        source=source,
        checksum=checksum,
        attributes_count=len(policy.attributes),
        purposes_count=len(policy.purposes),
    )
    _log_policy_history_event(policy_history_path, event)
    return new_version


def log_policy_loaded(
    policy_history_path: Path,
    policy_path: Path,
    policy: PrivacyPolicy,
    component: str = "service",
    source: str = "service_startup",
) -> tuple[str, bool]:
    """Log policy loaded event, detecting manual changes.

    Compares the current checksum with the last logged one. If they differ,
    logs manual_change_detected first and bumps the version.

    Returns:
        Tuple of (current_version, manual_change_detected).
    """
    current_checksum = compute_policy_checksum(policy_path)
    last_info = _get_last_policy_version_info(policy_history_path)

    manual_change = False
    current_version = last_info.version or INITIAL_VERSION

    if last_info.checksum is not None and last_info.checksum != current_checksum:
        manual_change = True
        current_version = get_next_version(last_info.version)

        _log_policy_history_event(
            policy_history_path,
            PolicyHistoryEvent(
                event="manual_change_detected",
                message="Policy file modified outside of privacy-guard",
                policy_version=current_version,
                previous_version=last_info.version,
                change_type="manual_edit",
                component=component,
                policy_path=str(policy_path),
                source="file_change",
                checksum=current_checksum,
                attributes_count=len(policy.attributes),
                purposes_count=len(policy.purposes),
            ),
        )

    _log_policy_history_event(
        policy_history_path,
        PolicyHistoryEvent(
            event="policy_loaded",
            message="Policy loaded",
            policy_version=current_version,
            change_type="startup_load",
            component=component,
            policy_path=str(policy_path),
            source=source,
            checksum=current_checksum,
            attributes_count=len(policy.attributes),
            purposes_count=len(policy.purposes),
        ),
    )
    return current_version, manual_change


def log_policy_validation_failed(
    policy_history_path: Path,
    policy_path: Path,
    error_type: str,
    error_message: str,
    component: str = "service",
    source: str = "load_policy",
) -> None:
    """Log a policy that failed to load (bad JSON, schema or taxonomy).

    Args:
        policy_history_path: Path to policy_history.jsonl.
        policy_path: Path to the policy file.
        error_type: Exception class name (e.g., "MalformedTaxonomy").
        error_message: Human-readable error message.
        component: Component that detected the error.
        source: Source of the validation attempt.
    """
    try:
        checksum = compute_policy_checksum(policy_path)
    except OSError:
        checksum = "sha256:unknown"

    last_info = _get_last_policy_version_info(policy_history_path)

    event = PolicyHistoryEvent(
        event="policy_validation_failed",
        message=f"Policy validation failed: {error_type}",
        policy_version=last_info.version or "unknown",
        change_type="validation_error",
        component=component,
        policy_path=str(policy_path),
        source=source,
        checksum=checksum,
        error_type=error_type,
        error_message=error_message,
    )
    _log_policy_history_event(policy_history_path, event)
