"""File helpers shared by config, policy and history logging.

- OS config directory lookup
- Secure permissions (0o700 directories, 0o600 files)
- SHA-256 file checksums ("sha256:<hex>")
- JSON loading with pydantic validation and readable errors
- Version bookkeeping for *_history.jsonl files
"""

from __future__ import annotations

__all__ = [
    "VersionInfo",
    "compute_file_checksum",
    "get_app_dir",
    "get_history_logger",
    "get_last_version_info",
    "get_next_version",
    "load_validated_json",
    "require_file_exists",
    "set_secure_permissions",
]

import hashlib
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from privacy_guard.constants import CONFIG_DIR, INITIAL_VERSION
from privacy_guard.utils.logging.logger_setup import setup_jsonl_logger

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_app_dir() -> Path:
    """Get the OS-appropriate config directory.

    - macOS: ~/Library/Application Support/privacy-guard
    - Linux: ~/.config/privacy-guard (XDG compliant)
    - Windows: C:\\Users\\<user>\\AppData\\Local\\privacy-guard

    Returns:
        Path to the config directory (may not exist yet).
    """
    return Path(CONFIG_DIR)


def set_secure_permissions(path: Path, *, is_directory: bool) -> None:
    """Restrict a path to the current user (0o700 dirs, 0o600 files).

    Permission errors are ignored on platforms without POSIX modes.
    """
    try:
        os.chmod(path, 0o700 if is_directory else 0o600)
    except (NotImplementedError, PermissionError):
        pass


def compute_file_checksum(path: Path) -> str:
    """Compute SHA256 checksum of file content.

    Returns:
        str: Checksum in format "sha256:<hex_digest>".

    Raises:
        FileNotFoundError: If the file doesn't exist.
        OSError: If the file cannot be read.
    """
    digest = hashlib.sha256(path.read_bytes()).hexdigest()
    return f"sha256:{digest}"


def require_file_exists(path: Path, *, file_type: str) -> None:
    """Raise FileNotFoundError with a helpful message if path is missing."""
    if not path.exists():
        raise FileNotFoundError(
            f"{file_type.capitalize()} file not found at {path}.\n"
            "Run 'privacy-guard init' to create it."
        )


def load_validated_json(
    path: Path,
    model: type[ModelT],
    *,
    file_type: str,
    recovery_hint: str,
    encoding: str = "utf-8",
) -> ModelT:
    """Load a JSON file and validate it against a pydantic model.

    Args:
        path: File to load.
        model: Model class to validate with.
        file_type: Name used in error messages ("config", "policy").
        recovery_hint: Appended to validation errors.
        encoding: File encoding.

    Returns:
        Validated model instance.

    Raises:
        ValueError: If the file is not valid JSON or fails validation.
    """
    try:
        with path.open(encoding=encoding) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {path}: {e}") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")

        raise ValueError(
            f"Invalid {file_type} configuration in {path}:\n" + "\n".join(errors) + f"\n\n{recovery_hint}"
        ) from e


# =============================================================================
# History Versioning
# =============================================================================


@dataclass(frozen=True)
class VersionInfo:
    """Last recorded version and checksum in a history file."""

    version: str | None
    checksum: str | None


def get_last_version_info(history_path: Path, version_field: str) -> VersionInfo:
    """Read the last version/checksum pair from a JSONL history file.

    Unreadable or malformed lines are skipped.

    Returns:
        VersionInfo; both fields None if there is no history.
    """
    if not history_path.exists():
        return VersionInfo(version=None, checksum=None)

    version: str | None = None
    checksum: str | None = None
    with history_path.open(encoding="utf-8") as f:
        for line in f:
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(record, dict) or version_field not in record:
                continue
            if record.get("event") == "policy_validation_failed":
                continue
            version = record[version_field]
            checksum = record.get("checksum", checksum)

    return VersionInfo(version=version, checksum=checksum)


def get_next_version(version: str | None) -> str:
    """Increment a "vN" version string ("v3" -> "v4"); None -> initial."""
    if not version:
        return INITIAL_VERSION
    try:
        return f"v{int(version.lstrip('v')) + 1}"
    except ValueError:
        return INITIAL_VERSION


def get_history_logger(history_path: Path, name: str) -> logging.Logger:
    """Get a JSONL logger for a history file."""
    return setup_jsonl_logger(name, history_path, logging.INFO)
