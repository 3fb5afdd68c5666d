"""Policy loader - load, save and compile the privacy policy.

This module provides functions to load policy.json from the config directory,
save it atomically, and turn it into the two nested-set trees the evaluator
works on.

Features:
- Secure file permissions (0o700 for directory, 0o600 for file)
- Detailed validation error messages
- SHA256 checksum for detecting manual edits
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from privacy_guard.constants import POLICY_FILE_NAME
from privacy_guard.pdp.policy import PrivacyPolicy, create_default_policy
from privacy_guard.pdp.taxonomy import PolicyTree
from privacy_guard.utils.file_helpers import (
    compute_file_checksum,
    get_app_dir,
    load_validated_json,
    require_file_exists,
    set_secure_permissions,
)

__all__ = [
    "build_policy_trees",
    "compute_policy_checksum",
    "create_default_policy_file",
    "get_policy_dir",
    "get_policy_path",
    "load_policy",
    "policy_exists",
    "save_policy",
]


def get_policy_dir() -> Path:
    """Get the directory holding policy.json (same as the config file)."""
    return get_app_dir()


def get_policy_path() -> Path:
    """Get the full path to the default policy file."""
    return get_policy_dir() / POLICY_FILE_NAME


def compute_policy_checksum(policy_path: Path) -> str:
    """Compute SHA256 checksum of policy file content.

    Used to detect edits made outside of privacy-guard.

    Returns:
        str: Checksum in format "sha256:<hex_digest>".
    """
    return compute_file_checksum(policy_path)


def load_policy(path: Path | None = None) -> PrivacyPolicy:
    """Load the privacy policy from file.

    Only the schema is validated here. Tree consistency is checked by
    build_policy_trees().

    Args:
        path: Path to policy.json. If None, uses default location.

    Returns:
        PrivacyPolicy loaded from file.

    Raises:
        FileNotFoundError: If policy file does not exist.
        ValueError: If policy file contains invalid JSON or schema.
    """
    policy_path = path or get_policy_path()
    require_file_exists(policy_path, file_type="policy")
    return load_validated_json(
        policy_path,
        PrivacyPolicy,
        file_type="policy",
        recovery_hint="Edit the policy file or run 'privacy-guard init --force' to recreate.",
    )


def save_policy(policy: PrivacyPolicy, path: Path | None = None) -> None:
    """Save the policy to file atomically.

    Writes to a temp file in the same directory, then renames over the
    target. Sets 0o700 on the directory and 0o600 on the file.

    Args:
        policy: PrivacyPolicy to save.
        path: Path to save to. If None, uses default location.
    """
    policy_path = path or get_policy_path()

    policy_path.parent.mkdir(parents=True, exist_ok=True)
    set_secure_permissions(policy_path.parent, is_directory=True)

    data = policy.model_dump(mode="json", exclude_none=True)
    content = json.dumps(data, indent=2) + "\n"

    fd, temp_path = tempfile.mkstemp(
        dir=policy_path.parent,
        prefix=".policy_",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        os.chmod(temp_path, 0o600)
        os.replace(temp_path, policy_path)

    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def policy_exists(path: Path | None = None) -> bool:
    """Check if the policy file exists."""
    policy_path = path or get_policy_path()
    return policy_path.exists()


def create_default_policy_file(path: Path | None = None) -> PrivacyPolicy:
    """Create a default policy file if it doesn't exist.

    Raises:
        FileExistsError: If policy file already exists.
    """
    policy_path = path or get_policy_path()

    if policy_path.exists():
        raise FileExistsError(f"Policy file already exists: {policy_path}")

    policy = create_default_policy()
    save_policy(policy, policy_path)
    return policy


def build_policy_trees(policy: PrivacyPolicy) -> tuple[PolicyTree, PolicyTree]:
    """Compile a policy into (attribute tree, purpose tree).

    Raises:
        MalformedTaxonomy: If either taxonomy is inconsistent.
    """
    attributes = PolicyTree.from_entries(policy.attributes, kind="attribute")
    purposes = PolicyTree.from_entries(policy.purposes, kind="purpose")
    return attributes, purposes
