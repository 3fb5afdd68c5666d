"""Policy file utilities."""

from privacy_guard.utils.policy.policy_helpers import (
    build_policy_trees,
    compute_policy_checksum,
    create_default_policy_file,
    get_policy_dir,
    get_policy_path,
    load_policy,
    policy_exists,
    save_policy,
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
