"""Service wiring - the caller-facing decision API.

PrivacyGuardService ties together the record store, the policy trees and the
evaluation coordinator. The HTTP API and the benchmark both go through it.

create_service() builds one from AppConfig:

    1. Point the system logger at <log_dir>/privacy_guard_logs/system/system.jsonl
    2. Load policy.json and build both trees (MalformedTaxonomy is fatal)
    3. Record the load in policy_history.jsonl (detects manual edits)
    4. Open audit/decisions.jsonl and build the coordinator
"""

from __future__ import annotations

__all__ = [
    "PrivacyGuardService",
    "create_service",
]

import logging
from pathlib import Path

from privacy_guard.cache.store import CacheStats, DecisionCache, InMemoryDecisionCache
from privacy_guard.config import AppConfig
from privacy_guard.exceptions import MalformedTaxonomy
from privacy_guard.pdp.engine import ComplianceEvaluator
from privacy_guard.pdp.policy import UserPrivacyPreference, UserRecord
from privacy_guard.pdp.taxonomy import PolicyTree
from privacy_guard.pep.coordinator import DecisionOutcome, EvaluationCoordinator
from privacy_guard.store import RecordStore
from privacy_guard.telemetry.audit.decision_logger import create_decision_logger
from privacy_guard.telemetry.system.system_logger import configure_system_logger, get_system_logger
from privacy_guard.utils.history_logging import log_policy_loaded, log_policy_validation_failed
from privacy_guard.utils.policy import build_policy_trees, get_policy_path, load_policy


class PrivacyGuardService:
    """Record lookups plus cached compliance decisions.

    Attributes:
        store: App and user records.
        attributes: Attribute tree.
        purposes: Purpose tree.
        service_id: Name reported in API responses.
        policy_version: Version from policy_history.jsonl, if known.
    """

    def __init__(
        self,
        store: RecordStore,
        attributes: PolicyTree,
        purposes: PolicyTree,
        cache: DecisionCache | None = None,
        decision_logger: logging.Logger | None = None,
        service_id: str = "default",
        policy_version: str | None = None,
    ) -> None:
        self.store = store
        self.attributes = attributes
        self.purposes = purposes
        self.service_id = service_id
        self.policy_version = policy_version
        self.coordinator = EvaluationCoordinator(
            ComplianceEvaluator(attributes, purposes),
            cache if cache is not None else InMemoryDecisionCache(),
            decision_logger=decision_logger,
            policy_version=policy_version,
        )

    def evaluate(self, app_id: str, user_id: str) -> DecisionOutcome:
        """Decide whether app_id may process user_id's data.

        Raises:
            RecordNotFound: If the app or user does not exist.
            UnknownPolicyNode: If a record references an unknown policy id.
            PolicyEvaluationFailure: If evaluation fails unexpectedly.
        """
        app = self.store.get_app(app_id)
        user = self.store.get_user(user_id)
        return self.coordinator.decide(app, user.id, user.preference)

    def update_preference(self, user_id: str, preference: UserPrivacyPreference) -> UserRecord:
        """Replace a user's preference and drop their cached decisions.

        Raises:
            RecordNotFound: If the user does not exist.
            ValueError: If the preference belongs to another user.
            CacheUnavailable: If the cache could not be invalidated.
        """
        user = self.store.update_preference(user_id, preference)
        self.coordinator.on_preference_changed(user_id)
        return user

    def clear_cache(self) -> int:
        """Drop every cached decision. Returns the number removed."""
        return self.coordinator.clear_cache()

    def cache_stats(self) -> CacheStats:
        return self.coordinator.cache.stats()


def create_service(
    config: AppConfig,
    store: RecordStore | None = None,
    cache: DecisionCache | None = None,
) -> PrivacyGuardService:
    """Build a PrivacyGuardService from configuration.

    Args:
        config: Loaded application configuration.
        store: Record store, a new empty one if None.
        cache: Decision cache, a new in-memory one if None.

    Returns:
        Ready-to-use service.

    Raises:
        FileNotFoundError: If the policy file does not exist.
        ValueError: If the policy file is invalid.
        MalformedTaxonomy: If a taxonomy cannot be built.
    """
    log_level = logging.DEBUG if config.logging.log_level == "DEBUG" else logging.INFO
    configure_system_logger(config.logging.system_log_path, log_level)
    system_logger = get_system_logger()

    policy_path = Path(config.policy_path).expanduser() if config.policy_path else get_policy_path()
    history_path = config.logging.policy_history_path

    try:
        policy = load_policy(policy_path)
        attributes, purposes = build_policy_trees(policy)
    except (ValueError, MalformedTaxonomy) as e:
        log_policy_validation_failed(history_path, policy_path, type(e).__name__, str(e))
        system_logger.error(
            {
                "event": "policy_load_failed",
                "policy_path": str(policy_path),
                "error_type": type(e).__name__,
                "error_message": str(e),
            }
        )
        raise

    policy_version, manual_change = log_policy_loaded(history_path, policy_path, policy)

    service = PrivacyGuardService(
        store if store is not None else RecordStore(),
        attributes,
        purposes,
        cache=cache,
        decision_logger=create_decision_logger(config.logging.decisions_log_path),
        service_id=config.effective_service_id(),
        policy_version=policy_version,
    )

    system_logger.info(
        {
            "event": "service_started",
            "service": service.service_id,
            "policy_version": policy_version,
            "manual_policy_change": manual_change,
            "attributes_count": len(attributes),
            "purposes_count": len(purposes),
        }
    )
    return service
