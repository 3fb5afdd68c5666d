"""Evaluation coordinator - the decision path seen by callers.

Orchestrates fingerprint → cache lookup → evaluator → cache write, and
invalidates a user's cached decisions when the preference changes.
Logs every decision to audit/decisions.jsonl.

Cache failures (CacheUnavailable):
- lookup: logged, treated as a miss, evaluation continues
- store: retried once; if it still fails the fresh result is served anyway
- invalidation: propagated, stale decisions must not be trusted

Evaluation failures (UnknownPolicyNode, PolicyEvaluationFailure) are logged
as "error" decisions, never cached, and re-raised to the caller.
"""

from __future__ import annotations

__all__ = [
    "DecisionOutcome",
    "EvaluationCoordinator",
]

import logging
import time
from dataclasses import dataclass

from privacy_guard.cache.store import CacheEntry, DecisionCache
from privacy_guard.exceptions import CacheUnavailable, PrivacyGuardError
from privacy_guard.pdp.decision import Decision
from privacy_guard.pdp.engine import ComplianceEvaluator
from privacy_guard.pdp.fingerprint import fingerprint as compute_fingerprint
from privacy_guard.pdp.policy import AppRecord, UserPrivacyPreference
from privacy_guard.telemetry.models.decision import DecisionEvent
from privacy_guard.telemetry.system.system_logger import get_system_logger

_system_logger = get_system_logger()


@dataclass(frozen=True)
class DecisionOutcome:
    """Result of one decide() call.

    Attributes:
        result: GRANT or DENY.
        cache_hit: True if served from the decision cache.
        fingerprint: Cache key of the (app, preference) pair.
        latency_ms: Time spent in decide().
    """

    result: Decision
    cache_hit: bool
    fingerprint: str
    latency_ms: float


class EvaluationCoordinator:
    """Cache-fronted compliance decisions.

    The only state-mutating entry point of the decision engine. The cache is
    passed in explicitly so tests can substitute their own.

    No lock is held around the miss path: two concurrent misses for the same
    key both evaluate and both store. The evaluator is pure, so the duplicate
    costs CPU only.
    """

    def __init__(
        self,
        evaluator: ComplianceEvaluator,
        cache: DecisionCache,
        decision_logger: logging.Logger | None = None,
        policy_version: str | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            evaluator: Evaluator bound to the current policy trees.
            cache: Decision cache store.
            decision_logger: Logger for DecisionEvents; None disables audit logging.
            policy_version: Policy version recorded in decision logs.
        """
        self._evaluator = evaluator
        self._cache = cache
        self._logger = decision_logger
        self._policy_version = policy_version

    @property
    def cache(self) -> DecisionCache:
        return self._cache

    def decide(self, app: AppRecord, user_id: str, preference: UserPrivacyPreference) -> DecisionOutcome:
        """Decide for (app, user), using the cache when possible.

        Args:
            app: App being evaluated.
            user_id: User the decision is for.
            preference: That user's current preference.

        Returns:
            DecisionOutcome with result and cache_hit.

        Raises:
            ValueError: If the preference belongs to another user.
            UnknownPolicyNode: If a record references an unknown policy id.
            PolicyEvaluationFailure: If evaluation fails unexpectedly.
        """
        if preference.user_id != user_id:
            raise ValueError(f"Preference belongs to {preference.user_id!r}, not to user {user_id!r}")

        start = time.perf_counter()
        fp = compute_fingerprint(app, preference)

        entry, degraded = self._lookup(user_id, fp, preference.retention_seconds)
        if entry is not None:
            total_ms = (time.perf_counter() - start) * 1000
            self._log_decision(entry.result.value, True, user_id, app.id, fp, total_ms)
            return DecisionOutcome(result=entry.result, cache_hit=True, fingerprint=fp, latency_ms=total_ms)

        eval_start = time.perf_counter()
        try:
            result = self._evaluator.evaluate(app, preference)
        except PrivacyGuardError as e:
            total_ms = (time.perf_counter() - start) * 1000
            self._log_decision(
                "error",
                False,
                user_id,
                app.id,
                fp,
                total_ms,
                eval_ms=(time.perf_counter() - eval_start) * 1000,
                error_type=type(e).__name__,
                cache_degraded=degraded,
            )
            raise
        eval_ms = (time.perf_counter() - eval_start) * 1000

        if not self._store(user_id, fp, result):
            degraded = True

        total_ms = (time.perf_counter() - start) * 1000
        self._log_decision(
            result.value,
            False,
            user_id,
            app.id,
            fp,
            total_ms,
            eval_ms=eval_ms,
            cache_degraded=degraded,
        )
        return DecisionOutcome(result=result, cache_hit=False, fingerprint=fp, latency_ms=total_ms)

    def on_preference_changed(self, user_id: str) -> int:
        """Drop every cached decision for a user.

        Must run before any new decision for the user is trusted.

        Returns:
            Number of entries removed.

        Raises:
            CacheUnavailable: If the cache store fails.
        """
        removed = self._cache.invalidate_user(user_id)
        _system_logger.info(
            {
                "event": "user_cache_invalidated",
                "user_id": user_id,
                "entries_removed": removed,
            }
        )
        return removed

    def clear_cache(self) -> int:
        """Drop every cached decision (administrative / testing hook).

        Raises:
            CacheUnavailable: If the cache store fails.
        """
        removed = self._cache.invalidate_all()
        _system_logger.info({"event": "cache_cleared", "entries_removed": removed})
        return removed

    def _lookup(self, user_id: str, fp: str, retention_seconds: float) -> tuple[CacheEntry | None, bool]:
        """Cache lookup that turns CacheUnavailable into a logged miss.

        Returns:
            Tuple of (entry or None, lookup_failed).
        """
        try:
            return self._cache.lookup(user_id, fp, retention_seconds), False
        except CacheUnavailable as e:
            _system_logger.warning(
                {
                    "event": "cache_lookup_failed",
                    "user_id": user_id,
                    "error": str(e),
                    "fallback": "evaluate",
                }
            )
            return None, True

    def _store(self, user_id: str, fp: str, result: Decision) -> bool:
        """Store with a single retry. Returns False if both attempts failed."""
        for attempt in (1, 2):
            try:
                self._cache.store(user_id, fp, result)
                return True
            except CacheUnavailable as e:
                _system_logger.warning(
                    {
                        "event": "cache_store_failed",
                        "user_id": user_id,
                        "attempt": attempt,
                        "error": str(e),
                    }
                )
        _system_logger.error(
            {
                "event": "cache_store_abandoned",
                "user_id": user_id,
                "message": "Serving uncached result",
            }
        )
        return False

    def _log_decision(
        self,
        decision: str,
        cache_hit: bool,
        user_id: str,
        app_id: str,
        fp: str,
        total_ms: float,
        eval_ms: float | None = None,
        error_type: str | None = None,
        cache_degraded: bool = False,
    ) -> None:
        """Log a DecisionEvent to decisions.jsonl."""
        if self._logger is None:
            return

        event = DecisionEvent(
            decision=decision,  # type: ignore[arg-type]
            cache_hit=cache_hit,
            user_id=user_id,
            app_id=app_id,
            fingerprint=fp,
            policy_version=self._policy_version or "unknown",
            eval_ms=round(eval_ms, 3) if eval_ms is not None else None,
            total_ms=round(total_ms, 3),
            error_type=error_type,
            cache_degraded=cache_degraded,
        )
        self._logger.info(event.model_dump(exclude={"time"}, exclude_none=True))
