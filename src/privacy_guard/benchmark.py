"""Local latency benchmark for the decision path.

Compares four ways of answering the same (app, user) question:

    cache_hit    coordinator, decision already cached
    cache_miss   coordinator, cache emptied before every call
    no_cache     hierarchical evaluator called directly
    flat         FlatComplianceEvaluator (exact id matching, no hierarchy)

Runs in-process against an in-memory cache; no API server is involved.
"""

from __future__ import annotations

__all__ = [
    "BenchmarkResult",
    "LatencyStats",
    "run_benchmark",
    "sample_records",
]

import math
import statistics
import time
from collections.abc import Callable
from dataclasses import dataclass

from privacy_guard.cache.store import InMemoryDecisionCache
from privacy_guard.pdp.baseline import FlatComplianceEvaluator
from privacy_guard.pdp.decision import Decision
from privacy_guard.pdp.engine import ComplianceEvaluator
from privacy_guard.pdp.policy import AppRecord, PrivacyPolicy, UserPrivacyPreference
from privacy_guard.pep.coordinator import EvaluationCoordinator
from privacy_guard.utils.policy import build_policy_trees


@dataclass(frozen=True)
class LatencyStats:
    """Latency summary in milliseconds."""

    mean: float
    p50: float
    p95: float
    p99: float
    min: float
    max: float

    @classmethod
    def from_samples(cls, samples: list[float]) -> "LatencyStats":
        """Summarize samples (nearest-rank percentiles).

        Raises:
            ValueError: If samples is empty.
        """
        if not samples:
            raise ValueError("No samples to summarize")
        ordered = sorted(samples)
        return cls(
            mean=statistics.fmean(ordered),
            p50=_percentile(ordered, 50),
            p95=_percentile(ordered, 95),
            p99=_percentile(ordered, 99),
            min=ordered[0],
            max=ordered[-1],
        )


def _percentile(ordered: list[float], pct: float) -> float:
    rank = max(1, math.ceil(pct / 100 * len(ordered)))
    return ordered[rank - 1]


@dataclass(frozen=True)
class BenchmarkResult:
    """One scenario: its name, the decision it produced, and latencies."""

    scenario: str
    result: Decision
    iterations: int
    stats: LatencyStats


def _time_calls(
    call: Callable[[], Decision],
    iterations: int,
    before: Callable[[], object] | None = None,
) -> tuple[Decision, list[float]]:
    samples: list[float] = []
    result = Decision.DENY
    for _ in range(iterations):
        if before is not None:
            before()
        start = time.perf_counter()
        result = call()
        samples.append((time.perf_counter() - start) * 1000)
    return result, samples


def run_benchmark(
    policy: PrivacyPolicy,
    app: AppRecord,
    preference: UserPrivacyPreference,
    iterations: int,
) -> list[BenchmarkResult]:
    """Time every scenario on the same inputs.

    Args:
        policy: Policy to build trees from.
        app: App to evaluate.
        preference: Preference to evaluate against.
        iterations: Timed calls per scenario.

    Returns:
        One BenchmarkResult per scenario, in the order listed above.

    Raises:
        ValueError: If iterations < 1.
        MalformedTaxonomy: If the policy cannot be built.
        UnknownPolicyNode: If the records reference unknown ids.
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")

    attributes, purposes = build_policy_trees(policy)
    evaluator = ComplianceEvaluator(attributes, purposes)
    flat = FlatComplianceEvaluator()
    cache = InMemoryDecisionCache()
    coordinator = EvaluationCoordinator(evaluator, cache)
    user_id = preference.user_id

    def decide() -> Decision:
        return coordinator.decide(app, user_id, preference).result

    results: list[BenchmarkResult] = []

    # Warm the cache once so every timed call is a hit
    decide()
    result, samples = _time_calls(decide, iterations)
    results.append(BenchmarkResult("cache_hit", result, iterations, LatencyStats.from_samples(samples)))

    result, samples = _time_calls(decide, iterations, before=cache.invalidate_all)
    results.append(BenchmarkResult("cache_miss", result, iterations, LatencyStats.from_samples(samples)))

    result, samples = _time_calls(lambda: evaluator.evaluate(app, preference), iterations)
    results.append(BenchmarkResult("no_cache", result, iterations, LatencyStats.from_samples(samples)))

    result, samples = _time_calls(lambda: flat.evaluate(app, preference), iterations)
    results.append(BenchmarkResult("flat", result, iterations, LatencyStats.from_samples(samples)))

    return results


def sample_records() -> tuple[AppRecord, UserPrivacyPreference]:
    """App and preference for the default policy.

    The app needs GPS and IP address for analytics; the user allows the
    whole location subtree for analytics. Hierarchical evaluation grants,
    flat matching denies.
    """
    app = AppRecord(
        id="benchmark-app",
        name="Benchmark App",
        attributes=frozenset({"gps", "ip-address"}),
        purposes=frozenset({"analytics"}),
        retention_seconds=1800,
    )
    preference = UserPrivacyPreference(
        user_id="benchmark-user",
        allowed_attributes=frozenset({"location"}),
        denied_attributes=frozenset({"contact"}),
        allowed_purposes=frozenset({"analytics"}),
        denied_purposes=frozenset({"marketing"}),
        retention_seconds=3600,
    )
    return app, preference
