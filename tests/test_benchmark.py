"""Unit tests for the latency benchmark."""

from __future__ import annotations

import pytest

from privacy_guard.benchmark import LatencyStats, run_benchmark, sample_records
from privacy_guard.pdp import Decision, create_default_policy


class TestLatencyStats:
    def test_nearest_rank_percentiles(self):
        stats = LatencyStats.from_samples([float(i) for i in range(1, 101)])

        assert stats.p50 == 50.0
        assert stats.p95 == 95.0
        assert stats.p99 == 99.0
        assert stats.min == 1.0
        assert stats.max == 100.0
        assert stats.mean == pytest.approx(50.5)

    def test_single_sample(self):
        stats = LatencyStats.from_samples([2.0])

        assert stats.p50 == stats.p99 == 2.0

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            LatencyStats.from_samples([])


class TestRunBenchmark:
    def test_scenarios_and_results(self):
        app, preference = sample_records()

        results = run_benchmark(create_default_policy(), app, preference, iterations=3)

        by_name = {r.scenario: r.result for r in results}
        assert list(by_name) == ["cache_hit", "cache_miss", "no_cache", "flat"]
        assert by_name["cache_hit"] is Decision.GRANT
        assert by_name["cache_miss"] is Decision.GRANT
        assert by_name["no_cache"] is Decision.GRANT
        assert by_name["flat"] is Decision.DENY
        assert all(r.iterations == 3 for r in results)

    def test_rejects_zero_iterations(self):
        app, preference = sample_records()

        with pytest.raises(ValueError, match="iterations"):
            run_benchmark(create_default_policy(), app, preference, iterations=0)
