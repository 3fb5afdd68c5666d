"""Shared fixtures for privacy-guard tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from privacy_guard.pdp import (
    AppRecord,
    ComplianceEvaluator,
    PolicyTree,
    UserPrivacyPreference,
    create_default_policy,
)
from privacy_guard.utils.policy import build_policy_trees


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def trees() -> tuple[PolicyTree, PolicyTree]:
    """Attribute and purpose trees of the default policy."""
    return build_policy_trees(create_default_policy())


@pytest.fixture
def attribute_tree(trees) -> PolicyTree:
    return trees[0]


@pytest.fixture
def purpose_tree(trees) -> PolicyTree:
    return trees[1]


@pytest.fixture
def evaluator(trees) -> ComplianceEvaluator:
    return ComplianceEvaluator(*trees)


@pytest.fixture
def make_app() -> Callable[..., AppRecord]:
    """Build an AppRecord; defaults to a GPS-for-analytics app."""

    def _make(**overrides: Any) -> AppRecord:
        fields: dict[str, Any] = {
            "id": "app-1",
            "name": "Maps",
            "attributes": frozenset({"gps"}),
            "purposes": frozenset({"analytics"}),
            "retention_seconds": 1000,
        }
        fields.update(overrides)
        return AppRecord(**fields)

    return _make


@pytest.fixture
def make_preference() -> Callable[..., UserPrivacyPreference]:
    """Build a preference; defaults allow location for analytics."""

    def _make(**overrides: Any) -> UserPrivacyPreference:
        fields: dict[str, Any] = {
            "user_id": "user-1",
            "allowed_attributes": frozenset({"location"}),
            "allowed_purposes": frozenset({"analytics"}),
            "retention_seconds": 3600,
        }
        fields.update(overrides)
        return UserPrivacyPreference(**fields)

    return _make
