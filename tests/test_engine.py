"""Unit tests for the compliance evaluator.

Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from privacy_guard.exceptions import PolicyEvaluationFailure, UnknownPolicyNode
from privacy_guard.pdp import Decision
from privacy_guard.pdp.baseline import FlatComplianceEvaluator


# =============================================================================
# Example scenarios
# =============================================================================


class TestScenarios:
    """Decisions for the reference scenarios."""

    def test_allowing_parent_grants_child(self, evaluator, make_app, make_preference):
        """App needs GPS, user allows Location -> grant."""
        result = evaluator.evaluate(make_app(), make_preference())

        assert result is Decision.GRANT

    def test_denied_child_overrides_allowed_parent(self, evaluator, make_app, make_preference):
        """User allows Location but denies GPS -> deny."""
        pref = make_preference(denied_attributes=frozenset({"gps"}))

        result = evaluator.evaluate(make_app(), pref)

        assert result is Decision.DENY

    def test_retention_longer_than_user_allows(self, evaluator, make_app, make_preference):
        """App retains 5000s, user allows 1000s -> deny."""
        app = make_app(retention_seconds=5000)
        pref = make_preference(retention_seconds=1000)

        details = evaluator.explain(app, pref)

        assert details.attrs_accepted and details.purposes_accepted
        assert not details.time_accepted
        assert details.result is Decision.DENY


# =============================================================================
# Attribute and purpose checks
# =============================================================================


class TestAttributeCheck:
    """Tests for allowed / excepted / denied attribute handling."""

    def test_excepted_subtree_rejects(self, evaluator, make_app, make_preference):
        pref = make_preference(excepted_attributes=frozenset({"gps"}))

        details = evaluator.explain(make_app(), pref)

        assert details.rejected_attributes == ("gps",)

    def test_denied_ancestor_rejects(self, evaluator, make_app, make_preference):
        """Denying a parent overrides allowing the exact child."""
        app = make_app(attributes=frozenset({"movement"}))
        pref = make_preference(
            allowed_attributes=frozenset({"movement"}),
            denied_attributes=frozenset({"health"}),
        )

        assert evaluator.evaluate(app, pref) is Decision.DENY

    def test_excepted_and_denied_behave_the_same(self, evaluator, make_app, make_preference):
        app = make_app(attributes=frozenset({"gps", "ip-address"}))
        excepted = make_preference(excepted_attributes=frozenset({"ip-address"}))
        denied = make_preference(denied_attributes=frozenset({"ip-address"}))

        assert evaluator.explain(app, excepted).rejected_attributes == ("ip-address",)
        assert evaluator.explain(app, denied).rejected_attributes == ("ip-address",)

    def test_one_failing_attribute_rejects_all(self, evaluator, make_app, make_preference):
        app = make_app(attributes=frozenset({"gps", "email"}))

        details = evaluator.explain(app, make_preference())

        assert details.rejected_attributes == ("email",)
        assert details.result is Decision.DENY

    def test_not_allowed_is_rejected(self, evaluator, make_app, make_preference):
        """Nothing allowed means nothing required passes."""
        pref = make_preference(allowed_attributes=frozenset())

        assert evaluator.evaluate(make_app(), pref) is Decision.DENY

    def test_child_allowance_does_not_cover_parent(self, evaluator, make_app, make_preference):
        app = make_app(attributes=frozenset({"location"}))
        pref = make_preference(allowed_attributes=frozenset({"gps"}))

        assert evaluator.evaluate(app, pref) is Decision.DENY

    def test_app_without_attributes_passes_attribute_check(self, evaluator, make_app, make_preference):
        app = make_app(attributes=frozenset())

        assert evaluator.explain(app, make_preference()).attrs_accepted


class TestPurposeCheck:
    """Tests for purpose handling (same structure as attributes)."""

    def test_denied_purpose_subtree(self, evaluator, make_app, make_preference):
        app = make_app(purposes=frozenset({"advertising"}))
        pref = make_preference(
            allowed_purposes=frozenset({"marketing"}),
            denied_purposes=frozenset({"advertising"}),
        )

        details = evaluator.explain(app, pref)

        assert not details.purposes_accepted
        assert details.rejected_purposes == ("advertising",)

    def test_allowed_parent_purpose(self, evaluator, make_app, make_preference):
        app = make_app(purposes=frozenset({"security"}))
        pref = make_preference(allowed_purposes=frozenset({"admin"}))

        assert evaluator.evaluate(app, pref) is Decision.GRANT


class TestRetentionCheck:
    def test_equal_retention_is_accepted(self, evaluator, make_app, make_preference):
        app = make_app(retention_seconds=3600)
        pref = make_preference(retention_seconds=3600)

        assert evaluator.evaluate(app, pref) is Decision.GRANT


# =============================================================================
# Fail-closed
# =============================================================================


class TestFailClosed:
    """Unknown ids and crashes never produce a grant."""

    @pytest.mark.parametrize(
        ("app_overrides", "pref_overrides"),
        [
            ({"attributes": frozenset({"shoe-size"})}, {}),
            ({"purposes": frozenset({"gambling"})}, {}),
            ({}, {"allowed_attributes": frozenset({"location", "shoe-size"})}),
            ({}, {"denied_purposes": frozenset({"gambling"})}),
            ({}, {"excepted_attributes": frozenset({"shoe-size"})}),
        ],
    )
    def test_unknown_id_raises(self, evaluator, make_app, make_preference, app_overrides, pref_overrides):
        with pytest.raises(UnknownPolicyNode):
            evaluator.evaluate(make_app(**app_overrides), make_preference(**pref_overrides))

    def test_unknown_id_checked_even_when_already_denied(self, evaluator, make_app, make_preference):
        """A dangling purpose is reported even though attributes already fail."""
        app = make_app(attributes=frozenset({"email"}), purposes=frozenset({"gambling"}))

        with pytest.raises(UnknownPolicyNode) as exc_info:
            evaluator.evaluate(app, make_preference())

        assert exc_info.value.kind == "purpose"

    def test_unexpected_error_wrapped(self, evaluator, make_app, make_preference):
        with patch("privacy_guard.pdp.engine._rejected", side_effect=RuntimeError("boom")):
            with pytest.raises(PolicyEvaluationFailure, match="boom"):
                evaluator.evaluate(make_app(), make_preference())


# =============================================================================
# Flat baseline
# =============================================================================


class TestFlatBaseline:
    """The flat evaluator only matches exact ids."""

    def test_parent_allowance_not_honoured(self, make_app, make_preference):
        result = FlatComplianceEvaluator().evaluate(make_app(), make_preference())

        assert result is Decision.DENY

    def test_exact_match_grants(self, make_app, make_preference):
        pref = make_preference(allowed_attributes=frozenset({"gps"}))

        assert FlatComplianceEvaluator().evaluate(make_app(), pref) is Decision.GRANT
