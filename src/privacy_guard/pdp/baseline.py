"""Flat-hierarchy baseline evaluator.

Same checks as ComplianceEvaluator, but a preference entry only covers the
exact id it names: allowing "location" does not allow "gps". Used by the
benchmark to measure what the nested-set model buys. Never used to serve
decisions.
"""

from __future__ import annotations

__all__ = ["FlatComplianceEvaluator"]

from privacy_guard.pdp.decision import Decision
from privacy_guard.pdp.engine import EvaluationDetails
from privacy_guard.pdp.policy import AppRecord, UserPrivacyPreference


class FlatComplianceEvaluator:
    """Membership-only evaluator without taxonomy containment."""

    def evaluate(self, app: AppRecord, preference: UserPrivacyPreference) -> Decision:
        return self.explain(app, preference).result

    def explain(self, app: AppRecord, preference: UserPrivacyPreference) -> EvaluationDetails:
        rejected_attributes = tuple(
            sorted(
                a
                for a in app.attributes
                if a not in preference.allowed_attributes
                or a in preference.excepted_attributes
                or a in preference.denied_attributes
            )
        )
        rejected_purposes = tuple(
            sorted(
                p
                for p in app.purposes
                if p not in preference.allowed_purposes
                or p in preference.excepted_purposes
                or p in preference.denied_purposes
            )
        )
        return EvaluationDetails(
            attrs_accepted=not rejected_attributes,
            purposes_accepted=not rejected_purposes,
            time_accepted=app.retention_seconds <= preference.retention_seconds,
            rejected_attributes=rejected_attributes,
            rejected_purposes=rejected_purposes,
        )
