"""Compliance engine - evaluate an app against a user's privacy preference.

This module provides the ComplianceEvaluator class that checks an AppRecord
against a UserPrivacyPreference to produce GRANT/DENY decisions.

Evaluation flow:
1. Every id in both records must exist in its taxonomy (else UnknownPolicyNode)
2. Attribute check: each required attribute is allowed and neither excepted
   nor denied, all by subtree containment
3. Purpose check: same structure over purposes
4. Retention check: app retention <= user retention
5. GRANT iff all three checks pass

Design principles:
1. One failing attribute or purpose rejects the whole request
2. Excepted and denied both override allowed, at any level of the tree
3. The evaluator is stateless and side-effect free; caching lives in the PEP
4. Fail closed: errors never become GRANT
"""

from __future__ import annotations

__all__ = [
    "ComplianceEvaluator",
    "EvaluationDetails",
]

from collections.abc import Iterable
from dataclasses import dataclass, field

from privacy_guard.exceptions import PolicyEvaluationFailure, PrivacyGuardError
from privacy_guard.pdp.decision import Decision
from privacy_guard.pdp.policy import AppRecord, UserPrivacyPreference
from privacy_guard.pdp.taxonomy import PolicyTree


@dataclass(frozen=True)
class EvaluationDetails:
    """Per-check outcome of one evaluation.

    Attributes:
        attrs_accepted: Every required attribute passed.
        purposes_accepted: Every declared purpose passed.
        time_accepted: App retention within the user's limit.
        rejected_attributes: Attribute ids that failed, sorted.
        rejected_purposes: Purpose ids that failed, sorted.
    """

    attrs_accepted: bool
    purposes_accepted: bool
    time_accepted: bool
    rejected_attributes: tuple[str, ...] = field(default_factory=tuple)
    rejected_purposes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def result(self) -> Decision:
        return Decision.from_bool(self.attrs_accepted and self.purposes_accepted and self.time_accepted)


class ComplianceEvaluator:
    """Containment-based compliance evaluation.

    A preference entry covers a required id when it is the id itself or one
    of its ancestors, so allowing "health" covers "heart-rate" without the
    user listing every descendant.

    Attributes:
        attributes: Attribute taxonomy.
        purposes: Purpose taxonomy.
    """

    def __init__(self, attributes: PolicyTree, purposes: PolicyTree) -> None:
        self.attributes = attributes
        self.purposes = purposes

    def evaluate(self, app: AppRecord, preference: UserPrivacyPreference) -> Decision:
        """Decide whether the app may process the user's data.

        Args:
            app: App being evaluated.
            preference: User preference to evaluate against.

        Returns:
            Decision.GRANT or Decision.DENY.

        Raises:
            UnknownPolicyNode: If either record references an id absent from
                its taxonomy.
            PolicyEvaluationFailure: If evaluation fails unexpectedly.
        """
        return self.explain(app, preference).result

    def explain(self, app: AppRecord, preference: UserPrivacyPreference) -> EvaluationDetails:
        """Evaluate and report which checks passed.

        Raises:
            UnknownPolicyNode: If either record references an unknown id.
            PolicyEvaluationFailure: If evaluation fails unexpectedly.
        """
        try:
            # Validate everything first: a dangling id must never be skipped
            # because an earlier check already short-circuited.
            self.attributes.require(app.attributes)
            self.attributes.require(preference.attribute_ids())
            self.purposes.require(app.purposes)
            self.purposes.require(preference.purpose_ids())

            rejected_attributes = _rejected(
                self.attributes,
                app.attributes,
                allowed=preference.allowed_attributes,
                excepted=preference.excepted_attributes,
                denied=preference.denied_attributes,
            )
            rejected_purposes = _rejected(
                self.purposes,
                app.purposes,
                allowed=preference.allowed_purposes,
                excepted=preference.excepted_purposes,
                denied=preference.denied_purposes,
            )

            return EvaluationDetails(
                attrs_accepted=not rejected_attributes,
                purposes_accepted=not rejected_purposes,
                time_accepted=app.retention_seconds <= preference.retention_seconds,
                rejected_attributes=rejected_attributes,
                rejected_purposes=rejected_purposes,
            )

        except PrivacyGuardError:
            # Re-raise our own exceptions
            raise
        except Exception as e:
            raise PolicyEvaluationFailure(
                f"Compliance evaluation failed unexpectedly: {type(e).__name__}: {e}"
            ) from e


def _rejected(
    tree: PolicyTree,
    required: Iterable[str],
    *,
    allowed: frozenset[str],
    excepted: frozenset[str],
    denied: frozenset[str],
) -> tuple[str, ...]:
    """Return the required ids that fail allowed ∧ ¬excepted ∧ ¬denied."""
    return tuple(
        sorted(
            node_id
            for node_id in required
            if not tree.contains_any(allowed, node_id)
            or tree.contains_any(excepted, node_id)
            or tree.contains_any(denied, node_id)
        )
    )
