"""Policy Enforcement Point (PEP) - cached decisions around the PDP."""

from privacy_guard.pep.coordinator import DecisionOutcome, EvaluationCoordinator

__all__ = [
    "DecisionOutcome",
    "EvaluationCoordinator",
]
