"""Exception hierarchy for privacy-guard.

All errors are fail-closed: none of them is ever translated into a grant.

    PrivacyGuardError
    ├── MalformedTaxonomy        - policy intervals inconsistent (bootstrap, fatal)
    ├── UnknownPolicyNode        - record references an id absent from the tree
    ├── CacheUnavailable         - decision cache store failed
    ├── PolicyEvaluationFailure  - evaluator crashed unexpectedly
    └── RecordNotFound           - app or user id not in the record store
"""

from __future__ import annotations

__all__ = [
    "PrivacyGuardError",
    "MalformedTaxonomy",
    "UnknownPolicyNode",
    "CacheUnavailable",
    "PolicyEvaluationFailure",
    "RecordNotFound",
]


class PrivacyGuardError(Exception):
    """Base class for all privacy-guard errors."""


class MalformedTaxonomy(PrivacyGuardError):
    """Policy taxonomy cannot be turned into a consistent nested-set tree.

    Raised at bootstrap. The service must not start with a possibly-wrong tree.
    """


class UnknownPolicyNode(PrivacyGuardError):
    """An app or preference references a policy node id not in the tree.

    Attributes:
        node_id: The dangling id.
        kind: Taxonomy that was searched ("attribute" or "purpose").
    """

    def __init__(self, node_id: str, kind: str = "policy") -> None:
        self.node_id = node_id
        self.kind = kind
        super().__init__(f"Unknown {kind} node: {node_id!r}")


class CacheUnavailable(PrivacyGuardError):
    """The decision cache store failed on lookup, store or invalidation."""


class PolicyEvaluationFailure(PrivacyGuardError):
    """Unexpected error while evaluating a request. Never defaults to grant."""


class RecordNotFound(PrivacyGuardError):
    """App or user record does not exist.

    Attributes:
        kind: "app" or "user".
        record_id: The requested id.
    """

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} not found: {record_id}")
