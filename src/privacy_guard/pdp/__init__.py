"""Policy Decision Point (PDP) - compliance evaluation engine.

This module decides whether an app may process a user's data.

- pdp/ (this module): taxonomies, records, fingerprints, evaluation
- pep/: decision caching and audit logging around the evaluator

The PDP is intentionally stateless and side-effect free.
All caching and I/O happens in the PEP.

Structure:
    decision.py       - Decision enum (GRANT/DENY)
    policy.py         - Policy and record models (PrivacyPolicy, AppRecord, ...)
    taxonomy.py       - Nested-set PolicyTree with O(1) containment
    fingerprint.py    - SHA-256 cache keys for (app, preference) pairs
    engine.py         - ComplianceEvaluator
    baseline.py       - FlatComplianceEvaluator (benchmark comparison only)

Policy file I/O is in utils/policy/policy_helpers.py.
"""

from privacy_guard.pdp.decision import Decision
from privacy_guard.pdp.engine import ComplianceEvaluator, EvaluationDetails
from privacy_guard.pdp.fingerprint import fingerprint
from privacy_guard.pdp.policy import (
    AppRecord,
    PrivacyPolicy,
    TaxonomyEntry,
    UserPrivacyPreference,
    UserRecord,
    create_default_policy,
)
from privacy_guard.pdp.taxonomy import PolicyNode, PolicyTree

__all__ = [
    # Decision
    "Decision",
    # Engine
    "ComplianceEvaluator",
    "EvaluationDetails",
    # Fingerprint
    "fingerprint",
    # Taxonomy
    "PolicyNode",
    "PolicyTree",
    # Policy models
    "AppRecord",
    "PrivacyPolicy",
    "TaxonomyEntry",
    "UserPrivacyPreference",
    "UserRecord",
    "create_default_policy",
]
