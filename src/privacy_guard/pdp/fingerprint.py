"""Decision cache keys.

The fingerprint of an (app, preference) pair is

    sha256( sha256(canonical(app)) + "-" + sha256(canonical(preference)) )

Each record is hashed on its own before the two digests are combined, so
whoever controls one side (e.g., a forged app payload) cannot shift bytes
across the boundary between the two JSON documents to reach a colliding key.

``canonical`` is JSON with sorted keys, compact separators and every id set
emitted as a sorted list. Field order and set iteration order never change
the digest, so logically identical records always meet in the cache.
"""

from __future__ import annotations

__all__ = [
    "canonical_json",
    "fingerprint",
    "sha256_hex",
]

import hashlib
import json
from typing import Any

from pydantic import BaseModel

from privacy_guard.constants import FINGERPRINT_SEPARATOR
from privacy_guard.pdp.policy import AppRecord, UserPrivacyPreference


def sha256_hex(data: str) -> str:
    """SHA-256 of a UTF-8 string as 64 lowercase hex characters."""
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def _canonicalize(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _canonicalize(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(_canonicalize(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [_canonicalize(item) for item in value]
    return value


def canonical_json(record: BaseModel) -> str:
    """Serialize a record to its canonical JSON form.

    Args:
        record: Any pydantic record (AppRecord, UserPrivacyPreference).

    Returns:
        Compact JSON with sorted keys and sorted id sets.
    """
    data = _canonicalize(record.model_dump(mode="python"))
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def fingerprint(app: AppRecord, preference: UserPrivacyPreference) -> str:
    """Compute the cache key for an (app, preference) pair.

    Args:
        app: App being evaluated.
        preference: User preference it is evaluated against.

    Returns:
        64-character lowercase hex fingerprint.
    """
    app_digest = sha256_hex(canonical_json(app))
    preference_digest = sha256_hex(canonical_json(preference))
    return sha256_hex(app_digest + FINGERPRINT_SEPARATOR + preference_digest)
