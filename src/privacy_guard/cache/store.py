"""Decision cache - memoized compliance decisions with lazy expiry.

Entries are keyed by (user_id, fingerprint). An entry is valid while

    now - created_at <= retention_seconds

where retention_seconds comes from the user's current preference at lookup
time. Expired entries are not evicted; they are simply treated as a miss.

Storing never checks for an existing entry. Two callers racing on the same
miss may both write; either entry is a valid answer and lookup returns the
most recent one.

A preference change invalidates every entry of that user rather than
tracking which fingerprints went stale.
"""

from __future__ import annotations

__all__ = [
    "CacheEntry",
    "CacheStats",
    "DecisionCache",
    "InMemoryDecisionCache",
]

import threading
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel

from privacy_guard.constants import (
    CACHE_STATS_DAY_WINDOW_SECONDS,
    CACHE_STATS_RECENT_WINDOW_SECONDS,
)
from privacy_guard.pdp.decision import Decision
from privacy_guard.utils.validation import validate_sha256_hex


@dataclass(frozen=True)
class CacheEntry:
    """One cached decision.

    Attributes:
        user_id: User the decision was made for.
        fingerprint: Fingerprint of the (app, preference) pair.
        result: The cached decision.
        created_at: Wall-clock creation time (seconds since epoch).
    """

    user_id: str
    fingerprint: str
    result: Decision
    created_at: float

    def age_seconds(self, now: float) -> float:
        return now - self.created_at

    def is_fresh(self, now: float, retention_seconds: float) -> bool:
        """Return True if the entry is still within the retention window."""
        return self.age_seconds(now) <= retention_seconds


class CacheStats(BaseModel):
    """Snapshot of cache contents.

    Includes expired entries (lazy expiry keeps them until invalidated).
    """

    total_entries: int
    grant_count: int
    deny_count: int
    users: int
    last_hour: int
    last_24_hours: int


class DecisionCache(Protocol):
    """Storage contract the coordinator depends on.

    Any key-value or document store with insert, find-by-key-newer-than and
    delete-by-user satisfies it. Implementations signal store failures by
    raising CacheUnavailable.
    """

    def lookup(self, user_id: str, fingerprint: str, retention_seconds: float) -> CacheEntry | None:
        """Return the newest fresh entry for the key, or None."""
        ...

    def store(self, user_id: str, fingerprint: str, result: Decision) -> CacheEntry:
        """Insert a new entry stamped with the current time."""
        ...

    def invalidate_user(self, user_id: str) -> int:
        """Delete every entry of a user. Returns the number deleted."""
        ...

    def invalidate_all(self) -> int:
        """Delete every entry. Returns the number deleted."""
        ...

    def stats(self) -> CacheStats:
        """Summarize cache contents."""
        ...


class InMemoryDecisionCache:
    """Process-local DecisionCache.

    Thread-safe: a lock guards the entry lists. The lock only keeps the
    containers consistent; it does not serialize evaluations.

    Args:
        clock: Returns the current time in seconds. Injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, list[CacheEntry]] = {}
        self._lock = threading.Lock()

    def lookup(self, user_id: str, fingerprint: str, retention_seconds: float) -> CacheEntry | None:
        now = self._clock()
        with self._lock:
            entries = self._entries.get(user_id, ())
            # Newest first: entries are appended in creation order
            for entry in reversed(entries):
                if entry.fingerprint == fingerprint:
                    return entry if entry.is_fresh(now, retention_seconds) else None
        return None

    def store(self, user_id: str, fingerprint: str, result: Decision) -> CacheEntry:
        """Append an entry.

        Raises:
            ValueError: If fingerprint is not a SHA-256 hex digest.
        """
        valid, normalized = validate_sha256_hex(fingerprint)
        if not valid or normalized != fingerprint:
            raise ValueError(f"Not a fingerprint: {fingerprint!r}")

        entry = CacheEntry(
            user_id=user_id,
            fingerprint=fingerprint,
            result=result,
            created_at=self._clock(),
        )
        with self._lock:
            self._entries.setdefault(user_id, []).append(entry)
        return entry

    def invalidate_user(self, user_id: str) -> int:
        with self._lock:
            return len(self._entries.pop(user_id, ()))

    def invalidate_all(self) -> int:
        with self._lock:
            count = sum(len(entries) for entries in self._entries.values())
            self._entries.clear()
        return count

    def iter_all(self) -> Iterator[CacheEntry]:
        """Iterate over a snapshot of all entries (including expired)."""
        with self._lock:
            snapshot = [entry for entries in self._entries.values() for entry in entries]
        return iter(snapshot)

    def stats(self) -> CacheStats:
        now = self._clock()
        entries = list(self.iter_all())
        with self._lock:
            users = len(self._entries)
        return CacheStats(
            total_entries=len(entries),
            grant_count=sum(1 for e in entries if e.result is Decision.GRANT),
            deny_count=sum(1 for e in entries if e.result is Decision.DENY),
            users=users,
            last_hour=sum(1 for e in entries if e.age_seconds(now) <= CACHE_STATS_RECENT_WINDOW_SECONDS),
            last_24_hours=sum(1 for e in entries if e.age_seconds(now) <= CACHE_STATS_DAY_WINDOW_SECONDS),
        )

    def __len__(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._entries.values())
