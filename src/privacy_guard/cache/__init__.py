"""Decision cache for compliance decisions."""

from privacy_guard.cache.store import (
    CacheEntry,
    CacheStats,
    DecisionCache,
    InMemoryDecisionCache,
)

__all__ = [
    "CacheEntry",
    "CacheStats",
    "DecisionCache",
    "InMemoryDecisionCache",
]
