"""API route modules.

- health: liveness and API info
- evaluate: compliance decisions
- users, apps: record management
- policy: loaded taxonomies
- cache: decision cache stats and clearing
"""

from . import apps, cache, evaluate, health, policy, users

__all__ = ["apps", "cache", "evaluate", "health", "policy", "users"]
