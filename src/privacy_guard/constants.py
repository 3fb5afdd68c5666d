"""Application-wide constants for privacy-guard.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

from platformdirs import user_config_dir

# ============================================================================
# Configuration Directory
# ============================================================================

# OS-specific config directory holding privacy_guard_config.json and policy.json.
#
# Platform-specific paths:
# - macOS: ~/Library/Application Support/privacy-guard/
# - Linux: ~/.config/privacy-guard/
# - Windows: %APPDATA%\privacy-guard\
APP_NAME: str = "privacy-guard"
CONFIG_DIR: str = user_config_dir(APP_NAME)

CONFIG_FILE_NAME: str = "privacy_guard_config.json"
POLICY_FILE_NAME: str = "policy.json"

# Subdirectory created inside the user-specified log_dir
LOG_SUBDIR_NAME: str = "privacy_guard_logs"

# ============================================================================
# HTTP API
# ============================================================================

DEFAULT_API_HOST: str = "127.0.0.1"
DEFAULT_API_PORT: int = 3000

MIN_API_PORT: int = 1
MAX_API_PORT: int = 65535

# Identifies this instance in API responses (several instances may share a cache)
DEFAULT_SERVICE_ID: str = "default"

# Timeout for CLI -> API requests (seconds)
DEFAULT_HTTP_TIMEOUT_SECONDS: int = 30

# Pagination defaults for /api/users and /api/apps
DEFAULT_PAGE_LIMIT: int = 50
MAX_PAGE_LIMIT: int = 500

# ============================================================================
# Fingerprinting
# ============================================================================

# Joins the two per-record digests before the outer hash.
# Both sides are fixed-length hex, so the separator cannot be forged.
FINGERPRINT_SEPARATOR: str = "-"

# ============================================================================
# Decision Cache
# ============================================================================

# Age buckets reported by cache stats (seconds)
CACHE_STATS_RECENT_WINDOW_SECONDS: int = 3600  # 1 hour
CACHE_STATS_DAY_WINDOW_SECONDS: int = 86400  # 24 hours

# ============================================================================
# Benchmark
# ============================================================================

DEFAULT_BENCHMARK_ITERATIONS: int = 1000

# ============================================================================
# History Versioning
# ============================================================================

# Initial version for new history files
INITIAL_VERSION = "v1"
