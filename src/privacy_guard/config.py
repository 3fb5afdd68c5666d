"""Application configuration for privacy-guard.

Defines configuration models for logging, the HTTP API, and the service.
User creates config via `privacy-guard init`. Config is stored at the
OS-appropriate location (via platformdirs), log_dir is user-specified.

Example usage:
    # Load from config file
    config = AppConfig.load_from_files(config_path)

    # Save new configuration
    config.save_to_file(config_path)
"""

import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from privacy_guard.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_SERVICE_ID,
    LOG_SUBDIR_NAME,
    MAX_API_PORT,
    MIN_API_PORT,
)
from privacy_guard.utils.file_helpers import get_app_dir, load_validated_json, require_file_exists

# Overrides AppConfig.service_id when set (several instances may share a cache)
SERVICE_ID_ENV_VAR = "SERVICE_ID"


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    The log_dir specifies a base directory. Within it, logs are stored
    in a privacy_guard_logs/ subdirectory with this structure:
        <log_dir>/
        └── privacy_guard_logs/
            ├── system/
            │   ├── system.jsonl
            │   └── policy_history.jsonl
            └── audit/                  # Always enabled
                └── decisions.jsonl

    Attributes:
        log_dir: Base directory for logs (required, user-specified via init).
        log_level: Level for system.jsonl. Decision logs ignore it.
    """

    log_dir: str
    log_level: Literal["DEBUG", "INFO"] = "INFO"

    @property
    def base_dir(self) -> Path:
        return Path(self.log_dir).expanduser() / LOG_SUBDIR_NAME

    @property
    def system_log_path(self) -> Path:
        return self.base_dir / "system" / "system.jsonl"

    @property
    def policy_history_path(self) -> Path:
        return self.base_dir / "system" / "policy_history.jsonl"

    @property
    def decisions_log_path(self) -> Path:
        return self.base_dir / "audit" / "decisions.jsonl"


class ApiConfig(BaseModel):
    """HTTP API settings.

    Attributes:
        host: Bind address. Defaults to loopback.
        port: TCP port (1-65535).
    """

    host: str = DEFAULT_API_HOST
    port: int = Field(default=DEFAULT_API_PORT, ge=MIN_API_PORT, le=MAX_API_PORT)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


class AppConfig(BaseModel):
    """Main application configuration for privacy-guard.

    Attributes:
        logging: Logging configuration (log level, paths).
        api: HTTP API configuration (host, port).
        service_id: Name reported in evaluate responses.
        policy_path: Policy file location, None for the config directory.
    """

    logging: LoggingConfig
    api: ApiConfig = Field(default_factory=ApiConfig)
    service_id: str = DEFAULT_SERVICE_ID
    policy_path: str | None = None

    def effective_service_id(self) -> str:
        """service_id, overridden by the SERVICE_ID environment variable."""
        return os.environ.get(SERVICE_ID_ENV_VAR) or self.service_id

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file.

        Creates parent directories if they don't exist.
        Sets secure permissions (0o700) on the config directory.

        Args:
            config_path: Path where privacy_guard_config.json should be saved.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.parent.chmod(0o700)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2)

        config_path.chmod(0o600)

    @classmethod
    def load_from_files(cls, config_path: Path) -> "AppConfig":
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config file (privacy_guard_config.json).

        Returns:
            AppConfig instance with loaded configuration.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If config file is invalid or missing required fields.
        """
        require_file_exists(config_path, file_type="configuration")
        return load_validated_json(
            config_path,
            cls,
            file_type="config",
            recovery_hint="Run 'privacy-guard init' to reconfigure.",
            encoding="utf-8",
        )


def get_config_path() -> Path:
    """Get the full path to privacy_guard_config.json."""
    return get_app_dir() / CONFIG_FILE_NAME
