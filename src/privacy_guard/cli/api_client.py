"""API client helper for CLI commands that need the running service.

Used by runtime commands (evaluate, cache) that need data from the running
API. File-based commands (policy, init, benchmark) read files directly
instead of using this module.

The base URL comes from the api section of privacy_guard_config.json
(defaults when no config exists), or from PRIVACY_GUARD_API_URL.
"""

from __future__ import annotations

__all__ = [
    "APIError",
    "ServiceNotRunningError",
    "api_request",
    "get_api_base_url",
]

import json
import os
from typing import Any

import click
import httpx

from privacy_guard.config import ApiConfig, AppConfig, get_config_path
from privacy_guard.constants import DEFAULT_HTTP_TIMEOUT_SECONDS

API_URL_ENV_VAR = "PRIVACY_GUARD_API_URL"


class ServiceNotRunningError(click.ClickException):
    """Raised when the API cannot be reached."""

    def __init__(self, base_url: str) -> None:
        super().__init__(f"Service not reachable at {base_url}.\n" "Start it with: privacy-guard serve")


class APIError(click.ClickException):
    """Raised when API request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        if status_code:
            super().__init__(f"API error ({status_code}): {message}")
        else:
            super().__init__(f"API error: {message}")
        self.status_code = status_code


def get_api_base_url() -> str:
    """Get the API base URL.

    Returns:
        Base URL without trailing slash (e.g., "http://127.0.0.1:3000").

    Raises:
        click.ClickException: If the config file exists but is invalid.
    """
    override = os.environ.get(API_URL_ENV_VAR)
    if override:
        return override.rstrip("/")

    config_path = get_config_path()
    if not config_path.exists():
        return ApiConfig().base_url

    try:
        return AppConfig.load_from_files(config_path).api.base_url
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def _format_detail(detail: Any) -> str:
    if isinstance(detail, dict) and "message" in detail:
        return str(detail["message"])
    return str(detail)


def api_request(
    method: str,
    endpoint: str,
    *,
    json_data: dict[str, Any] | None = None,
    params: dict[str, Any] | None = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
) -> dict[str, Any] | list[Any]:
    """Make an API request to the running service.

    Args:
        method: HTTP method (GET, POST, DELETE, etc.)
        endpoint: API endpoint path (e.g., "/api/cache/stats")
        json_data: Optional JSON body for POST/PUT requests.
        params: Optional query parameters.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON response.

    Raises:
        ServiceNotRunningError: If the service is not reachable.
        APIError: If request fails or returns error status.
    """
    base_url = get_api_base_url()

    try:
        with httpx.Client(timeout=timeout) as client:
            response = client.request(
                method,
                f"{base_url}{endpoint}",
                json=json_data,
                params=params,
            )
            response.raise_for_status()

            if response.status_code == 204:
                return {}

            result = response.json()
            if isinstance(result, (dict, list)):
                return result
            return {"value": result}

    except httpx.ConnectError as e:
        raise ServiceNotRunningError(base_url) from e
    except httpx.HTTPStatusError as e:
        try:
            detail = _format_detail(e.response.json().get("detail", str(e)))
        except (json.JSONDecodeError, AttributeError):
            detail = str(e)
        raise APIError(detail, e.response.status_code) from e
    except httpx.HTTPError as e:
        raise APIError(str(e)) from e
