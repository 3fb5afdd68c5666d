"""HTTP API for privacy-guard (FastAPI)."""

from privacy_guard.api.server import create_api_app

__all__ = ["create_api_app"]
