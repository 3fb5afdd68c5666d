"""Command-line interface for privacy-guard.

Provides commands for initializing configuration, serving the API,
validating the policy, querying the running service, and benchmarking.
"""

from .main import cli, main

__all__ = ["cli", "main"]
