"""Shared utilities: file helpers, logging setup, policy file I/O, validation."""
