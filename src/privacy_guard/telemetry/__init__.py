"""Telemetry: decision audit logs and system logs."""
