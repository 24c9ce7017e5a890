"""Helpers for concurrent MCP server liveness checks."""

from .types import DEFAULT_HEALTH_TARGETS, HealthResult, HealthTarget, McpStatus

__all__ = ["DEFAULT_HEALTH_TARGETS", "HealthResult", "HealthTarget", "McpStatus"]
