"""Supervision core for the HYDRA desktop launcher."""

from .app_state import AppState, YoloFlag
from .claude_session import ClaudeSession
from .commands import LauncherCommands
from .mcp_health import McpHealthCoordinator
from .mcp_health_helpers.types import HealthResult, HealthTarget, McpStatus
from .ollama_client import OllamaClient

__all__ = [
    "AppState",
    "ClaudeSession",
    "HealthResult",
    "HealthTarget",
    "LauncherCommands",
    "McpHealthCoordinator",
    "McpStatus",
    "OllamaClient",
    "YoloFlag",
]
