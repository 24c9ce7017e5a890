"""Helpers for spawning and supervising the Claude CLI process."""

from .executable import check_claude_installed, claude_command, find_claude_executable
from .output_buffer import OutputBuffer
from .spawn import SKIP_PERMISSIONS_FLAG, SpawnRequest, spawn_claude, spawn_detached

__all__ = [
    "OutputBuffer",
    "SKIP_PERMISSIONS_FLAG",
    "SpawnRequest",
    "check_claude_installed",
    "claude_command",
    "find_claude_executable",
    "spawn_claude",
    "spawn_detached",
]
