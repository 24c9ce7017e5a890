"""Locating the Claude CLI executable."""

import logging
import os
import platform
import shutil
from pathlib import Path
from typing import List, Optional

from ..config import env_str
from ..exceptions import SpawnFailedError

logger = logging.getLogger(__name__)

DEFAULT_CLAUDE_EXECUTABLE = "claude"
INSTALL_HINT = "Claude CLI not found. Please install it with: npm install -g @anthropic-ai/claude-code"


def claude_command() -> List[str]:
    """
    Argv prefix used to start the CLI.

    HYDRA_CLAUDE_EXECUTABLE wins when set. On Windows an npm global install is
    used next; Popen without a shell does not resolve a bare ``claude`` to the
    ``claude.cmd`` shim. Otherwise ``claude`` is looked up on PATH at spawn time.
    """
    configured = env_str("HYDRA_CLAUDE_EXECUTABLE")
    if configured:
        return [configured]
    npm_install = _windows_npm_install()
    if npm_install is not None:
        return [npm_install]
    return [DEFAULT_CLAUDE_EXECUTABLE]


def _npm_install_candidates() -> List[Path]:
    profile = os.getenv("USERPROFILE")
    if not profile:
        return []
    return [
        Path(profile) / "AppData" / "Roaming" / "npm" / "claude.cmd",
        Path(profile) / "bin" / "claude.cmd",
    ]


def _windows_npm_install() -> Optional[str]:
    if platform.system() != "Windows":
        return None
    for candidate in _npm_install_candidates():
        if candidate.exists():
            return str(candidate)
    return None


def find_claude_executable() -> str:
    """
    Resolve the CLI to an absolute path.

    npm global install locations are checked first on Windows, then PATH.

    Raises:
        SpawnFailedError: If no executable can be found
    """
    npm_install = _windows_npm_install()
    if npm_install is not None:
        return npm_install

    located = shutil.which(env_str("HYDRA_CLAUDE_EXECUTABLE", DEFAULT_CLAUDE_EXECUTABLE))
    if located:
        return located
    raise SpawnFailedError(INSTALL_HINT)


def check_claude_installed() -> bool:
    try:
        path = find_claude_executable()
    except SpawnFailedError:  # policy_guard: allow-silent-handler
        return False
    logger.debug("Claude CLI found at %s", path)
    return True
