"""Fire-and-forget Claude CLI launches and one-shot prompts."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from .claude_process_helpers.executable import find_claude_executable
from .claude_process_helpers.log_preview import preview
from .claude_process_helpers.spawn import SpawnRequest, spawn_claude
from .config import resolve_hydra_path
from .exceptions import SpawnFailedError

logger = logging.getLogger(__name__)

HYDRA_INIT_PROMPT = """HYDRA 10.4 ACTIVATED - Four-Headed Beast Mode

SESSION CONTEXT:
- Running LOCALLY on the user's machine
- You have FULL PERMISSIONS to read and write ALL files
- You may run ALL applications and system commands
- You have internet access - ALWAYS look for a solution online

WHEN YOU HIT A PROBLEM:
1. Use WebSearch to look for a solution
2. Check StackOverflow for programming errors
3. Search the official documentation

ACTIVE MCP TOOLS:
- Serena (port 9000) - code analysis
- Desktop Commander (port 8100) - system operations
- Playwright (port 5200) - browser automation

Run /hydra to see the full instructions."""

LAUNCH_SUCCESS_MESSAGE = "Claude CLI launched successfully"


def launch_claude(yolo_mode: bool, hydra_path: Optional[Path] = None) -> str:
    """
    Start the CLI detached with the HYDRA prompt; no handle is retained.

    Raises:
        ConfigurationError: If the HYDRA directory cannot be resolved
        SpawnFailedError: If the CLI could not be launched
    """
    working_directory = hydra_path if hydra_path is not None else resolve_hydra_path()
    spawn_claude(
        SpawnRequest(
            working_directory=working_directory,
            yolo_mode=yolo_mode,
            detached=True,
            initial_payload=HYDRA_INIT_PROMPT,
        )
    )
    return LAUNCH_SUCCESS_MESSAGE


def ask_claude(message: str, hydra_path: Optional[Path] = None) -> str:
    """
    Run one prompt through ``claude -p`` and return its trimmed text output.

    Blocks until the CLI exits.

    Raises:
        SpawnFailedError: If the CLI is missing, cannot start, or exits non-zero
    """
    working_directory = hydra_path if hydra_path is not None else resolve_hydra_path()
    executable = find_claude_executable()
    logger.info("Claude CLI [SEND]: %s", preview(message))
    logger.info("Using Claude at: %s", executable)

    try:
        completed = subprocess.run(
            [executable, "-p", message, "--output-format", "text"],
            cwd=str(working_directory),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        logger.error("Failed to run claude: %s", exc)
        raise SpawnFailedError(f"Failed to run claude: {exc}") from exc

    if completed.returncode != 0:
        logger.error("Claude error: %s", completed.stderr)
        raise SpawnFailedError(f"Claude error: {completed.stderr}", returncode=completed.returncode)

    response = completed.stdout.strip()
    logger.info("Claude CLI [RECV]: %s", preview(response))
    return response


__all__ = ["HYDRA_INIT_PROMPT", "LAUNCH_SUCCESS_MESSAGE", "ask_claude", "launch_claude"]
