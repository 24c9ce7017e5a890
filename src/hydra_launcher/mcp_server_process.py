"""Starting and stopping MCP helper server processes."""

import logging

import psutil

from .claude_process_helpers.spawn import spawn_detached
from .config import McpServerConfig
from .exceptions import SpawnFailedError, TerminationFailedError

logger = logging.getLogger(__name__)

FORCE_KILL_TIMEOUT_SECONDS = 2


def start_mcp_server(server: McpServerConfig) -> int:
    """
    Launch an MCP server in the background without a visible console.

    Returns:
        PID of the started process

    Raises:
        SpawnFailedError: If the server command could not be started
    """
    try:
        process = spawn_detached([server.command, *server.args], hide_console=True)
    except SpawnFailedError as exc:
        raise SpawnFailedError(f"Failed to start '{server.name}': {exc}", server=server.name) from exc

    logger.info("Started MCP server '%s' with PID: %s", server.name, process.pid)
    return process.pid


def stop_mcp_server(pid: int) -> None:
    """
    Force kill an MCP server by PID.

    A PID that no longer exists is treated as already stopped.

    Raises:
        TerminationFailedError: If access is denied or the process survives SIGKILL
    """
    try:
        process = psutil.Process(pid)
        process.kill()
        process.wait(timeout=FORCE_KILL_TIMEOUT_SECONDS)
    except psutil.NoSuchProcess:  # policy_guard: allow-silent-handler
        logger.debug("MCP server process %s already exited", pid)
    except psutil.AccessDenied as exc:
        raise TerminationFailedError(f"Access denied while killing MCP server process {pid}", pid=pid) from exc
    except psutil.TimeoutExpired as exc:
        raise TerminationFailedError(
            f"MCP server process {pid} persisted after SIGKILL for {FORCE_KILL_TIMEOUT_SECONDS}s", pid=pid
        ) from exc
    else:
        logger.info("Stopped MCP server process %s", pid)
