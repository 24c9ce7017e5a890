"""Single spawn primitive for the Claude CLI.

Both the fire-and-forget launch and the supervised interactive session go
through ``spawn_claude``; they differ only in ``SpawnRequest.detached``.
"""

from __future__ import annotations

import logging
import platform
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..exceptions import SpawnFailedError
from .executable import claude_command

logger = logging.getLogger(__name__)

SKIP_PERMISSIONS_FLAG = "--dangerously-skip-permissions"

# Windows creation flag that keeps background helpers from opening a console
CREATE_NO_WINDOW = 0x08000000


@dataclass(frozen=True)
class SpawnRequest:
    """How to start one CLI instance.

    ``initial_payload`` becomes a ``-p`` argument for detached launches. For
    interactive sessions the caller writes it to stdin after start.
    """

    working_directory: Path
    yolo_mode: bool = True
    detached: bool = False
    initial_payload: Optional[str] = None
    command: Sequence[str] = field(default_factory=claude_command)

    def cli_args(self) -> List[str]:
        args: List[str] = []
        if self.yolo_mode:
            args.append(SKIP_PERMISSIONS_FLAG)
        if self.detached and self.initial_payload is not None:
            args.extend(["-p", self.initial_payload])
        return args

    def argv(self) -> List[str]:
        return [*self.command, *self.cli_args()]


def spawn_claude(request: SpawnRequest) -> subprocess.Popen:
    """
    Start the CLI described by ``request``.

    Returns:
        The process handle. Detached callers are expected to drop it.

    Raises:
        SpawnFailedError: If the process could not be created
    """
    flag_note = " (YOLO)" if request.yolo_mode else ""
    logger.info(
        "Launching Claude CLI%s in %s (%s)",
        flag_note,
        request.working_directory,
        "detached" if request.detached else "interactive",
    )
    if request.detached:
        return _spawn_detached_claude(request)
    return _spawn_interactive(request)


def _spawn_interactive(request: SpawnRequest) -> subprocess.Popen:
    try:
        return subprocess.Popen(
            request.argv(),
            cwd=str(request.working_directory),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except (OSError, ValueError) as exc:
        raise SpawnFailedError(f"Failed to start Claude CLI: {exc}", command=list(request.command)) from exc


def _spawn_detached_claude(request: SpawnRequest) -> subprocess.Popen:
    if platform.system() == "Windows":
        return spawn_detached(["cmd", "/c", "start", "cmd", "/k", _windows_console_command(request)])
    return spawn_detached(request.argv(), cwd=request.working_directory)


def _windows_console_command(request: SpawnRequest) -> str:
    base_args = [*request.command]
    if request.yolo_mode:
        base_args.append(SKIP_PERMISSIONS_FLAG)
    command = f'cd /d "{request.working_directory}" && {" ".join(base_args)}'
    if request.initial_payload is not None:
        # cmd.exe cannot carry newlines inside a quoted argument
        escaped = request.initial_payload.replace("\r", "").replace("\n", " ").replace('"', "'")
        command += f' -p "{escaped}"'
    return command


def spawn_detached(argv: Sequence[str], *, cwd: Optional[Path] = None, hide_console: bool = False) -> subprocess.Popen:
    """
    Start a process that outlives its launcher and is not supervised.

    Raises:
        SpawnFailedError: If the process could not be created
    """
    kwargs = {}
    if platform.system() == "Windows":
        if hide_console:
            kwargs["creationflags"] = CREATE_NO_WINDOW
    else:
        kwargs["start_new_session"] = True

    try:
        process = subprocess.Popen(list(argv), cwd=str(cwd) if cwd is not None else None, **kwargs)
    except (OSError, ValueError) as exc:
        raise SpawnFailedError(f"Failed to launch {argv[0]}: {exc}", command=list(argv)) from exc

    logger.info("Started %s with PID %s", argv[0], process.pid)
    return process


__all__ = ["CREATE_NO_WINDOW", "SKIP_PERMISSIONS_FLAG", "SpawnRequest", "spawn_claude", "spawn_detached"]
