"""
Claude CLI Session

Supervises one interactive Claude CLI process over its standard streams.
Output is collected by a background thread into an in-memory buffer that the
GUI polls with ``read_output``.

``is_running`` reflects only start/stop bookkeeping. A child that exits on
its own is not detected; use ``exit_code`` to inspect it.
"""

from __future__ import annotations

import logging
import subprocess
import threading
import weakref
from pathlib import Path
from typing import List, Optional, Sequence

from .claude_process_helpers.executable import claude_command
from .claude_process_helpers.log_preview import preview
from .claude_process_helpers.output_buffer import OutputBuffer, start_reader_thread
from .claude_process_helpers.spawn import SpawnRequest, spawn_claude
from .exceptions import (
    AlreadyRunningError,
    LauncherError,
    NoInputChannelError,
    NotRunningError,
    SessionIOError,
    TerminationFailedError,
)

logger = logging.getLogger(__name__)

# How long stop() waits for a killed child to be reaped
KILL_WAIT_SECONDS = 5.0

__all__ = ["ClaudeSession"]


def _kill_orphan(process: subprocess.Popen) -> None:
    """Finalizer for sessions collected or abandoned at exit without stop()."""
    if process.poll() is not None:
        return
    try:
        process.kill()
        process.wait(timeout=KILL_WAIT_SECONDS)
    except (OSError, subprocess.TimeoutExpired) as exc:  # policy_guard: allow-silent-handler
        logger.warning("Failed to kill orphaned Claude CLI process %s: %s", process.pid, exc)


class ClaudeSession:
    """
    Owns at most one Claude CLI process.

    Use as a context manager to guarantee the child is killed on scope exit:

        with ClaudeSession() as session:
            session.start(yolo_mode=True, working_directory=path)
            session.send("hello")
    """

    def __init__(self, command: Optional[Sequence[str]] = None):
        """
        Initialize an idle session.

        Args:
            command: Argv prefix for the CLI (default: HYDRA_CLAUDE_EXECUTABLE or ``claude``)
        """
        self._command = list(command) if command is not None else claude_command()
        self._process: Optional[subprocess.Popen] = None
        self._running = False
        self._output = OutputBuffer()
        self._readers: List[threading.Thread] = []
        self._finalizer: Optional[weakref.finalize] = None
        self._lifecycle_lock = threading.Lock()

    def __enter__(self) -> "ClaudeSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def __del__(self) -> None:
        if getattr(self, "_process", None) is None:
            return
        try:
            self.stop()
        except LauncherError as exc:  # policy_guard: allow-silent-handler
            logger.warning("Session teardown could not stop Claude CLI: %s", exc)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pid(self) -> Optional[int]:
        process = self._process
        return process.pid if process is not None else None

    @property
    def exit_code(self) -> Optional[int]:
        """Exit code of the held process, or None while it runs or when idle."""
        process = self._process
        return process.poll() if process is not None else None

    def start(self, yolo_mode: bool, working_directory: Path, initial_payload: Optional[str] = None) -> None:
        """
        Start a new Claude CLI session.

        Args:
            yolo_mode: Pass the skip-permissions flag to the CLI
            working_directory: Directory the CLI runs in
            initial_payload: Optional first message written to stdin after start

        Raises:
            AlreadyRunningError: If a session process is already owned
            SpawnFailedError: If the process could not be created
            SessionIOError: If the initial payload could not be written; the session is stopped first
        """
        with self._lifecycle_lock:
            if self._running:
                raise AlreadyRunningError(pid=self.pid)

            request = SpawnRequest(
                working_directory=Path(working_directory),
                yolo_mode=yolo_mode,
                detached=False,
                command=self._command,
            )
            process = spawn_claude(request)

            self._readers = []
            if process.stdout is not None:
                self._readers.append(start_reader_thread(process.stdout, self._output.append, label=f"claude-stdout-{process.pid}"))
            if process.stderr is not None:
                self._readers.append(start_reader_thread(process.stderr, _log_stderr_line, label=f"claude-stderr-{process.pid}"))

            self._finalizer = weakref.finalize(self, _kill_orphan, process)
            self._process = process
            self._running = True
            logger.info("Claude CLI session started (PID %s)", process.pid)

        if initial_payload is not None:
            try:
                self.send(initial_payload)
            except LauncherError:
                logger.error("Initial payload could not be delivered; stopping Claude CLI session")
                self.stop()
                raise

    def send(self, message: str) -> None:
        """
        Write one line to the CLI's stdin and flush.

        May block if the child is not consuming input.

        Raises:
            NotRunningError: If no session is running
            NoInputChannelError: If the process has no stdin pipe
            SessionIOError: If the write or flush failed
        """
        with self._lifecycle_lock:
            process = self._process
            if not self._running or process is None:
                raise NotRunningError()
            stdin = process.stdin
            if stdin is None:
                raise NoInputChannelError(pid=process.pid)

        try:
            stdin.write(f"{message}\n")
            stdin.flush()
        except (OSError, ValueError) as exc:
            raise SessionIOError(f"Failed to send message: {exc}", pid=process.pid) from exc

        logger.info("Claude CLI [SEND]: %s", preview(message))

    def read_output(self) -> List[str]:
        """Drain accumulated stdout lines; each line is returned at most once."""
        return self._output.drain()

    def wait_output_closed(self, timeout: Optional[float] = None) -> bool:
        """Block until the reader threads hit EOF. Returns False on timeout."""
        for reader in list(self._readers):
            reader.join(timeout)
            if reader.is_alive():
                return False
        return True

    def stop(self) -> None:
        """
        Kill the session process if one is held.

        The session is idle afterwards even when the kill fails, so a later
        ``start`` is never blocked by stale bookkeeping.

        Raises:
            TerminationFailedError: If the process could not be killed or reaped
        """
        with self._lifecycle_lock:
            process = self._process
            self._process = None
            self._running = False
            finalizer, self._finalizer = self._finalizer, None

        if finalizer is not None:
            finalizer.detach()
        if process is None:
            return

        logger.info("Stopping Claude CLI session (PID %s)", process.pid)
        try:
            process.kill()
        except OSError as exc:
            raise TerminationFailedError(f"Failed to kill process: {exc}", pid=process.pid) from exc
        finally:
            _close_stdin(process)

        try:
            process.wait(timeout=KILL_WAIT_SECONDS)
        except subprocess.TimeoutExpired as exc:
            raise TerminationFailedError(
                f"Claude CLI process {process.pid} persisted after kill for {KILL_WAIT_SECONDS}s", pid=process.pid
            ) from exc


def _log_stderr_line(line: str) -> None:
    logger.warning("Claude CLI [STDERR]: %s", line)


def _close_stdin(process: subprocess.Popen) -> None:
    if process.stdin is None:
        return
    try:
        process.stdin.close()
    except (OSError, ValueError) as exc:  # Broken pipe after kill  # policy_guard: allow-silent-handler
        logger.debug("Closing Claude CLI stdin raised %s", exc)
