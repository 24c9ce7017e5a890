"""Exception classes for the launcher supervision core.

All launcher failures inherit from ``LauncherError`` so the GUI layer can
surface them uniformly.

Exception classes support two patterns:
1. No-argument raise: raise NotRunningError()
2. Contextual attributes: err = SpawnFailedError(command="claude"); raise err
"""

from typing import Any


class LauncherError(Exception):
    """Base exception for all launcher errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    default_message = "Launcher error occurred"

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.default_message
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


# Port prober / daemon transport


class ConnectionFailedError(LauncherError):
    """Connection was refused or failed before the timeout elapsed."""

    default_message = "Connection failed"


class ConnectionTimeoutError(LauncherError):
    """Connection attempt did not resolve before the timeout."""

    default_message = "Connection timeout"


# Session


class AlreadyRunningError(LauncherError):
    """A session start was requested while a process is already owned."""

    default_message = "Session already running"


class NotRunningError(LauncherError):
    """A session operation requires a running process."""

    default_message = "No active session"


class NoInputChannelError(LauncherError):
    """The supervised process has no stdin pipe."""

    default_message = "No stdin available"


class SpawnFailedError(LauncherError):
    """The external process could not be started."""

    default_message = "Failed to start process"


class TerminationFailedError(LauncherError):
    """The external process could not be killed."""

    default_message = "Failed to kill process"


class SessionIOError(LauncherError):
    """Writing to the supervised process failed."""

    default_message = "Failed to send message"


# Model-serving daemon


class MalformedResponseError(LauncherError):
    """The daemon returned a body that does not match the expected schema."""

    default_message = "Failed to parse response"


class UpstreamStatusError(LauncherError):
    """The daemon returned a non-success HTTP status."""

    default_message = "Upstream returned an error status"

    def __init__(self, message: str = "", *, status: int = 0, **kwargs: Any) -> None:
        if not message and status:
            message = f"Ollama returned status: {status}"
        super().__init__(message, status=status, **kwargs)


# Batch health check


class TargetUnresolvableError(LauncherError):
    """A health probe worker finished without producing a result."""

    default_message = "Task failed"


__all__ = [
    "AlreadyRunningError",
    "ConnectionFailedError",
    "ConnectionTimeoutError",
    "LauncherError",
    "MalformedResponseError",
    "NoInputChannelError",
    "NotRunningError",
    "SessionIOError",
    "SpawnFailedError",
    "TargetUnresolvableError",
    "TerminationFailedError",
    "UpstreamStatusError",
]
