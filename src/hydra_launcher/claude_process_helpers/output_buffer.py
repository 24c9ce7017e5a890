"""Line buffer shared between a session and its stdout reader thread."""

import logging
import threading
from typing import Callable, List, TextIO

logger = logging.getLogger(__name__)


class OutputBuffer:
    """Append-only line buffer drained with read-and-clear semantics.

    The lock is held only for a single append or drain, never across I/O.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lines: List[str] = []

    def append(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    def drain(self) -> List[str]:
        """Return all buffered lines in arrival order and clear the buffer."""
        with self._lock:
            lines, self._lines = self._lines, []
        return lines


def pump_lines(stream: TextIO, sink: Callable[[str], None], *, label: str) -> None:
    """Forward complete lines from ``stream`` to ``sink`` until EOF or close."""
    try:
        for raw_line in stream:
            sink(raw_line.rstrip("\r\n"))
    except (OSError, ValueError) as exc:  # Stream closed by kill  # policy_guard: allow-silent-handler
        logger.debug("%s reader stopped: %s", label, exc)
    finally:
        try:
            stream.close()
        except OSError as exc:  # policy_guard: allow-silent-handler
            logger.debug("%s stream close failed: %s", label, exc)
    logger.debug("%s reader reached EOF", label)


def start_reader_thread(stream: TextIO, sink: Callable[[str], None], *, label: str) -> threading.Thread:
    thread = threading.Thread(target=pump_lines, args=(stream, sink), kwargs={"label": label}, name=label, daemon=True)
    thread.start()
    return thread
