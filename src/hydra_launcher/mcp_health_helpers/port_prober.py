"""Single TCP connection probe."""

import asyncio
import logging
import time

from ..exceptions import ConnectionFailedError, ConnectionTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT_SECONDS = 2.0
DATA_FETCH_TIMEOUT_SECONDS = 5.0


async def probe_port(host: str, port: int, timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS) -> int:
    """
    Open one TCP connection to ``host:port`` and measure how long it took.

    No retry is attempted; the socket is closed before returning.

    Args:
        host: Host to connect to (loopback in practice)
        port: TCP port
        timeout_seconds: Upper bound on connection establishment

    Returns:
        Elapsed milliseconds from attempt start to connection completion

    Raises:
        ConnectionTimeoutError: If the attempt did not resolve within the timeout
        ConnectionFailedError: If the connection was refused or otherwise failed
    """
    start = time.monotonic()
    try:
        _reader, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout=timeout_seconds)
    # TimeoutError subclasses OSError, so it must be matched first
    except asyncio.TimeoutError as exc:
        raise ConnectionTimeoutError(host=host, port=port, timeout_seconds=timeout_seconds) from exc
    except OSError as exc:
        raise ConnectionFailedError(f"Connection failed: {exc}", host=host, port=port) from exc

    elapsed_ms = int((time.monotonic() - start) * 1000)
    await _close_quietly(writer)
    return elapsed_ms


async def _close_quietly(writer: asyncio.StreamWriter) -> None:
    writer.close()
    try:
        await writer.wait_closed()
    except OSError as exc:  # Peer reset during close  # policy_guard: allow-silent-handler
        logger.debug("Probe socket close raised %s", exc)
