"""Single MCP server health check."""

import logging

from ..exceptions import ConnectionFailedError, ConnectionTimeoutError
from .port_prober import DEFAULT_PROBE_TIMEOUT_SECONDS, probe_port
from .types import HealthResult, HealthTarget

logger = logging.getLogger(__name__)

DEFAULT_MCP_HOST = "127.0.0.1"


async def check_mcp_server(
    target: HealthTarget,
    *,
    host: str = DEFAULT_MCP_HOST,
    timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
) -> HealthResult:
    """
    Probe one MCP server and convert the outcome into a HealthResult.

    Probe failures never propagate; they become offline results carrying the
    failure reason.
    """
    try:
        response_time_ms = await probe_port(host, target.port, timeout_seconds)
    except (ConnectionFailedError, ConnectionTimeoutError) as exc:  # policy_guard: allow-silent-handler
        logger.debug("MCP %s on port %s unreachable: %s", target.name, target.port, exc)
        return HealthResult.offline(target, str(exc))

    return HealthResult.online(target, response_time_ms)
