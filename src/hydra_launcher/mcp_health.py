"""
MCP Health Coordinator

Concurrent TCP liveness checks for the MCP helper servers. A check round
never fails as a whole; every target yields a HealthResult and individual
failures degrade to offline or placeholder results.
"""

import logging
from typing import List, Optional, Sequence

from .config import env_float, env_str
from .mcp_health_helpers.multi_target_checker import MultiTargetChecker
from .mcp_health_helpers.port_prober import DEFAULT_PROBE_TIMEOUT_SECONDS
from .mcp_health_helpers.server_checker import DEFAULT_MCP_HOST, check_mcp_server
from .mcp_health_helpers.types import DEFAULT_HEALTH_TARGETS, HealthResult, HealthTarget, McpStatus

logger = logging.getLogger(__name__)

__all__ = ["McpHealthCoordinator", "HealthResult", "HealthTarget", "McpStatus", "DEFAULT_HEALTH_TARGETS"]


class McpHealthCoordinator:
    """
    Fans a fixed list of targets out to the port prober and gathers results.

    Stateless apart from its settings, so it is safe to call on a timer.
    """

    def __init__(
        self,
        targets: Optional[Sequence[HealthTarget]] = None,
        *,
        host: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Initialize coordinator.

        Args:
            targets: Default targets for check_all (default: Serena, Desktop Commander, Playwright)
            host: Host to probe (default: HYDRA_MCP_HOST or 127.0.0.1)
            timeout_seconds: Per-probe timeout (default: HYDRA_PROBE_TIMEOUT_SECONDS or 2)
        """
        self.targets = tuple(targets) if targets is not None else DEFAULT_HEALTH_TARGETS
        self.host = host or env_str("HYDRA_MCP_HOST", DEFAULT_MCP_HOST)
        if timeout_seconds is None:
            timeout_seconds = env_float("HYDRA_PROBE_TIMEOUT_SECONDS", DEFAULT_PROBE_TIMEOUT_SECONDS)
        self.timeout_seconds = timeout_seconds
        self._multi_checker = MultiTargetChecker(self.check_target)

    async def check_target(self, target: HealthTarget) -> HealthResult:
        return await check_mcp_server(target, host=self.host, timeout_seconds=self.timeout_seconds)

    async def check_all(self, targets: Optional[Sequence[HealthTarget]] = None) -> List[HealthResult]:
        """
        Check every target concurrently.

        Args:
            targets: Targets to probe (default: the coordinator's targets)

        Returns:
            One HealthResult per target, in no guaranteed order
        """
        selected = self.targets if targets is None else tuple(targets)
        logger.info("MCP health check started")
        results = await self._multi_checker.check_targets(selected)
        for result in results:
            _log_result(result)
        return results


def _log_result(result: HealthResult) -> None:
    status = "HEALTHY" if result.is_online else "DOWN"
    if result.response_time_ms is not None:
        logger.info("MCP %s - %s (%sms)", result.name, status, result.response_time_ms)
    else:
        logger.info("MCP %s - %s", result.name, status)
