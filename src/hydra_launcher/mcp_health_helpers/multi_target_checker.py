"""Concurrent fan-out of health checks across targets."""

import asyncio
import logging
from typing import Callable, Coroutine, List, Sequence

from ..exceptions import TargetUnresolvableError
from .types import HealthResult, HealthTarget

logger = logging.getLogger(__name__)


class MultiTargetChecker:
    """Checks health for multiple targets concurrently."""

    def __init__(
        self,
        check_target_fn: Callable[[HealthTarget], Coroutine[None, None, HealthResult]],
    ):
        """
        Initialize multi-target checker.

        Args:
            check_target_fn: Coroutine function checking a single target
        """
        self.check_target_fn = check_target_fn

    async def check_targets(self, targets: Sequence[HealthTarget]) -> List[HealthResult]:
        """
        Check all targets concurrently, one probe each.

        A worker that dies or is cancelled before producing a result is
        replaced by an ``Unknown`` placeholder, so one result is returned per
        target. Callers must match results by name rather than position.

        Args:
            targets: Targets to probe

        Returns:
            One HealthResult per target
        """
        tasks = [self.check_target_fn(target) for target in targets]

        results = await asyncio.gather(*tasks, return_exceptions=True)

        health_results: List[HealthResult] = []
        for result in results:
            if isinstance(result, BaseException):
                error = TargetUnresolvableError(f"Task failed: {result!r}")
                logger.warning("Health probe worker failed: %r", result)
                health_results.append(HealthResult.unresolved(str(error)))
            else:
                health_results.append(result)

        return health_results
