"""Type definitions for MCP health checking."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

_MAX_PORT = 65535


class McpStatus(Enum):
    """Liveness status of one probed MCP server"""

    ONLINE = "online"
    OFFLINE = "offline"
    ERROR = "error"


@dataclass(frozen=True)
class HealthTarget:
    """Named TCP endpoint to probe"""

    name: str
    port: int

    def __post_init__(self) -> None:
        if not 0 <= self.port <= _MAX_PORT:
            raise ValueError(f"Port for {self.name!r} must be in 0..{_MAX_PORT} (got {self.port})")


@dataclass(frozen=True)
class HealthResult:
    """Outcome of a single probe round for one target.

    ``response_time_ms`` is present exactly when the target is online, and an
    online result never carries an error.
    """

    name: str
    port: int
    status: McpStatus
    response_time_ms: Optional[int] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.status is McpStatus.ONLINE:
            if self.response_time_ms is None or self.error is not None:
                raise ValueError("Online results require response_time_ms and no error")
        elif self.response_time_ms is not None:
            raise ValueError(f"{self.status.value} results must not carry response_time_ms")
        if self.response_time_ms is not None and self.response_time_ms < 0:
            raise ValueError("response_time_ms must be non-negative")

    @classmethod
    def online(cls, target: HealthTarget, response_time_ms: int) -> "HealthResult":
        return cls(name=target.name, port=target.port, status=McpStatus.ONLINE, response_time_ms=response_time_ms)

    @classmethod
    def offline(cls, target: HealthTarget, error: str) -> "HealthResult":
        return cls(name=target.name, port=target.port, status=McpStatus.OFFLINE, error=error)

    @classmethod
    def unresolved(cls, error: str) -> "HealthResult":
        """Placeholder for a probe worker that never produced a result."""
        return cls(name="Unknown", port=0, status=McpStatus.ERROR, error=error)

    @property
    def is_online(self) -> bool:
        return self.status is McpStatus.ONLINE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "port": self.port,
            "status": self.status.value,
            "response_time_ms": self.response_time_ms,
            "error": self.error,
        }


DEFAULT_HEALTH_TARGETS = (
    HealthTarget("Serena", 9000),
    HealthTarget("Desktop Commander", 8100),
    HealthTarget("Playwright", 5200),
)
