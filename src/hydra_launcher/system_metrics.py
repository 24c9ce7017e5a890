"""One-shot local resource usage snapshot."""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict

import psutil

logger = logging.getLogger(__name__)

_BYTES_PER_GIB = 1024**3
# psutil needs a short sampling window for a meaningful first reading
CPU_SAMPLE_SECONDS = 0.1


@dataclass(frozen=True)
class SystemMetrics:
    cpu_percent: float
    memory_percent: float
    memory_used_gb: float
    memory_total_gb: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_system_metrics() -> SystemMetrics:
    """Sample CPU and memory usage. Blocks for ``CPU_SAMPLE_SECONDS``."""
    cpu_percent = psutil.cpu_percent(interval=CPU_SAMPLE_SECONDS)
    memory = psutil.virtual_memory()
    memory_percent = (memory.used / memory.total) * 100.0 if memory.total else 0.0

    logger.debug("System Metrics - CPU: %.1f%%, Memory: %.1f%%", cpu_percent, memory_percent)

    return SystemMetrics(
        cpu_percent=cpu_percent,
        memory_percent=memory_percent,
        memory_used_gb=memory.used / _BYTES_PER_GIB,
        memory_total_gb=memory.total / _BYTES_PER_GIB,
    )
