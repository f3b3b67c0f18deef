"""Process and host statistics reported by the probes."""

import time
from dataclasses import dataclass

import psutil

MEMORY_WARNING_BYTES = 500 * 1024 * 1024
_MB = 1024 * 1024


@dataclass(frozen=True)
class MemoryStats:
    used_bytes: int
    total_bytes: int

    @property
    def used_mb(self) -> int:
        return round(self.used_bytes / _MB)

    @property
    def total_mb(self) -> int:
        return round(self.total_bytes / _MB)

    @property
    def status(self) -> str:
        return "ok" if self.used_bytes < MEMORY_WARNING_BYTES else "warning"


class ProcessStats:
    """Reads resident memory and uptime for the current process."""

    def __init__(self, process: psutil.Process | None = None):
        self.process = process or psutil.Process()

    def memory(self) -> MemoryStats:
        return MemoryStats(
            used_bytes=self.process.memory_info().rss,
            total_bytes=psutil.virtual_memory().total,
        )

    def uptime_seconds(self) -> float:
        return max(time.time() - self.process.create_time(), 0.0)
