"""Host metrics collection for pyuss."""

import time
from collections.abc import Callable
from typing import TypeVar

import psutil

from pyuss.models import DISK_PATH, Sample

T = TypeVar("T")

# AccessDenied and OSError for unreadable sources, NotImplementedError and
# RuntimeError for calls some platforms cannot answer
PROVIDER_ERRORS = (psutil.Error, OSError, NotImplementedError, RuntimeError)


class MetricsError(Exception):
    """A metrics query failed; the sample cannot be trusted."""

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause


class SystemMonitor:
    """
    Metrics provider backed by psutil.

    Every query either returns a value or raises MetricsError naming the
    psutil call that failed. There is no retry and no fallback value.
    """

    def _query(self, operation: str, func: Callable[..., T], *args, **kwargs) -> T:
        """Run one psutil call, translating its failures into MetricsError."""
        try:
            return func(*args, **kwargs)
        except PROVIDER_ERRORS as err:
            raise MetricsError(operation, err) from err

    def cpu_percent(self, interval: float) -> float:
        """
        Get CPU busy percentage over a measurement window.

        Blocks the caller for ``interval`` seconds.
        """
        return self._query("psutil.cpu_percent", psutil.cpu_percent, interval=interval)

    def cpu_count(self) -> int:
        """Get the number of logical cores."""
        count = self._query("psutil.cpu_count", psutil.cpu_count, logical=True)
        if count is None:
            raise MetricsError("psutil.cpu_count", "core count undetermined")
        return count

    def virtual_memory(self) -> tuple[int, float]:
        """Get total memory bytes and used percentage."""
        mem = self._query("psutil.virtual_memory", psutil.virtual_memory)
        return mem.total, mem.percent

    def swap_memory(self) -> tuple[int, float]:
        """Get total swap bytes and used percentage."""
        swap = self._query("psutil.swap_memory", psutil.swap_memory)
        return swap.total, swap.percent

    def disk_usage(self, path: str = DISK_PATH) -> tuple[int, float]:
        """Get total bytes and used percentage of the filesystem at ``path``."""
        disk = self._query("psutil.disk_usage", psutil.disk_usage, path)
        return disk.total, disk.percent

    def uptime(self) -> float:
        """Get seconds since boot."""
        boot_time = self._query("psutil.boot_time", psutil.boot_time)
        return max(0.0, time.time() - boot_time)

    def collect_sample(self, cpu_interval: float) -> Sample:
        """Collect a full sample of the current host state."""
        cpu_percent = self.cpu_percent(cpu_interval)
        cpu_count = self.cpu_count()
        memory_total, memory_percent = self.virtual_memory()
        swap_total, swap_percent = self.swap_memory()
        disk_total, disk_percent = self.disk_usage(DISK_PATH)
        uptime = self.uptime()

        return Sample(
            cpu_percent=cpu_percent,
            cpu_count=cpu_count,
            memory_total=memory_total,
            memory_percent=memory_percent,
            swap_total=swap_total,
            swap_percent=swap_percent,
            disk_total=disk_total,
            disk_percent=disk_percent,
            uptime_seconds=uptime,
        )
