"""Data models for pyuss."""

from dataclasses import dataclass

VISUAL_RATIO = 5  # Percentage points per gauge character
GAUGE_WIDTH = 100 // VISUAL_RATIO

HOSTNAME_MAX_LEN = 14
HOSTNAME_SUFFIX_LEN = 4
HOSTNAME_SEPARATOR = "~"

DEFAULT_CPU_INTERVAL = 0.1  # Seconds
DISK_PATH = "/"


@dataclass(slots=True, frozen=True)
class Sample:
    """Immutable reading of the host metrics at one instant."""

    cpu_percent: float  # 0.0 - 100.0, averaged over the measurement window
    cpu_count: int  # Logical cores
    memory_total: int  # Bytes
    memory_percent: float
    swap_total: int  # Bytes, 0 when no swap is configured
    swap_percent: float
    disk_total: int  # Bytes
    disk_percent: float
    uptime_seconds: float


@dataclass(slots=True, frozen=True)
class RunConfig:
    """Process-lifetime settings resolved once at startup."""

    hostname: str
    poll_interval: int = 0  # Seconds, 0 means run once
    time_limit: int = 0  # Seconds, 0 means no limit

    @property
    def repeating(self) -> bool:
        """Whether the sampling loop repeats."""
        return self.poll_interval > 0

    @property
    def cpu_interval(self) -> float:
        """Window for the CPU busy measurement, in seconds."""
        if self.poll_interval > DEFAULT_CPU_INTERVAL:
            return float(self.poll_interval)
        return DEFAULT_CPU_INTERVAL
