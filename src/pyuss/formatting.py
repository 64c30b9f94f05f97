"""Text rendering for the pyuss status line."""

from datetime import datetime, timedelta, timezone

from pyuss.models import (
    GAUGE_WIDTH,
    HOSTNAME_MAX_LEN,
    HOSTNAME_SEPARATOR,
    HOSTNAME_SUFFIX_LEN,
    VISUAL_RATIO,
    Sample,
)

FILLED = "="
EMPTY = "-"

BEAT_ZONE = timezone(timedelta(hours=1), "BMT")
GIGABYTE = 1 << 30


def gauge(percent: float) -> str:
    """Render a percentage as a fixed-width bar of filled and empty characters."""
    value = min(max(int(percent), 0), 100)
    filled = value // VISUAL_RATIO
    return FILLED * filled + EMPTY * (GAUGE_WIDTH - filled)


def swap_gauge(total: int, percent: float) -> str:
    """Render the swap bar, empty when no swap is configured."""
    if total > 0:
        return gauge(percent)
    return EMPTY * GAUGE_WIDTH


def size_gb(size: int) -> int:
    """Whole gigabytes, truncated."""
    return size // GIGABYTE


def shorten_hostname(hostname: str) -> str:
    """
    Fit a hostname into the status bar.

    Drops a trailing ``.local`` and, when still too long, keeps a prefix and
    the last few characters joined by a separator so the result is exactly
    HOSTNAME_MAX_LEN characters.
    """
    if hostname.endswith(".local"):
        hostname = hostname[: -len(".local")]
    if len(hostname) <= HOSTNAME_MAX_LEN:
        return hostname
    prefix_len = HOSTNAME_MAX_LEN - HOSTNAME_SUFFIX_LEN - len(HOSTNAME_SEPARATOR)
    return hostname[:prefix_len] + HOSTNAME_SEPARATOR + hostname[-HOSTNAME_SUFFIX_LEN:]


def format_uptime(seconds: float) -> str:
    """
    Format uptime as ``{weeks}w{days}d.H:MM:SS``.

    Zero weeks or days are omitted, and the dot only appears after one of them.
    """
    days, remainder = divmod(int(seconds), 86400)
    weeks, days = divmod(days, 7)

    prefix = ""
    if weeks > 0:
        prefix += f"{weeks}w"
    if days > 0:
        prefix += f"{days}d"
    if prefix:
        prefix += "."
    return f"{prefix}{timedelta(seconds=remainder)}"


def beat(now: datetime | None = None) -> int:
    """Get the time of day in beats (thousandths of a day) on the UTC+1 clock."""
    local = (now or datetime.now(timezone.utc)).astimezone(BEAT_ZONE)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return int((local - midnight).total_seconds() * 1000 // 86400)


def line_timestamp(now: datetime | None = None) -> str:
    """Timestamp token that starts every status line."""
    return f"@{beat(now):3d}"


def log_timestamp(now: datetime | None = None) -> str:
    """Compact ``yyy/day-of-year@beat`` token for diagnostics."""
    local = (now or datetime.now(timezone.utc)).astimezone(BEAT_ZONE)
    return f"{local.year % 1000}/{local.timetuple().tm_yday}@{beat(local)}"


def format_line(timestamp: str, hostname: str, sample: Sample) -> str:
    """Build one status line (without the trailing newline)."""
    cpu_bar = gauge(sample.cpu_percent)
    mem_bar = gauge(sample.memory_percent)
    swap_bar = swap_gauge(sample.swap_total, sample.swap_percent)
    disk_bar = gauge(sample.disk_percent)

    return (
        f"{timestamp}\t{hostname}\t"
        f"cpu{cpu_bar}{sample.cpu_count} "
        f"mem{mem_bar}{size_gb(sample.memory_total)}gb "
        f"swap{swap_bar}{size_gb(sample.swap_total)}gb "
        f"disk{disk_bar}{size_gb(sample.disk_total)}gb "
        f"uptime:{format_uptime(sample.uptime_seconds)}"
    )
