"""pyuss - Status line application."""

import argparse
import re
import socket
import sys
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from typing import TextIO

from pyuss.formatting import format_line, line_timestamp, shorten_hostname
from pyuss.log import setup_logging
from pyuss.models import RunConfig
from pyuss.monitor import MetricsError, SystemMonitor

INTEGER_RE = re.compile(r"\+?[0-9]+")  # ASCII digits only


class ConfigError(Exception):
    """The program cannot be configured from its arguments or environment."""


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises ConfigError instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ConfigError(message)


def get_version() -> str:
    """Get the installed package version."""
    try:
        return version("pyuss")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> ArgumentParser:
    """Build the command line parser."""
    parser = ArgumentParser(
        prog="pyuss",
        add_help=False,
        description="Print a one-line host status (cpu, mem, swap, disk, uptime).",
        epilog="Run `pyuss version` to print the version.",
    )
    parser.add_argument(
        "interval",
        nargs="?",
        help="repeat every INTERVAL seconds (default: print once)",
    )
    parser.add_argument(
        "limit",
        nargs="?",
        help="stop repeating after LIMIT seconds (default: never)",
    )
    return parser


def parse_seconds(value: str | None, name: str) -> int:
    """Parse a non-negative whole number of seconds."""
    if value is None:
        return 0
    if not INTEGER_RE.fullmatch(value):
        raise ConfigError(f"invalid integer `{value}` for {name} in seconds")
    return int(value)


def resolve_hostname() -> str:
    """Get the local hostname, shortened for display."""
    try:
        hostname = socket.gethostname()
    except OSError as err:
        raise ConfigError(f"hostname: {err}") from err
    if not hostname:
        raise ConfigError("hostname: empty hostname")
    return shorten_hostname(hostname)


def build_config(argv: Sequence[str]) -> RunConfig:
    """Resolve the run configuration from command line arguments."""
    if "--" in argv:
        raise ConfigError("unexpected argument `--`")
    args = build_parser().parse_args(argv)
    poll_interval = parse_seconds(args.interval, "repeat interval")
    time_limit = parse_seconds(args.limit, "time limit")
    return RunConfig(
        hostname=resolve_hostname(),
        poll_interval=poll_interval,
        time_limit=time_limit,
    )


class StatusApp:
    """
    Sampling loop that prints one status line per cycle.

    Runs once when no poll interval is configured. Otherwise repeats,
    sleeping the poll interval between cycles, and stops once the time
    limit (if any) has been exceeded after a completed cycle.
    """

    def __init__(
        self,
        config: RunConfig,
        monitor: SystemMonitor | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        out: TextIO | None = None,
    ) -> None:
        """
        Initialize the StatusApp.

        Args:
            config: Run configuration resolved at startup.
            monitor: Metrics provider. Defaults to a psutil SystemMonitor.
            clock: Monotonic clock used for the time limit.
            sleep: Function used to wait between cycles.
            out: Stream for status lines. Defaults to sys.stdout.
        """
        self._config = config
        self._monitor = monitor or SystemMonitor()
        self._clock = clock
        self._sleep = sleep
        self._out = out

    @property
    def config(self) -> RunConfig:
        """Get the run configuration."""
        return self._config

    def print_sample(self) -> None:
        """Collect one sample and write its status line."""
        # Stamp before the CPU window blocks
        timestamp = line_timestamp(datetime.now(timezone.utc))
        sample = self._monitor.collect_sample(self._config.cpu_interval)
        out = self._out or sys.stdout
        out.write(format_line(timestamp, self._config.hostname, sample) + "\n")
        out.flush()

    def run(self) -> None:
        """Run the sampling loop until done. MetricsError propagates."""
        if not self._config.repeating:
            self.print_sample()
            return

        start = self._clock()
        while True:
            self.print_sample()
            self._sleep(self._config.poll_interval)
            if self._config.time_limit > 0 and self._clock() - start > self._config.time_limit:
                break


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for pyuss. Returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    if argv == ["version"]:
        print(get_version())
        return 0

    logger = setup_logging()
    try:
        config = build_config(argv)
        StatusApp(config).run()
    except (ConfigError, MetricsError) as err:
        logger.error("%s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
