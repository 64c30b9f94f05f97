"""Diagnostic logging for pyuss."""

import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

from pyuss.formatting import log_timestamp

logger = logging.getLogger("pyuss")


class BeatFormatter(logging.Formatter):
    """Formatter that stamps records with the compact beat timestamp."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return log_timestamp(datetime.fromtimestamp(record.created, timezone.utc))


def setup_logging(stream: TextIO | None = None) -> logging.Logger:
    """
    Route pyuss diagnostics to a single stream handler.

    Replaces any handler from an earlier call so the logger always writes
    to the stream that is current when the program starts.

    Args:
        stream: Destination for diagnostics. Defaults to sys.stderr.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(BeatFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger
