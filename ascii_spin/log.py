"""Logging setup for the ascii-spin entry points.

Usage:
    from ascii_spin.log import setup_logging

    setup_logging()                                   # INFO to stderr
    setup_logging(debug=True, log_file="spin.log")    # per-frame details, to a file
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Where --debug sends its records while frames are painted on the terminal
DEBUG_LOG_FILE = "ascii-spin.log"

# Log rotation defaults
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3


def build_handlers(
    log_file: str | Path | None = None,
    max_bytes: int = MAX_BYTES,
    backup_count: int = BACKUP_COUNT,
) -> list[logging.Handler]:
    """A rotating file handler when log_file is set, otherwise stderr.

    stderr shares the terminal the frames are painted on, so a log file
    replaces it rather than adding to it.
    """
    if log_file is None:
        return [logging.StreamHandler(sys.stderr)]
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    return [RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)]


def setup_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    *,
    debug: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """Configure the root logger. Call once per entry point."""
    if debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=fmt, handlers=build_handlers(log_file))
