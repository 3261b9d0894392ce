#!/usr/bin/env python3
"""Console and file logging for the wheel runner."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
# Third-party loggers that flood DEBUG output while images load.
NOISY_LOGGERS = ("PIL",)


def parse_level(level: Union[int, str]) -> int:
    """Accept a level number or a name such as ``"debug"``; unknown names mean INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> int:
    """Route every wheel module's records to stdout and, optionally, a file.

    Calling it again replaces the handlers instead of stacking them.
    Returns the numeric level in effect.
    """
    numeric = parse_level(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(numeric)
        handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(numeric)
    root.handlers[:] = handlers

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric, logging.INFO))

    logging.getLogger(__name__).debug("Logging at %s", logging.getLevelName(numeric))
    return numeric
