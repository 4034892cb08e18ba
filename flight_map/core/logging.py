"""Logging setup for hosts embedding the pipeline.

Library modules only ever call ``logging.getLogger("flight_map.<area>")``;
nothing is configured at import time.  A command-line tool or service
calls ``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "flight_map"

_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def configure_logging(level: int = logging.INFO, *, log_file: str | None = None) -> logging.Logger:
    """Configure the ``flight_map`` logger namespace.

    Existing handlers are replaced so repeated calls do not duplicate
    output.

    Args:
        level: Logging level (e.g. ``logging.DEBUG``).
        log_file: Optional path to additionally write logs to.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging configured | level=%s", logging.getLevelName(level))
    return logger
