"""Logging setup that prints messages in the ``lazysh: [LEVEL] message`` form."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "lazysh"

_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
}


class LazyshFormatter(logging.Formatter):
    """Prefix every message with the program name; info messages carry no level tag."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            return f"lazysh: {message}"
        level = _LEVEL_NAMES.get(record.levelno, record.levelname)
        return f"lazysh: [{level}] {message}"


def configure_logging(stream: TextIO | None = None, level: int = logging.INFO) -> logging.Logger:
    """Route the package logger to ``stream`` (stderr by default) at ``level``."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(LazyshFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger