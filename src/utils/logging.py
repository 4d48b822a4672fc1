"""Logging utilities built on top of :mod:`loguru`."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


class _LoguruHandler(logging.Handler):
    """Forward standard-library records to loguru, keeping the level name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = "INFO") -> None:
    """Route registry logs to stderr through loguru."""

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    logging.basicConfig(handlers=[_LoguruHandler()], level=level, force=True)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a standard-library logger tied to loguru."""

    return logging.getLogger(name or __name__)
