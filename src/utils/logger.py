"""
src/utils/logger.py
───────────────────
Process-wide logging setup.

Usage:
    from src.utils.logger import get_logger

    logger = get_logger(__name__)
"""
from __future__ import annotations

import logging
import sys

from config.settings import settings

_LOGGER_INITIALIZED = False


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls are ignored."""
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    resolved_level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger for `name`, configuring logging on first use."""
    configure_logging()
    return logging.getLogger(name)
