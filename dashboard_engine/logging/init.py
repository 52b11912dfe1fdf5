from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager

"""Logging initialization with labeled prefixes.

Every line written by the application logger starts with a label:
INFO | WARN | ERROR | SUMMARY (DEBUG when --debug is given).

The starting level comes from $DASHBOARD_LOG_LEVEL (a level name, e.g. WARN or
DEBUG; read after .env is loaded) and defaults to INFO. With DEBUG enabled the
session reports how long each recompute stage of a view took.

Engine modules log through ``logging.getLogger(__name__)``; their records
propagate to the ``dashboard_engine`` logger configured here.
"""

__all__ = [
    "LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "enable_debug",
    "log_summary",
    "timed_stage",
    "reset_logging",
]

LOGGER_NAME = "dashboard_engine"
LOG_LEVEL_ENV = "DASHBOARD_LOG_LEVEL"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

# Global logger instance
_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing ``LABEL message`` lines."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if name == "WARN":
        name = "WARNING"
    level = logging.getLevelName(name) if name else logging.INFO
    # 未知の名前は "Level X" 文字列が返る
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> logging.Logger:
    """Configure the application logger (idempotent).

    - one stdout StreamHandler with LabeledFormatter
    - level from $DASHBOARD_LOG_LEVEL, INFO when unset or unknown
    - no propagation to the root logger

    Returns:
        Configured logger instance for the application
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    level = _level_from_env()
    logger.setLevel(level)

    # Clear any existing handlers to avoid duplication
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured application logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def enable_debug() -> None:
    """Lower the application logger and its handlers to DEBUG."""
    logger = get_logger()
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None


@contextmanager
def timed_stage(logger: logging.Logger, stage: str) -> Iterator[None]:
    """Log ``<stage>: <ms>ms`` at DEBUG once the block finishes."""
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    started = time.perf_counter()
    try:
        yield
    finally:
        logger.debug(f"{stage}: {(time.perf_counter() - started) * 1000:.1f}ms")
