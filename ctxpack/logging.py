"""Logging utilities for ctxpack commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "ctxpack"
_CONSOLE_FORMAT = "[ctxpack] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the ctxpack hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route ctxpack diagnostics to stderr and, optionally, a log file.

    The console shows skip and truncation notices (DEBUG) only when
    ``verbose`` is set. A log file always records every level, so a quiet
    run can still be audited afterwards. Stdout is left to the document.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    return logger


__all__ = ["configure_logging", "get_logger"]
