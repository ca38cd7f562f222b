"""Tests for ctxpack logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from ctxpack.logging import configure_logging, get_logger


def test_get_logger_is_namespaced() -> None:
    assert get_logger().name == "ctxpack"
    assert get_logger("discovery").name == "ctxpack.discovery"


def test_configure_logging_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 1


def test_console_hides_debug_unless_verbose() -> None:
    logger = configure_logging()

    (console,) = logger.handlers
    assert console.level == logging.INFO
    assert logger.level == logging.INFO


def test_log_file_records_debug_even_when_quiet(tmp_path: Path) -> None:
    log_file = tmp_path / "ctxpack.log"
    logger = configure_logging(log_file=log_file)

    get_logger("test").debug("Skipping %s: not modified in the last %d days", "old.py", 7)
    get_logger("test").info("packaged %d files", 3)
    for handler in logger.handlers:
        handler.flush()

    console, file_handler = logger.handlers
    assert console.level == logging.INFO
    assert file_handler.level == logging.DEBUG
    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG ctxpack.test: Skipping old.py: not modified in the last 7 days" in text
    assert "INFO ctxpack.test: packaged 3 files" in text
