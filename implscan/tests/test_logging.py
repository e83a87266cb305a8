"""Tests for logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from implscan.logging import configure_logging, get_logger


def test_configure_logging_installs_single_rich_handler() -> None:
    handler = configure_logging("debug")
    root = logging.getLogger()
    assert root.handlers == [handler]
    assert isinstance(handler, RichHandler)
    assert root.level == logging.DEBUG
    assert handler.level == logging.NOTSET


def test_quiet_logging_only_passes_warnings() -> None:
    handler = configure_logging("INFO", quiet=True)
    assert logging.getLogger().level == logging.INFO
    assert handler.level == logging.WARNING


def test_get_logger_joins_names() -> None:
    assert get_logger("implscan", "scan", "index").name == "implscan.scan.index"
