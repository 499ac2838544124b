"""Tests for the centralized logging configuration."""

import io
import logging

import pytest

from csv_ledger.logging_setup import configure_logging, get_logger


def test_configure_once_with_explicit_level():
    stream = io.StringIO()
    configure_logging("debug", fmt="%(levelname)s %(message)s", stream=stream)
    configure_logging("error", stream=io.StringIO())  # ignored: already configured

    get_logger("csv_ledger.test").debug("hello %s", "world")
    assert stream.getvalue() == "DEBUG hello world\n"
    assert logging.getLogger("csv_ledger").propagate is False


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CSV_LEDGER_LOG_LEVEL", "WARNING")
    stream = io.StringIO()
    configure_logging(stream=stream, fmt="%(message)s")

    log = get_logger("csv_ledger.test")
    log.info("hidden")
    log.warning("shown")
    assert stream.getvalue() == "shown\n"


def test_unknown_level_falls_back_to_info():
    stream = io.StringIO()
    configure_logging("LOUD", stream=stream, fmt="%(message)s")

    log = get_logger("csv_ledger.test")
    log.debug("hidden")
    log.info("shown")
    assert stream.getvalue() == "shown\n"


def test_unconfigured_logger_is_silent():
    get_logger("csv_ledger.test")
    handlers = logging.getLogger("csv_ledger").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
