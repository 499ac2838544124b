"""Pytest configuration for test isolation.

Makes the workspace ``packages/`` directory importable so tests run without
an editable install, and resets the package logger around every test. The
CLI configures logging once per process and points the handler at whatever
``sys.stderr`` is at that moment; under ``CliRunner`` that stream is closed
after the invocation, so each test starts from an unconfigured logger.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from csv_ledger.logging_setup import reset_logging  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch):
    """Start every test with an unconfigured package logger and no level override."""

    monkeypatch.delenv("CSV_LEDGER_LOG_LEVEL", raising=False)
    reset_logging()
    yield
    reset_logging()
