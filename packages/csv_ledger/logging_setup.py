"""Logging for ``csv_ledger``: one stderr handler on the ``csv_ledger`` logger.

Ledger text goes to stdout, so log records never share its stream. The CLI
calls :func:`configure_logging` at startup; library modules only use
:func:`get_logger`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "csv_ledger"
_LEVEL_ENV_VAR = "CSV_LEDGER_LOG_LEVEL"
_CONFIGURED = False


def _level_from_name(value: str) -> int | None:
    # "debug", "DEBUG" and "10" all work.
    value = value.strip().upper()
    if value.isdigit():
        return int(value)
    numeric = getattr(logging, value, None)
    return numeric if isinstance(numeric, int) else None


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    for candidate in (level, os.getenv(_LEVEL_ENV_VAR)):
        if candidate:
            parsed = _level_from_name(candidate)
            if parsed is not None:
                return parsed
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach the package handler; later calls are no-ops until :func:`reset_logging`.

    ``level`` falls back to ``CSV_LEDGER_LOG_LEVEL``, then ``INFO``, when it is
    ``None`` or not a recognizable level. ``stream`` defaults to the
    ``sys.stderr`` current at call time.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(
        logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s")
    )

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Drop the package handler so :func:`configure_logging` can run again."""

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    # Silent by default until the CLI (or a host application) configures output.
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging"]
