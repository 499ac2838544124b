"""Run orchestration: CSV records in, Beancount text out.

Rows are processed strictly one at a time. Each transaction is built and
written to the sink before the next record is read, so a failure leaves every
earlier transaction written and nothing after it. The first failure aborts the
run with :class:`~csv_ledger.errors.RowConversionError`, which wraps the
original exception without changing its kind.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from os import PathLike
from pathlib import Path
from typing import TextIO

import jinja2

from .builder import build_transaction
from .config import Configuration
from .errors import CsvLedgerError, RowConversionError
from .logging_setup import get_logger
from .reader import iter_records
from .renderer import render_transaction
from .templating import create_environment

_logger = get_logger("csv_ledger.pipeline")


def convert(
    records: Iterable[Sequence[str]],
    config: Configuration,
    sink: TextIO,
    *,
    env: jinja2.Environment | None = None,
) -> int:
    """Build and write one transaction per record; return how many were written.

    ``records`` must already exclude skipped rows (see
    :func:`csv_ledger.reader.iter_records`). Record numbers reported in errors
    add ``config.settings.skip`` back so they match the file.
    """

    if env is None:
        env = create_environment()

    offset = config.settings.skip
    written = 0
    for position, record in enumerate(records, start=1):
        record_number = offset + position
        try:
            txn = build_transaction(record, config, env)
        except (CsvLedgerError, IndexError) as err:
            _logger.debug("Record %d failed: %s", record_number, err)
            raise RowConversionError(record_number, err) from err
        render_transaction(txn, sink)
        written += 1
        _logger.debug(
            "Record %d -> %s with %d posting(s)", record_number, txn.date, len(txn.postings)
        )
    return written


def convert_file(
    csv_path: str | PathLike[str],
    config: Configuration,
    sink: TextIO,
    *,
    env: jinja2.Environment | None = None,
) -> int:
    """Open ``csv_path`` (UTF-8) and run :func:`convert` over its records."""

    p = Path(csv_path)
    with p.open(encoding="utf-8", newline="") as f:
        written = convert(iter_records(f, config.settings), config, sink, env=env)
    _logger.info("Converted %d record(s) from %s", written, p)
    return written


__all__ = ["convert", "convert_file"]
