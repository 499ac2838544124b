"""CSV record stream for the converter.

Parsing uses the stdlib :mod:`csv` module with the delimiter and quote
character from the configuration. No header detection is done: headers and
other preamble rows are removed with ``settings.skip``, which drops the first
N records before they reach the builder. Blank lines are not records.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from itertools import islice

from .config import Settings
from .errors import CsvFormatError


def _parse(lines: Iterable[str], settings: Settings) -> Iterator[list[str]]:
    reader = csv.reader(lines, delimiter=settings.delimiter, quotechar=settings.quote)
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as err:
            raise CsvFormatError(f"line {reader.line_num}: {err}") from err
        if record:
            yield record


def iter_records(lines: Iterable[str], settings: Settings) -> Iterator[list[str]]:
    """Yield CSV records from ``lines``, skipping the first ``settings.skip``.

    ``lines`` is typically a text file opened with ``newline=""``. Malformed
    CSV raises :class:`CsvFormatError` with the :class:`csv.Error` chained.
    """

    return islice(_parse(lines, settings), settings.skip, None)


__all__ = ["iter_records"]
