"""Exception taxonomy for ``csv_ledger``.

Two families exist:

- Transaction errors (:class:`TransactionError` and subclasses) describe why a
  single CSV row could not be turned into a ledger transaction. Each carries
  the ``field`` label it was raised for (e.g. ``"date"`` or
  ``"postings[1].amount"``) once the builder has attached it.
- Run errors (configuration, CSV syntax, short rows, row wrapping) abort the
  whole conversion.

Every class derives from :class:`CsvLedgerError` so callers can catch the
package's failures in one place. Underlying library exceptions are always
chained via ``raise ... from err`` rather than replaced.
"""

from __future__ import annotations

from collections.abc import Sequence


class CsvLedgerError(Exception):
    """Base class for all errors raised by ``csv_ledger``."""


# ---------------------------------------------------------------------------
# Per-row transaction errors
# ---------------------------------------------------------------------------


class TransactionError(CsvLedgerError):
    """A row could not be converted into a transaction."""

    reason = "could not build transaction"

    def __init__(self, detail: str | None = None, *, field: str | None = None) -> None:
        self.detail = detail
        self.field = field
        super().__init__(self._compose())

    def _compose(self) -> str:
        msg = self.reason
        if self.field:
            msg = f"{msg} in field '{self.field}'"
        if self.detail:
            msg = f"{msg}: {self.detail}"
        return msg

    def with_field(self, field: str) -> TransactionError:
        """Attach ``field`` when not yet known; returns ``self`` for re-raising."""

        if self.field is None:
            self.field = field
            self.args = (self._compose(),)
        return self


class InvalidAccountError(TransactionError):
    """The rendered account is not ``<Root>:<part>...`` with a known root."""

    reason = "invalid account"

    def __init__(self, raw: str, *, field: str | None = None) -> None:
        self.raw = raw
        super().__init__(repr(raw), field=field)


class InvalidAmountError(TransactionError):
    """The rendered amount is not ``"<number> <currency>"``."""

    reason = "invalid amount"

    def __init__(self, raw: str, *, field: str | None = None) -> None:
        self.raw = raw
        super().__init__(repr(raw), field=field)


class TemplateRenderError(TransactionError):
    """A template referenced an unknown name or has malformed syntax."""

    reason = "could not render template"

    def __init__(self, template: str, message: str, *, field: str | None = None) -> None:
        self.template = template
        super().__init__(f"{message} (template {template!r})", field=field)


class DateParseError(TransactionError):
    """The rendered date does not match the configured ``date_format``."""

    reason = "could not parse date"

    def __init__(self, value: str, date_format: str, *, field: str | None = None) -> None:
        self.value = value
        self.date_format = date_format
        super().__init__(f"{value!r} does not match format {date_format!r}", field=field)


# ---------------------------------------------------------------------------
# Run-level errors
# ---------------------------------------------------------------------------


class ConfigurationError(CsvLedgerError):
    """The YAML configuration is malformed or violates the schema."""


class CsvFormatError(CsvLedgerError):
    """The CSV input could not be parsed."""


class MissingColumnError(CsvLedgerError, IndexError):
    """A row is shorter than a column index referenced by the ``input`` mapping."""

    def __init__(self, name: str, index: int, record: Sequence[str]) -> None:
        self.name = name
        self.index = index
        self.width = len(record)
        super().__init__(
            f"input '{name}' references column {index} but the row has only "
            f"{self.width} column(s)"
        )


class RowConversionError(CsvLedgerError):
    """Wraps the first per-row failure of a run with its record number.

    ``record_number`` is 1-based and counts every CSV record, skipped ones
    included, so it matches what a spreadsheet shows. The original exception
    is available as :attr:`error` and as ``__cause__``.
    """

    def __init__(self, record_number: int, error: Exception) -> None:
        self.record_number = record_number
        self.error = error
        super().__init__(f"record {record_number}: {error}")


__all__ = [
    "ConfigurationError",
    "CsvFormatError",
    "CsvLedgerError",
    "DateParseError",
    "InvalidAccountError",
    "InvalidAmountError",
    "MissingColumnError",
    "RowConversionError",
    "TemplateRenderError",
    "TransactionError",
]
