"""Serialize transactions as Beancount text.

Output shape for one transaction::

    2023-01-15 ! "Cafe Central" "Coffee"
      Assets:Bank  -4.50 EUR
      Expenses:Food:Coffee

A blank line follows every transaction so appended runs stay readable.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TextIO

from .ledger import IncompleteAmount, Posting, Transaction

_INDENT = "  "


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _fmt_number(d: Decimal) -> str:
    # Positional notation only; str(Decimal) may switch to exponents.
    return format(d, "f")


def _fmt_units(units: IncompleteAmount) -> str:
    pieces = []
    if units.number is not None:
        pieces.append(_fmt_number(units.number))
    if units.currency is not None:
        pieces.append(units.currency)
    return " ".join(pieces)


def format_posting(posting: Posting) -> str:
    line = _INDENT
    if posting.flag:
        line += f"{posting.flag} "
    line += str(posting.account)
    units = _fmt_units(posting.units)
    if units:
        line += f"  {units}"
    if posting.price is not None:
        line += f" @ {_fmt_number(posting.price.number)} {posting.price.currency}"
    return line


def format_transaction(txn: Transaction) -> str:
    """Return the Beancount text for ``txn`` including the trailing blank line."""

    header = [txn.date.isoformat(), txn.flag]
    if txn.payee is not None:
        header.append(_quote(txn.payee))
    header.append(_quote(txn.narration))

    lines = [" ".join(header)]
    lines.extend(format_posting(p) for p in txn.postings)
    return "\n".join(lines) + "\n\n"


def render_transaction(txn: Transaction, sink: TextIO) -> None:
    """Write ``txn`` to ``sink``."""

    sink.write(format_transaction(txn))


__all__ = ["format_posting", "format_transaction", "render_transaction"]
