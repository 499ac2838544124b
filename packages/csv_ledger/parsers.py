"""Parsers turning rendered template strings into ledger primitives."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .errors import InvalidAccountError, InvalidAmountError
from .ledger import Account, AccountType, Amount

_ACCOUNT_TYPES: dict[str, AccountType] = {t.value: t for t in AccountType}


def parse_amount(text: str) -> Amount:
    """Parse ``"<number> <currency>"`` into an :class:`Amount`.

    The number and currency are separated by a single space. Commas in the
    number are read as decimal separators (``"12,50 EUR"`` equals
    ``"12.50 EUR"``). The currency is kept verbatim; tokens after it are
    ignored.
    """

    tokens = text.split(" ")
    if len(tokens) < 2 or not tokens[1]:
        raise InvalidAmountError(text)

    number_text = tokens[0].replace(",", ".")
    try:
        number = Decimal(number_text)
    except InvalidOperation as err:
        raise InvalidAmountError(text) from err
    # Decimal() also accepts "NaN"/"Infinity", which are not amounts.
    if not number.is_finite():
        raise InvalidAmountError(text)

    return Amount(number=number, currency=tokens[1])


def parse_account(text: str) -> Account:
    """Parse a colon-separated account name such as ``Assets:Bank:Checking``.

    The first segment must be one of ``Assets``, ``Liabilities``, ``Equity``,
    ``Income`` or ``Expenses`` (exact case).
    """

    root, *parts = text.split(":")
    account_type = _ACCOUNT_TYPES.get(root)
    if account_type is None:
        raise InvalidAccountError(text)
    return Account(type=account_type, parts=tuple(parts))


__all__ = ["parse_account", "parse_amount"]
