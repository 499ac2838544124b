"""Ledger value types produced by the transaction builder.

All records are frozen ``dataclass`` instances: a transaction is built once per
CSV row, handed to the renderer, and discarded. Optional parts of the ledger
syntax (payee, posting flag, price, the number/currency of an incomplete
amount) are modelled as ``None``.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

# Transaction flags understood by Beancount. Any other rendered flag string is
# carried through unchanged.
FLAG_OKAY = "*"
FLAG_WARNING = "!"


class AccountType(str, Enum):
    """The five root account types of a double-entry ledger."""

    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSES = "Expenses"


@dataclass(frozen=True, slots=True)
class Account:
    """An account such as ``Assets:Bank:Checking``.

    ``parts`` holds the path segments after the root type, in order.
    """

    type: AccountType
    parts: tuple[str, ...] = ()

    def __str__(self) -> str:
        return ":".join((self.type.value, *self.parts))


@dataclass(frozen=True, slots=True)
class Amount:
    """A decimal number paired with a currency code."""

    number: Decimal
    currency: str

    def __str__(self) -> str:
        return f"{format(self.number, 'f')} {self.currency}"


@dataclass(frozen=True, slots=True)
class IncompleteAmount:
    """Posting units whose number and/or currency may be left for inference.

    A posting without an ``amount`` template gets ``IncompleteAmount()``: both
    fields unset, to be filled in by a later balancing step. It is never
    treated as zero.
    """

    number: Decimal | None = None
    currency: str | None = None

    @classmethod
    def of(cls, amount: Amount) -> IncompleteAmount:
        return cls(number=amount.number, currency=amount.currency)

    @property
    def is_complete(self) -> bool:
        return self.number is not None and self.currency is not None


@dataclass(frozen=True, slots=True)
class Posting:
    """One account leg of a transaction."""

    account: Account
    units: IncompleteAmount = IncompleteAmount()
    flag: str | None = None
    price: Amount | None = None


@dataclass(frozen=True, slots=True)
class Transaction:
    """A dated ledger transaction built from a single CSV row."""

    date: datetime.date
    flag: str
    narration: str
    payee: str | None = None
    postings: tuple[Posting, ...] = ()


__all__ = [
    "FLAG_OKAY",
    "FLAG_WARNING",
    "Account",
    "AccountType",
    "Amount",
    "IncompleteAmount",
    "Posting",
    "Transaction",
]
