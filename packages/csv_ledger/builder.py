"""Build one ledger :class:`~csv_ledger.ledger.Transaction` from one CSV row.

The builder renders each configured template against the row's named values,
parses the results into ledger primitives and assembles the transaction. The
first failure aborts the row: a partially-built transaction is never returned.
Transaction errors are tagged with the field they were raised for, e.g.
``"date"`` or ``"postings[1].amount"``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime

import jinja2

from .config import Configuration, PostingTemplate
from .errors import DateParseError, MissingColumnError, TransactionError
from .ledger import IncompleteAmount, Posting, Transaction
from .parsers import parse_account, parse_amount
from .templating import RowContext, render_field


def build_row_context(record: Sequence[str], inputs: Mapping[str, int]) -> dict[str, str]:
    """Map each configured input name to its cell in ``record``.

    Raises :class:`MissingColumnError` when the row is shorter than a
    referenced column index.
    """

    context: dict[str, str] = {}
    for name, index in inputs.items():
        try:
            context[name] = record[index]
        except IndexError as err:
            raise MissingColumnError(name, index, record) from err
    return context


def build_posting(
    template: PostingTemplate,
    env: jinja2.Environment,
    context: RowContext,
    *,
    index: int = 0,
) -> Posting:
    """Render and parse a single posting template."""

    prefix = f"postings[{index}]"

    field = f"{prefix}.account"
    try:
        account = parse_account(render_field(env, template.account, context, field=field))

        units = IncompleteAmount()
        if template.amount is not None:
            field = f"{prefix}.amount"
            units = IncompleteAmount.of(
                parse_amount(render_field(env, template.amount, context, field=field))
            )

        flag = None
        if template.flag is not None:
            field = f"{prefix}.flag"
            flag = render_field(env, template.flag, context, field=field)

        price = None
        if template.price is not None:
            field = f"{prefix}.price"
            price = parse_amount(render_field(env, template.price, context, field=field))
    except TransactionError as err:
        err.with_field(field)
        raise

    return Posting(account=account, units=units, flag=flag, price=price)


def _parse_date(value: str, date_format: str) -> datetime:
    try:
        return datetime.strptime(value, date_format)
    except ValueError as err:
        raise DateParseError(value, date_format, field="date") from err


def build_transaction(
    record: Sequence[str],
    config: Configuration,
    env: jinja2.Environment,
) -> Transaction:
    """Convert one CSV record into a transaction.

    Steps, in order: build the row context, render and parse the date, render
    the flag (which must not be empty), the payee (an empty payee becomes
    ``None``) and the narration, then build every posting in declaration order.
    """

    context = build_row_context(record, config.input)
    output = config.output

    date = _parse_date(
        render_field(env, output.date, context, field="date"),
        config.settings.date_format,
    ).date()

    flag = render_field(env, output.flag, context, field="flag")
    if not flag.strip():
        raise TransactionError("flag rendered empty", field="flag")

    payee = None
    if output.payee is not None:
        payee = render_field(env, output.payee, context, field="payee") or None

    narration = render_field(env, output.narration, context, field="narration")

    postings = tuple(
        build_posting(template, env, context, index=i)
        for i, template in enumerate(output.postings)
    )

    return Transaction(
        date=date,
        flag=flag,
        payee=payee,
        narration=narration,
        postings=postings,
    )


__all__ = ["build_posting", "build_row_context", "build_transaction"]
