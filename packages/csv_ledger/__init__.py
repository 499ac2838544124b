"""Public interface for the ``csv_ledger`` package.

This module exposes the package's conversion functions, configuration models,
ledger value types and errors as the stable import surface. There is no
runtime logic here, only symbol re-exports.
"""

from .builder import build_posting, build_row_context, build_transaction
from .config import (
    Configuration,
    PostingTemplate,
    Settings,
    TransactionTemplate,
    load_configuration,
    parse_configuration,
)
from .errors import (
    ConfigurationError,
    CsvFormatError,
    CsvLedgerError,
    DateParseError,
    InvalidAccountError,
    InvalidAmountError,
    MissingColumnError,
    RowConversionError,
    TemplateRenderError,
    TransactionError,
)
from .ledger import (
    Account,
    AccountType,
    Amount,
    IncompleteAmount,
    Posting,
    Transaction,
)
from .parsers import parse_account, parse_amount
from .pipeline import convert, convert_file
from .reader import iter_records
from .renderer import format_transaction, render_transaction
from .templating import create_environment, render_field

__all__ = [
    # Conversion
    "build_posting",
    "build_row_context",
    "build_transaction",
    "convert",
    "convert_file",
    "create_environment",
    "format_transaction",
    "iter_records",
    "parse_account",
    "parse_amount",
    "render_field",
    "render_transaction",
    # Configuration
    "Configuration",
    "PostingTemplate",
    "Settings",
    "TransactionTemplate",
    "load_configuration",
    "parse_configuration",
    # Ledger types
    "Account",
    "AccountType",
    "Amount",
    "IncompleteAmount",
    "Posting",
    "Transaction",
    # Errors
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
