"""CLI for the ``csv_ledger`` package.

Exposes :func:`cmd_convert` (plain function returning an exit code) and a
Typer console interface wrapping it::

    csv-ledger --ledger bank.csv --config bank.yaml [--append books.beancount]

Without ``--append`` the Beancount text goes to stdout. Environment variables
(notably ``CSV_LEDGER_LOG_LEVEL``) may be supplied through a ``.env`` file in
the working directory, loaded with ``python-dotenv`` before logging is set up.
Log output always goes to stderr.
"""

from __future__ import annotations

import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Annotated, TextIO

import typer
from dotenv import load_dotenv

from .config import load_configuration
from .errors import ConfigurationError, CsvFormatError, RowConversionError
from .logging_setup import configure_logging, get_logger
from .pipeline import convert_file

_logger = get_logger("csv_ledger.cli")


def _open_append_target(path: Path) -> TextIO:
    # Appending never creates the ledger: a typo must not start a new file.
    if not path.is_file():
        raise FileNotFoundError(2, "No such file", str(path))
    return path.open("a", encoding="utf-8")


def cmd_convert(
    csv_path: str | Path,
    config_path: str | Path,
    *,
    append_path: str | Path | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Convert ``csv_path`` using ``config_path``; return a process exit code.

    Writes to ``append_path`` when given (the file must already exist),
    otherwise to ``stdout`` (``sys.stdout`` by default). Every failure prints a
    single ``Error: ...`` line to stderr and returns ``1``.
    """

    out = stdout if stdout is not None else sys.stdout

    try:
        config = load_configuration(config_path)
    except FileNotFoundError:
        print(f"Error: File not found: {config_path}", file=sys.stderr)
        return 1
    except ConfigurationError as e:
        print(f"Error: Invalid configuration '{config_path}': {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Could not read configuration '{config_path}': {e}", file=sys.stderr)
        return 1

    try:
        with ExitStack() as stack:
            sink = out
            if append_path is not None:
                sink = stack.enter_context(_open_append_target(Path(append_path)))
            written = convert_file(csv_path, config, sink)
            sink.flush()
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except PermissionError as e:
        print(f"Error: Permission denied: {e.filename}", file=sys.stderr)
        return 1
    except CsvFormatError as e:
        print(f"Error: Failed to parse CSV '{csv_path}': {e}", file=sys.stderr)
        return 1
    except RowConversionError as e:
        _logger.error("Aborted at record %d: %r", e.record_number, e.error)
        print(
            f"Error: Failed to convert record {e.record_number} of '{csv_path}': {e.error}",
            file=sys.stderr,
        )
        return 1
    except OSError as e:
        print(f"Error: I/O failure: {e}", file=sys.stderr)
        return 1

    _logger.info("Wrote %d transaction(s)", written)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help="Convert transactions in CSV to Beancount format using a YAML configuration.",
)


@app.command()
def convert_cmd(
    csv_path: Annotated[
        Path,
        typer.Option(
            "--ledger",
            "-l",
            help="The ledger in CSV format to convert to Beancount.",
            dir_okay=False,
        ),
    ],
    config_path: Annotated[
        Path,
        typer.Option(
            "--config",
            "-c",
            help="The YAML configuration describing how to interpret the CSV file.",
            dir_okay=False,
        ),
    ],
    append_path: Annotated[
        Path | None,
        typer.Option(
            "--append",
            help="Append the new entries to this existing file instead of stdout.",
            dir_okay=False,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level (DEBUG, INFO, ...). Falls back to CSV_LEDGER_LOG_LEVEL."),
    ] = None,
) -> None:
    """Convert a CSV file to Beancount transactions."""

    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    code = cmd_convert(csv_path, config_path, append_path=append_path)
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m csv_ledger.cli`
    app()
