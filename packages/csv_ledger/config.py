"""Run configuration: schema models and YAML loading.

A configuration file has three top-level sections::

    input:            # logical field name -> zero-based CSV column index
      date: 0
      description: 1
      amount: 2
    settings:
      delimiter: ","  # single character, default ","
      quote: "'"      # single character, default "'"
      skip: 1         # leading CSV records to drop, default 0
      date_format: "%Y-%m-%d"
    output:
      date: "{{date}}"
      flag: "*"       # default "!"
      payee: "{{description}}"
      narration: "Card payment"
      postings:
        - account: "Liabilities:CreditCard"
          amount: "{{amount}} EUR"
        - account: "Expenses:Misc"

Every ``output`` value is a template rendered against the row's named input
fields. The models are frozen: a configuration is loaded once and shared
read-only for the whole run.
"""

from __future__ import annotations

import keyword
from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .ledger import FLAG_WARNING
from .logging_setup import get_logger

_logger = get_logger("csv_ledger.config")

# Reserved words of the template expression language.
_JINJA_LITERALS = frozenset({"true", "false", "none", "and", "or", "not", "in", "is", "if"})


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class Settings(_ConfigModel):
    """How to read the CSV and interpret its dates."""

    delimiter: str = ","
    quote: str = "'"
    skip: int = Field(default=0, ge=0)
    date_format: str

    @field_validator("delimiter", "quote")
    @classmethod
    def _single_character(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("must be exactly one character")
        return v


class PostingTemplate(_ConfigModel):
    """Templates for one posting of the generated transaction.

    ``cost`` is accepted for compatibility with existing configuration files
    but is not applied to the built posting; loading a configuration that sets
    it logs a warning.
    """

    flag: str | None = None
    account: str
    amount: str | None = None
    cost: str | None = None
    price: str | None = None


class TransactionTemplate(_ConfigModel):
    """Templates for the transaction emitted for every CSV row."""

    date: str
    flag: str = FLAG_WARNING
    payee: str | None = None
    narration: str
    postings: tuple[PostingTemplate, ...] = ()


class Configuration(_ConfigModel):
    """A complete conversion configuration."""

    input: dict[str, int]
    settings: Settings
    output: TransactionTemplate

    @field_validator("input")
    @classmethod
    def _non_negative_columns(cls, v: dict[str, int]) -> dict[str, int]:
        negative = sorted(name for name, index in v.items() if index < 0)
        if negative:
            raise ValueError("column indexes must be >= 0: " + ", ".join(negative))
        return v

    @field_validator("input")
    @classmethod
    def _template_names(cls, v: dict[str, int]) -> dict[str, int]:
        # Templates resolve {{name}} only for identifiers that are not literals.
        bad = sorted(
            name
            for name in v
            if not name.isidentifier() or keyword.iskeyword(name) or name in _JINJA_LITERALS
        )
        if bad:
            raise ValueError(
                "input names must be identifiers usable in templates: " + ", ".join(map(repr, bad))
            )
        return v


def parse_configuration(data: Mapping[str, Any] | None) -> Configuration:
    """Validate an already-parsed mapping into a :class:`Configuration`."""

    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"configuration must be a mapping, got {type(data).__name__}"
        )
    try:
        config = Configuration.model_validate(data)
    except ValidationError as err:
        raise ConfigurationError(f"invalid configuration: {err}") from err

    for i, posting in enumerate(config.output.postings):
        if posting.cost is not None:
            _logger.warning(
                "postings[%d].cost is set but costs are not supported; the value is ignored",
                i,
            )
    return config


def load_configuration(path: str | PathLike[str]) -> Configuration:
    """Read and validate a YAML configuration file.

    ``OSError`` (missing file, permissions) propagates unchanged; YAML syntax
    and schema problems raise :class:`ConfigurationError`.
    """

    p = Path(path)
    text = p.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ConfigurationError(f"could not parse YAML in {p}: {err}") from err

    config = parse_configuration(data)
    _logger.info(
        "Loaded configuration %s: %d input field(s), %d posting template(s)",
        p,
        len(config.input),
        len(config.output.postings),
    )
    return config


__all__ = [
    "Configuration",
    "PostingTemplate",
    "Settings",
    "TransactionTemplate",
    "load_configuration",
    "parse_configuration",
]
