"""Tests for configuration validation and YAML loading."""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from csv_ledger import ConfigurationError, load_configuration, parse_configuration

from tests.helpers.configs import COFFEE_CONFIG, coffee_config


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "config.yaml"
    p.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
    return p


def test_defaults_applied():
    config = parse_configuration(COFFEE_CONFIG)
    assert config.settings.delimiter == ","
    assert config.settings.quote == "'"
    assert config.settings.skip == 0
    assert config.output.flag == "!"
    assert config.output.payee is None
    assert [p.account for p in config.output.postings] == ["Assets:Bank", "Expenses:Misc"]
    assert config.output.postings[1].amount is None


def test_load_yaml_file(tmp_path: Path):
    path = _write(
        tmp_path,
        """
        input:
          date: 0
          payee: 1
          amount: 3
        settings:
          delimiter: ";"
          quote: '"'
          skip: 2
          date_format: "%d.%m.%Y"
        output:
          date: "{{date}}"
          flag: "*"
          payee: "{{payee}}"
          narration: "Card payment"
          postings:
            - account: "Liabilities:Visa"
              amount: "{{amount}} EUR"
              flag: "!"
            - account: "Expenses:Misc"
              price: "1,10 USD"
        """,
    )
    config = load_configuration(path)
    assert config.input == {"date": 0, "payee": 1, "amount": 3}
    assert config.settings.delimiter == ";"
    assert config.settings.quote == '"'
    assert config.settings.skip == 2
    assert config.output.flag == "*"
    assert config.output.postings[0].flag == "!"
    assert config.output.postings[1].price == "1,10 USD"


def test_missing_file_raises_oserror(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_configuration(tmp_path / "nope.yaml")


def test_yaml_syntax_error(tmp_path: Path):
    path = _write(tmp_path, "input: [unterminated\n")
    with pytest.raises(ConfigurationError) as exc_info:
        load_configuration(path)
    assert exc_info.value.__cause__ is not None


def test_empty_file_rejected(tmp_path: Path):
    path = _write(tmp_path, "")
    with pytest.raises(ConfigurationError, match="mapping"):
        load_configuration(path)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d["settings"].pop("date_format"),
        lambda d: d["output"].pop("narration"),
        lambda d: d["output"].pop("date"),
        lambda d: d["output"]["postings"][0].pop("account"),
        lambda d: d["settings"].update(delimiter=";;"),
        lambda d: d["settings"].update(quote=""),
        lambda d: d["settings"].update(skip=-1),
        lambda d: d["input"].update(bad=-3),
        lambda d: d["output"].update(unknown="x"),
        lambda d: d.pop("input"),
    ],
)
def test_schema_violations(mutate):
    data = coffee_config()
    mutate(data)
    with pytest.raises(ConfigurationError):
        parse_configuration(data)


def test_empty_postings_allowed():
    config = parse_configuration(coffee_config(postings=[]))
    assert config.output.postings == ()


def test_cost_accepted_with_warning(caplog: pytest.LogCaptureFixture):
    data = coffee_config(
        postings=[{"account": "Assets:Broker", "amount": "1 AAPL", "cost": "150 USD"}]
    )
    with caplog.at_level(logging.WARNING, logger="csv_ledger"):
        config = parse_configuration(data)
    assert config.output.postings[0].cost == "150 USD"
    assert any("postings[0].cost" in r.getMessage() for r in caplog.records)


def test_configuration_is_frozen():
    config = parse_configuration(COFFEE_CONFIG)
    with pytest.raises(ValidationError):
        config.settings.skip = 5  # type: ignore[misc]


@pytest.mark.parametrize("name", ["booking-date", "1st", "two words", "if", "true", "None", "class"])
def test_input_names_must_be_template_identifiers(name):
    data = coffee_config()
    data["input"][name] = 3
    with pytest.raises(ConfigurationError) as exc_info:
        parse_configuration(data)
    assert repr(name) in str(exc_info.value)


def test_input_names_with_underscores_and_digits_accepted():
    data = coffee_config()
    data["input"]["booking_date_2"] = 3
    assert parse_configuration(data).input["booking_date_2"] == 3
