from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List

import pytest

import logging_config
from logging_config import ChargeContextFormatter, configure_logging


def _record(**extra: Any) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.valuation",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Computed base charge",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context() -> None:
    formatter = ChargeContextFormatter(fmt="%(message)s")

    message = formatter.format(
        _record(customer="Ivan", base_charge=Decimal("2.0"), unrelated="skip")
    )

    assert message == "Computed base charge | customer=Ivan base_charge=2.0"


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ChargeContextFormatter(fmt="%(message)s")

    assert formatter.format(_record(customer=None)) == "Computed base charge"


def test_formatter_renders_decimals_without_exponent() -> None:
    formatter = ChargeContextFormatter(fmt="%(message)s", context_keys=["taxable_charge"])

    message = formatter.format(_record(taxable_charge=Decimal("1E+1")))

    assert message.endswith("taxable_charge=10")


@pytest.fixture()
def captured_configs(monkeypatch) -> List[Dict[str, Any]]:
    configs: List[Dict[str, Any]] = []
    monkeypatch.setattr(logging_config, "_configured", False)
    monkeypatch.setattr(logging_config, "dictConfig", configs.append)
    return configs


def test_configure_logging_runs_once(captured_configs) -> None:
    configure_logging("debug")
    configure_logging("error")

    assert len(captured_configs) == 1
    assert captured_configs[0]["root"]["level"] == "DEBUG"
    assert captured_configs[0]["handlers"]["console"]["level"] == "DEBUG"


def test_configure_logging_force_reapplies(captured_configs) -> None:
    configure_logging("info")
    configure_logging(logging.WARNING, force=True)

    assert [config["root"]["level"] for config in captured_configs] == ["INFO", logging.WARNING]


def test_configure_logging_defaults_to_settings(monkeypatch, captured_configs) -> None:
    monkeypatch.setenv("LOG_LEVEL", "error")
    logging_config.get_settings.cache_clear()
    try:
        configure_logging()
    finally:
        logging_config.get_settings.cache_clear()

    assert captured_configs[0]["root"]["level"] == "ERROR"
