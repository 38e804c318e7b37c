from __future__ import annotations

import logging
from decimal import Decimal
from logging.config import dictConfig
from typing import Iterable, Sequence

from settings import get_settings

_CHARGE_CONTEXT_KEYS = (
    "customer",
    "month",
    "year",
    "quantity",
    "base_charge",
    "taxable_charge",
    "reason",
)

_configured = False


class ChargeContextFormatter(logging.Formatter):
    """Append reading context passed through ``extra`` as ``key=value`` pairs."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        context_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._context_keys: Sequence[str] = tuple(context_keys or _CHARGE_CONTEXT_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs = [
            f"{key}={self._render(getattr(record, key))}"
            for key in self._context_keys
            if getattr(record, key, None) is not None
        ]
        if not pairs:
            return message
        return f"{message} | {' '.join(pairs)}"

    @staticmethod
    def _render(value: object) -> str:
        if isinstance(value, Decimal):
            return format(value, "f")
        return str(value)


def configure_logging(level: str | int | None = None, force: bool = False) -> None:
    """Install the charge-aware console handler on the root logger once."""
    global _configured
    if _configured and not force:
        return

    log_level = level if level is not None else get_settings().log_level
    if isinstance(log_level, str):
        log_level = log_level.upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "charges": {
                    "()": "logging_config.ChargeContextFormatter",
                    "fmt": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "context_keys": list(_CHARGE_CONTEXT_KEYS),
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "level": log_level,
                    "formatter": "charges",
                }
            },
            "root": {"handlers": ["console"], "level": log_level},
        }
    )

    _configured = True
