"""Charge calculations for a single meter reading."""

from __future__ import annotations

import logging
from decimal import Decimal

from models.records import Quantity, RawReading
from services.rates import RateTable, to_decimal

logger = logging.getLogger(__name__)


class Reading:
    """Computed view over a raw reading, valued against an injected rate table.

    Charges are recomputed on every access. Lookup failures from the rate
    table propagate unchanged.
    """

    def __init__(self, raw: RawReading, rates: RateTable) -> None:
        self._raw = raw
        self._rates = rates

    @property
    def raw(self) -> RawReading:
        return self._raw

    @property
    def customer(self) -> str:
        return self._raw.customer

    @property
    def quantity(self) -> Quantity:
        return self._raw.quantity

    @property
    def month(self) -> int:
        return self._raw.month

    @property
    def year(self) -> int:
        return self._raw.year

    @property
    def base_charge(self) -> Decimal:
        charge = self._rates.base_rate(self.month, self.year) * to_decimal(self.quantity)
        logger.debug(
            "Computed base charge",
            extra={"customer": self.customer, "base_charge": charge},
        )
        return charge

    @property
    def taxable_charge(self) -> Decimal:
        charge = self._rates.taxable_amount(self.base_charge, self.year)
        logger.debug(
            "Computed taxable charge",
            extra={"customer": self.customer, "taxable_charge": charge},
        )
        return charge

    def __repr__(self) -> str:
        return (
            f"Reading(customer={self.customer!r}, quantity={self.quantity!r}, "
            f"month={self.month}, year={self.year})"
        )
