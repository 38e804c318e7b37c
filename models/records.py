"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

Quantity = Union[int, float, Decimal]


@dataclass(frozen=True, slots=True)
class RawReading:
    """A single billing-period consumption record for a customer."""

    customer: str
    quantity: Quantity
    month: int
    year: int
