"""Pydantic schemas for structured charge output."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from services.rates import to_decimal
from services.valuation import Reading


class ChargeReport(BaseModel):
    """Snapshot of a valued reading."""

    model_config = ConfigDict(frozen=True)

    customer: str
    quantity: Decimal = Field(..., ge=0)
    month: int = Field(..., ge=1, le=12)
    year: int
    base_charge: Decimal = Field(..., description="Quantity multiplied by the period rate.")
    taxable_charge: Decimal = Field(
        ..., ge=0, description="Base charge above the yearly tax-free threshold."
    )

    @classmethod
    def from_reading(cls, reading: Reading) -> "ChargeReport":
        return cls(
            customer=reading.customer,
            quantity=to_decimal(reading.quantity),
            month=reading.month,
            year=reading.year,
            base_charge=reading.base_charge,
            taxable_charge=reading.taxable_charge,
        )
