"""Rate and tax-free threshold lookups."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

Number = Union[int, float, str, Decimal]
Period = Tuple[int, int]

_DEFAULT_RATES_BY_PERIOD: Dict[str, Number] = {
    f"{month}/2017": "0.2" for month in range(1, 13)
}
_DEFAULT_THRESHOLDS_BY_YEAR: Dict[int, Number] = {
    2017: "0.5",
}


class RateLookupError(LookupError):
    """Raised when the rate table has no entry for a requested key."""


class MissingRateEntry(RateLookupError):
    def __init__(self, month: int, year: int) -> None:
        super().__init__(f"No base rate configured for {month}/{year}.")
        self.month = month
        self.year = year


class MissingThresholdEntry(RateLookupError):
    def __init__(self, year: int) -> None:
        super().__init__(f"No tax threshold configured for {year}.")
        self.year = year


def to_decimal(value: Number) -> Decimal:
    """Coerce a numeric value to ``Decimal`` without binary float noise."""
    if isinstance(value, bool):
        raise TypeError("boolean is not a valid amount")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"invalid amount: {value!r}") from exc
    else:
        raise TypeError(f"unsupported amount type: {type(value).__name__}")
    if not amount.is_finite():
        raise ValueError(f"amount must be finite: {value!r}")
    return amount


def _as_key(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    return value


def _parse_period(key: str) -> Period:
    month_raw, sep, year_raw = key.partition("/")
    if not sep:
        raise ValueError(f"Period key {key!r} must look like 'M/YYYY'.")
    try:
        return int(month_raw), int(year_raw)
    except ValueError as exc:
        raise ValueError(f"Period key {key!r} must look like 'M/YYYY'.") from exc


class RateTable:
    """Read-only per-unit rates by (month, year) and tax-free thresholds by year."""

    def __init__(
        self,
        rates: Mapping[Period, Number],
        thresholds: Mapping[int, Number],
    ) -> None:
        self._rates: Mapping[Period, Decimal] = MappingProxyType(
            {
                (_as_key(month, "month"), _as_key(year, "year")): to_decimal(rate)
                for (month, year), rate in rates.items()
            }
        )
        self._thresholds: Mapping[int, Decimal] = MappingProxyType(
            {_as_key(year, "year"): to_decimal(threshold) for year, threshold in thresholds.items()}
        )

    @classmethod
    def from_period_keys(
        cls,
        rates_by_period: Mapping[str, Number],
        thresholds_by_year: Mapping[int, Number],
    ) -> "RateTable":
        """Build a table from ``"M/YYYY"`` keyed rates."""
        rates: Dict[Period, Number] = {}
        for key, rate in rates_by_period.items():
            period = _parse_period(key)
            if period in rates:
                raise ValueError(f"Period key {key!r} duplicates {period[0]}/{period[1]}.")
            rates[period] = rate
        return cls(rates=rates, thresholds=thresholds_by_year)

    @property
    def rates(self) -> Mapping[Period, Decimal]:
        return self._rates

    @property
    def thresholds(self) -> Mapping[int, Decimal]:
        return self._thresholds

    def base_rate(self, month: int, year: int) -> Decimal:
        rate = self._rates.get((month, year))
        if rate is None:
            logger.warning(
                "Base rate lookup failed",
                extra={"month": month, "year": year, "reason": "missing rate"},
            )
            raise MissingRateEntry(month, year)
        return rate

    def tax_threshold(self, year: int) -> Decimal:
        threshold = self._thresholds.get(year)
        if threshold is None:
            logger.warning(
                "Tax threshold lookup failed",
                extra={"year": year, "reason": "missing threshold"},
            )
            raise MissingThresholdEntry(year)
        return threshold

    def taxable_amount(self, base_charge: Number, year: int) -> Decimal:
        """Portion of ``base_charge`` above the year's threshold, floored at zero."""
        excess = to_decimal(base_charge) - self.tax_threshold(year)
        return max(Decimal(0), excess)

    def periods(self) -> List[Period]:
        """Configured (month, year) keys ordered by year then month."""
        return sorted(self._rates, key=lambda period: (period[1], period[0]))

    def years(self) -> List[int]:
        return sorted(self._thresholds)


@lru_cache
def build_default_rate_table() -> RateTable:
    """Factory for the compiled-in rate table."""
    return RateTable.from_period_keys(_DEFAULT_RATES_BY_PERIOD, _DEFAULT_THRESHOLDS_BY_YEAR)
