from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Iterable, Optional

import typer

from models.reports import ChargeReport
from services.rates import RateTable


def format_amount(amount: Decimal, places: Optional[int] = None) -> str:
    if places is None:
        return format(amount, "f")
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize needs room for every digit left of the point plus the places
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 1)
        rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    return format(rounded, "f")


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_report(report: ChargeReport, places: Optional[int] = None) -> None:
    echo_heading("Reading")
    echo_key_values(
        [
            ("customer", report.customer),
            ("quantity", format(report.quantity, "f")),
            ("period", f"{report.month}/{report.year}"),
        ]
    )
    typer.echo()
    echo_heading("Charges")
    echo_key_values(
        [
            ("base_charge", format_amount(report.base_charge, places)),
            ("taxable_charge", format_amount(report.taxable_charge, places)),
        ]
    )


def render_rate_table(rates: RateTable) -> None:
    echo_heading("Base rates")
    periods = rates.periods()
    if periods:
        for month, year in periods:
            typer.echo(f"  - {month}/{year}: {format_amount(rates.base_rate(month, year))}")
    else:
        typer.echo("No rates configured.")

    typer.echo()
    echo_heading("Tax thresholds")
    years = rates.years()
    if years:
        for year in years:
            typer.echo(f"  - {year}: {format_amount(rates.tax_threshold(year))}")
    else:
        typer.echo("No thresholds configured.")
