from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import NoReturn, Optional

import typer

from cli.render import format_amount, render_rate_table, render_report
from logging_config import configure_logging
from models.records import RawReading
from models.reports import ChargeReport
from services.rates import RateLookupError, RateTable, build_default_rate_table, to_decimal
from services.valuation import Reading
from settings import Settings, get_settings


@dataclass
class CLIState:
    settings: Settings
    rates: RateTable
    places: Optional[int] = None


app = typer.Typer(
    help="Compute base and taxable charges for meter readings.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _parse_quantity(value: str) -> Decimal:
    try:
        quantity = to_decimal(value)
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(f"{value!r} is not a number.") from exc
    if not quantity.is_finite() or quantity < 0:
        raise typer.BadParameter("Quantity must be a finite, non-negative number.")
    return quantity


CustomerOption = typer.Option(..., "--customer", "-c", help="Customer the reading belongs to.")
QuantityOption = typer.Option(
    ..., "--quantity", "-q", parser=_parse_quantity, help="Units consumed in the period."
)
MonthOption = typer.Option(..., "--month", "-m", min=1, max=12, help="Billing month (1-12).")
YearOption = typer.Option(..., "--year", "-y", help="Billing year.")


def _value(state: CLIState, customer: str, quantity: Decimal, month: int, year: int) -> Reading:
    raw = RawReading(customer=customer, quantity=quantity, month=month, year=year)
    return Reading(raw, state.rates)


def _fail(exc: RateLookupError) -> NoReturn:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
    places: Optional[int] = typer.Option(
        None,
        "--places",
        min=0,
        help="Round displayed charges to this many decimal places (defaults to CHARGE_DISPLAY_PLACES).",
    ),
) -> None:
    """Entry point for the CLI."""
    settings = get_settings()
    configure_logging(log_level or settings.log_level)
    ctx.obj = CLIState(
        settings=settings,
        rates=build_default_rate_table(),
        places=places if places is not None else settings.display_places,
    )


@app.command("base-charge")
def base_charge_command(
    ctx: typer.Context,
    customer: str = CustomerOption,
    quantity: Decimal = QuantityOption,
    month: int = MonthOption,
    year: int = YearOption,
) -> None:
    """Print the base charge for a reading."""
    state = _get_state(ctx)
    reading = _value(state, customer, quantity, month, year)
    try:
        base_charge = reading.base_charge
    except RateLookupError as exc:
        _fail(exc)
    typer.echo(f"base charge is {format_amount(base_charge, state.places)}")


@app.command("taxable-charge")
def taxable_charge_command(
    ctx: typer.Context,
    customer: str = CustomerOption,
    quantity: Decimal = QuantityOption,
    month: int = MonthOption,
    year: int = YearOption,
) -> None:
    """Print the base charge and the taxable charge for a reading."""
    state = _get_state(ctx)
    reading = _value(state, customer, quantity, month, year)
    try:
        base_charge = reading.base_charge
        taxable_charge = reading.taxable_charge
    except RateLookupError as exc:
        _fail(exc)
    typer.echo(f"base charge is {format_amount(base_charge, state.places)}")
    typer.echo(f"taxable charge is {format_amount(taxable_charge, state.places)}")


@app.command("basic-charge")
def basic_charge_command(
    ctx: typer.Context,
    customer: str = CustomerOption,
    quantity: Decimal = QuantityOption,
    month: int = MonthOption,
    year: int = YearOption,
) -> None:
    """Print the basic charge amount for a reading."""
    state = _get_state(ctx)
    reading = _value(state, customer, quantity, month, year)
    try:
        amount = reading.base_charge
    except RateLookupError as exc:
        _fail(exc)
    typer.echo(f"basic charge amount is {format_amount(amount, state.places)}")


@app.command("report")
def report_command(
    ctx: typer.Context,
    customer: str = CustomerOption,
    quantity: Decimal = QuantityOption,
    month: int = MonthOption,
    year: int = YearOption,
    as_json: bool = typer.Option(False, "--json", help="Emit the report as JSON."),
) -> None:
    """Show a full charge report for a reading."""
    state = _get_state(ctx)
    reading = _value(state, customer, quantity, month, year)
    try:
        report = ChargeReport.from_reading(reading)
    except RateLookupError as exc:
        _fail(exc)
    if as_json:
        typer.echo(report.model_dump_json())
        return
    render_report(report, state.places)


@app.command("rates")
def rates_command(ctx: typer.Context) -> None:
    """List the configured base rates and tax thresholds."""
    state = _get_state(ctx)
    render_rate_table(state.rates)
