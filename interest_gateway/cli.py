"""Command line calculator over the rate timeline"""

import asyncio
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

import typer

from interest_gateway.config import settings
from interest_gateway.domain.exceptions import AcquisitionError, InvalidRangeError
from interest_gateway.domain.interest import calculate_interest
from interest_gateway.domain.models import DayCount, InterestBreakdown, RatePeriod, RateType
from interest_gateway.export import write_csv
from interest_gateway.infrastructure.observability.logging import setup_logging
from interest_gateway.infrastructure.sources.saved import SavedDocumentSource
from interest_gateway.infrastructure.sources.selector import RateService, RateSourceSelector, build_selector

app = typer.Typer(help="Interest calculator over published contractual and overdue rates")

DATE_FORMATS = ["%Y-%m-%d"]


def _parse_amount(value: str) -> Decimal:
    """Non-negative amount with a dot decimal separator"""
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        raise typer.BadParameter("Enter a valid number. Use dot for decimals (e.g., 10000.50).")
    if not amount.is_finite() or amount < 0:
        raise typer.BadParameter("Enter a non-negative number.")
    return amount


def _load_periods(html: Optional[Path]) -> List[RatePeriod]:
    """Saved document when given, the configured source chain otherwise"""
    selector = RateSourceSelector([SavedDocumentSource(html)]) if html else build_selector(settings)
    try:
        return asyncio.run(RateService(selector).get_periods())
    except AcquisitionError as e:
        typer.echo(f"Could not acquire any rate data: {e}", err=True)
        raise typer.Exit(code=1)


def _print_breakdown(breakdown: InterestBreakdown) -> None:
    typer.echo("\n--- Detailed breakdown ---")
    typer.echo("Period                Days   Annual %   Interest (€)")
    typer.echo("----------------------------------------------------")
    for s in breakdown.slices:
        typer.echo(
            f"{s.date_from:%Y-%m-%d}..{s.date_to:%Y-%m-%d}  {s.days:>4}   "
            f"{s.annual_rate_percent:>7.2f}      {s.interest:>10.2f}"
        )

    typer.echo("\n--- Yearly summary ---")
    for year, total in breakdown.yearly_totals.items():
        typer.echo(f"{year}: {total:.2f} €")

    typer.echo(f"\nTOTAL INTEREST: {breakdown.total:.2f} €")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="JSON logs on stderr")) -> None:
    if verbose:
        setup_logging("DEBUG", stream=sys.stderr)


@app.command()
def calculate(
    amount: str = typer.Option(..., prompt="Amount (€)", help="Principal amount"),
    date_from: datetime = typer.Option(..., "--from", prompt="Date (from) [yyyy-MM-dd]", formats=DATE_FORMATS),
    date_to: datetime = typer.Option(..., "--to", prompt="Date (to)   [yyyy-MM-dd]", formats=DATE_FORMATS),
    day_count: DayCount = typer.Option(DayCount.CALENDAR_YEAR, prompt="Method", help="Day-count convention"),
    rate_type: RateType = typer.Option(RateType.CONTRACTUAL, prompt="Rate type", help="Rate to apply"),
    html: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Saved rate page (HTML)"),
    csv: Optional[Path] = typer.Option(None, help="Export the breakdown to this CSV file or directory"),
) -> None:
    """Interest with per-period breakdown and yearly summary"""
    principal = _parse_amount(amount)
    periods = _load_periods(html)

    try:
        breakdown = calculate_interest(
            periods, date_from.date(), date_to.date(), principal, rate_type, day_count
        )
    except InvalidRangeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    if not breakdown.slices:
        typer.echo("\nNo overlapping periods with the selected date range.")
        return

    _print_breakdown(breakdown)

    if csv is not None:
        typer.echo(f"\nCSV saved: {write_csv(breakdown, csv)}")


@app.command()
def rates(
    html: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Saved rate page (HTML)"),
) -> None:
    """Normalized rate timeline"""
    periods = _load_periods(html)
    typer.echo("Valid from  Valid until  Contractual %  Overdue %")
    for p in periods:
        typer.echo(f"{p.start:%Y-%m-%d}  {p.end:%Y-%m-%d}   {p.contractual:>12.2f}  {p.overdue:>9.2f}")


if __name__ == "__main__":
    app()
