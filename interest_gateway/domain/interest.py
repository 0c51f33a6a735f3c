"""Interest computation engine - core calculation over a rate period timeline"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List

from interest_gateway.domain.exceptions import InvalidRangeError
from interest_gateway.domain.models import (
    DayCount,
    InterestBreakdown,
    InterestSlice,
    RatePeriod,
    RateType,
)
from interest_gateway.utils.date_utils import days_in_year, days_inclusive, split_by_year

CENT = Decimal("0.01")
HUNDRED = Decimal(100)


def round_money(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def year_denominator(year: int, day_count: DayCount) -> Decimal:
    """
    Days in the year used as the interest denominator.

    - CALENDAR_YEAR: 366 for leap years, 365 otherwise
    - BANKING_360: always 360
    """
    if DayCount(day_count) is DayCount.BANKING_360:
        return Decimal(360)
    return Decimal(days_in_year(year))


def slice_interest(
    amount: Decimal,
    annual_rate_percent: Decimal,
    days: int,
    year: int,
    day_count: DayCount,
) -> Decimal:
    """amount * (rate / 100) * (days / denominator), rounded to cents"""
    denominator = year_denominator(year, day_count)
    interest = amount * (annual_rate_percent / HUNDRED) * (Decimal(days) / denominator)
    return round_money(interest)


def compute(
    periods: Iterable[RatePeriod],
    date_from: date,
    date_to: date,
    amount: Decimal,
    rate_type: RateType,
    day_count: DayCount,
) -> List[InterestSlice]:
    """
    Split [date_from, date_to] into slices bounded by rate periods and
    calendar years, and compute the rounded interest of each slice.

    Rounding happens per slice, so the sum of slices can differ by a few
    cents from rounding a single end-to-end figure.

    Raises:
        InvalidRangeError: date_to is before date_from

    Returns:
        Slices ascending by start date; empty when no period overlaps
    """
    if date_to < date_from:
        raise InvalidRangeError(f"'to' ({date_to}) is before 'from' ({date_from})")

    slices = []
    for period in sorted(periods, key=lambda p: (p.start, p.end)):
        if period.end < date_from or period.start > date_to:
            continue

        start = max(period.start, date_from)
        end = min(period.end, date_to)
        rate = period.rate(rate_type)

        for part_start, part_end in split_by_year(start, end):
            days = days_inclusive(part_start, part_end)
            slices.append(
                InterestSlice(
                    date_from=part_start,
                    date_to=part_end,
                    annual_rate_percent=rate,
                    days=days,
                    interest=slice_interest(amount, rate, days, part_start.year, day_count),
                )
            )

    slices.sort(key=lambda s: s.date_from)
    return slices


def yearly_totals(
    slices: Iterable[InterestSlice],
    amount: Decimal,
    day_count: DayCount,
) -> Dict[int, Decimal]:
    """
    Sum slice interest per calendar year, ascending by year.

    A slice that crosses a year boundary is split and each part is
    recomputed and rounded on its own before being added to its year.
    """
    totals: Dict[int, Decimal] = {}
    for item in slices:
        parts = split_by_year(item.date_from, item.date_to)
        if len(parts) == 1:
            year = item.date_from.year
            totals[year] = totals.get(year, Decimal("0.00")) + item.interest
            continue

        for part_start, part_end in parts:
            year = part_start.year
            interest = slice_interest(
                amount,
                item.annual_rate_percent,
                days_inclusive(part_start, part_end),
                year,
                day_count,
            )
            totals[year] = totals.get(year, Decimal("0.00")) + interest

    return dict(sorted(totals.items()))


def calculate_interest(
    periods: Iterable[RatePeriod],
    date_from: date,
    date_to: date,
    amount: Decimal,
    rate_type: RateType,
    day_count: DayCount,
) -> InterestBreakdown:
    """
    Main entry point: slices, yearly summary and total for one request.

    The total is the sum of the already rounded slice interests.
    """
    slices = compute(periods, date_from, date_to, amount, rate_type, day_count)
    total = sum((s.interest for s in slices), Decimal("0.00"))

    return InterestBreakdown(
        amount=amount,
        rate_type=rate_type,
        day_count=day_count,
        slices=slices,
        yearly_totals=yearly_totals(slices, amount, day_count),
        total=total,
    )
