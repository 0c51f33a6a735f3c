"""Unit tests for the interest computation engine"""

import pytest
from datetime import date
from decimal import Decimal
from interest_gateway.domain.exceptions import InvalidRangeError
from interest_gateway.domain.interest import (
    calculate_interest,
    compute,
    round_money,
    year_denominator,
    yearly_totals,
)
from interest_gateway.domain.models import DayCount, InterestSlice, RatePeriod, RateType


def period(start: date, end: date, contractual: str, overdue: str) -> RatePeriod:
    return RatePeriod(start, end, Decimal(contractual), Decimal(overdue))


def test_single_period_example():
    """1000 at 7.25% over 122 days of 2023: 1000 * 0.0725 * 122/365 = 24.2329"""
    periods = [period(date(2023, 3, 1), date(2023, 6, 30), "7.25", "9.25")]

    slices = compute(
        periods, date(2023, 3, 1), date(2023, 6, 30), Decimal("1000"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR
    )

    assert slices == [
        InterestSlice(date(2023, 3, 1), date(2023, 6, 30), Decimal("7.25"), 122, Decimal("24.23"))
    ]


def test_overdue_rate_selected():
    periods = [period(date(2023, 3, 1), date(2023, 6, 30), "7.25", "9.25")]

    slices = compute(
        periods, date(2023, 3, 1), date(2023, 6, 30), Decimal("1000"), RateType.OVERDUE, DayCount.CALENDAR_YEAR
    )

    # 1000 * 0.0925 * 122/365 = 30.9178
    assert slices[0].annual_rate_percent == Decimal("9.25")
    assert slices[0].interest == Decimal("30.92")


def test_invalid_range():
    """'to' before 'from' fails without producing slices"""
    with pytest.raises(InvalidRangeError):
        compute([], date(2023, 6, 30), date(2023, 3, 1), Decimal("1000"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR)


def test_single_day_range():
    periods = [period(date(2023, 1, 1), date(2023, 12, 31), "7.3", "9.3")]

    slices = compute(
        periods, date(2023, 5, 5), date(2023, 5, 5), Decimal("100000"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR
    )

    # 100000 * 0.073 / 365 = 20.00
    assert [(s.days, s.interest) for s in slices] == [(1, Decimal("20.00"))]


def test_range_outside_all_periods(sample_periods):
    slices = compute(
        sample_periods,
        date(2030, 1, 1),
        date(2030, 12, 31),
        Decimal("1000"),
        RateType.CONTRACTUAL,
        DayCount.CALENDAR_YEAR,
    )

    assert slices == []


def test_no_periods():
    assert compute([], date(2023, 1, 1), date(2023, 1, 31), Decimal("1000"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR) == []


def test_clamps_to_requested_range():
    periods = [period(date(2022, 1, 1), date(2024, 12, 31), "10", "12")]

    slices = compute(
        periods, date(2023, 2, 1), date(2023, 2, 28), Decimal("3650"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR
    )

    assert len(slices) == 1
    assert (slices[0].date_from, slices[0].date_to, slices[0].days) == (date(2023, 2, 1), date(2023, 2, 28), 28)
    # 3650 * 0.10 * 28/365 = 28.00
    assert slices[0].interest == Decimal("28.00")


def test_leap_year_boundary_denominators():
    """Slices in 2023 use 365, slices in 2024 use 366"""
    periods = [period(date(2023, 7, 1), date(2024, 6, 30), "10", "12")]

    slices = compute(
        periods, date(2023, 12, 30), date(2024, 1, 2), Decimal("36600"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR
    )

    assert [(s.date_from, s.date_to, s.days) for s in slices] == [
        (date(2023, 12, 30), date(2023, 12, 31), 2),
        (date(2024, 1, 1), date(2024, 1, 2), 2),
    ]
    # 3660 * 2/365 = 20.0548 ; 3660 * 2/366 = 20.00
    assert [s.interest for s in slices] == [Decimal("20.05"), Decimal("20.00")]


def test_banking_360_ignores_leap_years():
    periods = [period(date(2023, 1, 1), date(2024, 12, 31), "10", "12")]

    slices_2023 = compute(
        periods, date(2023, 1, 1), date(2023, 1, 30), Decimal("3600"), RateType.CONTRACTUAL, DayCount.BANKING_360
    )
    slices_2024 = compute(
        periods, date(2024, 1, 1), date(2024, 1, 30), Decimal("3600"), RateType.CONTRACTUAL, DayCount.BANKING_360
    )

    # 3600 * 0.10 * 30/360 = 30.00 in both years
    assert slices_2023[0].interest == slices_2024[0].interest == Decimal("30.00")


def test_full_leap_year_calendar_vs_banking():
    periods = [period(date(2024, 1, 1), date(2024, 12, 31), "10", "12")]
    args = (periods, date(2024, 1, 1), date(2024, 12, 31), Decimal("1000"), RateType.CONTRACTUAL)

    calendar_slices = compute(*args, DayCount.CALENDAR_YEAR)
    banking_slices = compute(*args, DayCount.BANKING_360)

    assert calendar_slices[0].days == 366
    assert calendar_slices[0].interest == Decimal("100.00")
    # 100 * 366/360 = 101.6667
    assert banking_slices[0].interest == Decimal("101.67")


def test_splits_at_period_and_year_boundaries(sample_periods):
    slices = compute(
        sample_periods,
        date(2022, 12, 1),
        date(2024, 1, 31),
        Decimal("10000"),
        RateType.CONTRACTUAL,
        DayCount.CALENDAR_YEAR,
    )

    assert [(s.date_from, s.date_to, s.annual_rate_percent) for s in slices] == [
        (date(2022, 12, 1), date(2022, 12, 31), Decimal("5.00")),
        (date(2023, 1, 1), date(2023, 2, 28), Decimal("6.50")),
        (date(2023, 3, 1), date(2023, 12, 31), Decimal("7.25")),
        (date(2024, 1, 1), date(2024, 1, 31), Decimal("8.00")),
    ]
    assert [s.days for s in slices] == [31, 59, 306, 31]
    for s in slices:
        assert s.date_from.year == s.date_to.year


def test_multi_year_period_split_per_year():
    periods = [period(date(2021, 6, 1), date(2024, 3, 31), "4", "6")]

    slices = compute(
        periods, date(2021, 6, 1), date(2024, 3, 31), Decimal("1000"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR
    )

    assert [s.date_from.year for s in slices] == [2021, 2022, 2023, 2024]
    assert slices[1].days == 365
    assert slices[1].interest == Decimal("40.00")


def test_unsorted_periods_are_accepted(sample_periods):
    """The engine sorts its input rather than rejecting it"""
    shuffled = list(reversed(sample_periods))
    args = (date(2022, 6, 1), date(2024, 6, 1), Decimal("5000"), RateType.OVERDUE, DayCount.CALENDAR_YEAR)

    assert compute(shuffled, *args) == compute(sample_periods, *args)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("0.005"), Decimal("0.01")),
        (Decimal("0.015"), Decimal("0.02")),
        (Decimal("0.025"), Decimal("0.03")),
        (Decimal("-0.025"), Decimal("-0.03")),
        (Decimal("24.2328767"), Decimal("24.23")),
    ],
)
def test_round_money_half_away_from_zero(value, expected):
    assert round_money(value) == expected


def test_slice_rounding_half_away_from_zero():
    """2.5 at 1% for a full year is exactly 0.025, which rounds up to 0.03"""
    periods = [period(date(2023, 1, 1), date(2023, 12, 31), "1", "2")]

    slices = compute(
        periods, date(2023, 1, 1), date(2023, 12, 31), Decimal("2.5"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR
    )

    assert slices[0].interest == Decimal("0.03")


@pytest.mark.parametrize(
    "year, day_count, expected",
    [
        (2023, DayCount.CALENDAR_YEAR, Decimal(365)),
        (2024, DayCount.CALENDAR_YEAR, Decimal(366)),
        (2000, DayCount.CALENDAR_YEAR, Decimal(366)),
        (1900, DayCount.CALENDAR_YEAR, Decimal(365)),
        (2024, DayCount.BANKING_360, Decimal(360)),
        (2024, "banking_360", Decimal(360)),
    ],
)
def test_year_denominator(year, day_count, expected):
    assert year_denominator(year, day_count) == expected


def test_total_equals_sum_of_slices(sample_periods):
    breakdown = calculate_interest(
        sample_periods,
        date(2022, 3, 17),
        date(2024, 9, 2),
        Decimal("12345.67"),
        RateType.OVERDUE,
        DayCount.CALENDAR_YEAR,
    )

    assert breakdown.total == sum(s.interest for s in breakdown.slices)
    assert breakdown.total == sum(breakdown.yearly_totals.values())
    assert list(breakdown.yearly_totals) == [2022, 2023, 2024]


def test_yearly_totals_across_year_boundary(sample_periods):
    breakdown = calculate_interest(
        sample_periods,
        date(2023, 12, 1),
        date(2024, 1, 31),
        Decimal("10000"),
        RateType.CONTRACTUAL,
        DayCount.CALENDAR_YEAR,
    )

    # 725 * 31/365 = 61.5753 ; 800 * 31/366 = 67.7596
    assert breakdown.yearly_totals == {2023: Decimal("61.58"), 2024: Decimal("67.76")}
    assert breakdown.total == Decimal("129.34")


def test_per_slice_rounding_is_preserved():
    """
    Rounding is applied to each slice, not to the final figure.

    Two slices of exactly 0.005 each report 0.01 each, so the total is 0.02
    even though the unrounded sum is 0.01.
    """
    periods = [
        period(date(2022, 1, 1), date(2022, 12, 31), "1", "2"),
        period(date(2023, 1, 1), date(2023, 12, 31), "1", "2"),
    ]

    breakdown = calculate_interest(
        periods, date(2022, 1, 1), date(2023, 12, 31), Decimal("0.5"), RateType.CONTRACTUAL, DayCount.CALENDAR_YEAR
    )

    assert [s.interest for s in breakdown.slices] == [Decimal("0.01"), Decimal("0.01")]
    assert breakdown.total == Decimal("0.02")


def test_yearly_totals_resplit_spanning_slice():
    """A slice crossing December 31 is recomputed per year"""
    spanning = InterestSlice(date(2023, 12, 30), date(2024, 1, 2), Decimal("10"), 4, Decimal("40.05"))

    totals = yearly_totals([spanning], Decimal("36600"), DayCount.CALENDAR_YEAR)

    assert totals == {2023: Decimal("20.05"), 2024: Decimal("20.00")}


def test_empty_breakdown(sample_periods):
    breakdown = calculate_interest(
        sample_periods,
        date(2019, 1, 1),
        date(2019, 12, 31),
        Decimal("1000"),
        RateType.CONTRACTUAL,
        DayCount.CALENDAR_YEAR,
    )

    assert breakdown.slices == []
    assert breakdown.yearly_totals == {}
    assert breakdown.total == Decimal("0.00")
