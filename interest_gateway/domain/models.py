"""Domain models - immutable dataclasses for rate periods and interest slices"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Tuple


class RateType(str, Enum):
    """Which published annual rate applies to the claim"""

    CONTRACTUAL = "contractual"
    OVERDUE = "overdue"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class DayCount(str, Enum):
    """Denominator rule for turning a day count into a fraction of a year"""

    CALENDAR_YEAR = "calendar_year"  # Actual/365, Actual/366 in leap years
    BANKING_360 = "banking_360"  # Actual/360

    @property
    def label(self) -> str:
        return "CalendarYear" if self is DayCount.CALENDAR_YEAR else "Banking360"


@dataclass(frozen=True)
class RawRateRow:
    """Text cells of one scraped table row, before any validation"""

    cells: Tuple[str, ...]

    # Valid From | Valid Until | Regulatory Act | Gazette | Contractual | Overdue
    START = 0
    END = 1
    CONTRACTUAL = 4
    OVERDUE = 5
    MIN_CELLS = 6

    @classmethod
    def of(cls, *cells: str) -> "RawRateRow":
        return cls(cells=tuple(cells))


@dataclass(frozen=True)
class RatePeriod:
    """Closed date interval with constant contractual and overdue annual rates"""

    start: date
    end: date
    contractual: Decimal  # annual %
    overdue: Decimal  # annual %

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Rate period ends before it starts: {self.start} > {self.end}")

    def rate(self, rate_type: RateType) -> Decimal:
        return self.contractual if RateType(rate_type) is RateType.CONTRACTUAL else self.overdue

    def same_rates(self, other: "RatePeriod") -> bool:
        return self.contractual == other.contractual and self.overdue == other.overdue


@dataclass(frozen=True)
class InterestSlice:
    """Interest for a sub-range lying in one calendar year and one rate period"""

    date_from: date
    date_to: date
    annual_rate_percent: Decimal
    days: int
    interest: Decimal


@dataclass(frozen=True)
class InterestBreakdown:
    """Output of an interest calculation"""

    amount: Decimal
    rate_type: RateType
    day_count: DayCount
    slices: List[InterestSlice] = field(default_factory=list)
    yearly_totals: Dict[int, Decimal] = field(default_factory=dict)
    total: Decimal = Decimal("0.00")
