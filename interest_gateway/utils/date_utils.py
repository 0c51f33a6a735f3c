"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List, Tuple


def days_inclusive(start: date, end: date) -> int:
    """Number of days from start to end, both ends counted"""
    return (end - start).days + 1


def days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


def split_by_year(start: date, end: date) -> List[Tuple[date, date]]:
    """Split [start, end] into inclusive sub-ranges that never cross December 31"""
    parts = []
    current = start
    while current.year < end.year:
        year_end = date(current.year, 12, 31)
        parts.append((current, year_end))
        current = year_end + timedelta(days=1)
    parts.append((current, end))
    return parts
