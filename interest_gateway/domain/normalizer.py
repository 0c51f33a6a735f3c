"""Rate period normalization - raw scraped rows into a clean timeline"""

import html
import logging
from bisect import insort
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from interest_gateway.domain.exceptions import MalformedRowError
from interest_gateway.domain.models import RatePeriod, RawRateRow

logger = logging.getLogger(__name__)

# Tried in order; %d and %m accept one or two digits
DATE_FORMATS = ("%d/%m/%Y", "%d.%m.%Y", "%d-%m-%Y")

_NUMBER_CHARS = frozenset("0123456789.-")


def _clean(raw: str) -> str:
    return html.unescape(raw or "").replace("\u00a0", " ").strip()


def parse_date(raw: str) -> Optional[date]:
    """Parse a day/month/year cell, or return None if no pattern matches"""
    text = _clean(raw)
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_percent(raw: str) -> Optional[Decimal]:
    """
    Parse a percentage cell such as "7,25 %" or "9.25%" into Decimal("7.25").

    Keeps the longest leading run of digits, dots and minus signs after
    converting comma decimals, so trailing footnote markers are ignored.
    """
    text = _clean(raw).replace("%", "").strip().replace(",", ".")

    number = []
    for char in text:
        if char not in _NUMBER_CHARS:
            break
        number.append(char)
    if not number:
        return None

    try:
        value = Decimal("".join(number))
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_row(row: RawRateRow) -> RatePeriod:
    """
    Turn one raw row into a rate period.

    Raises:
        MalformedRowError: Too few cells, or an unparseable date or rate
    """
    cells = row.cells
    if len(cells) < RawRateRow.MIN_CELLS:
        raise MalformedRowError(f"Expected {RawRateRow.MIN_CELLS} cells, got {len(cells)}")

    start = parse_date(cells[RawRateRow.START])
    end = parse_date(cells[RawRateRow.END])
    if start is None or end is None:
        raise MalformedRowError(f"Unparseable dates: {cells[RawRateRow.START]!r}, {cells[RawRateRow.END]!r}")

    contractual = parse_percent(cells[RawRateRow.CONTRACTUAL])
    overdue = parse_percent(cells[RawRateRow.OVERDUE])
    if contractual is None or overdue is None:
        raise MalformedRowError(
            f"Unparseable rates: {cells[RawRateRow.CONTRACTUAL]!r}, {cells[RawRateRow.OVERDUE]!r}"
        )

    # Reversed columns
    if end < start:
        start, end = end, start

    return RatePeriod(start=start, end=end, contractual=contractual, overdue=overdue)


def _period_key(period: RatePeriod):
    return period.start, period.end


def _resolve_overlaps(ordered: List[RatePeriod]) -> List[RatePeriod]:
    """
    Remove overlaps from periods sorted by (start, end).

    Overlapping periods with the same rates collapse into their union, so
    duplicate and contained rows count once. When the rates differ, the
    later-starting period wins over its span: the earlier one is cut back
    to the day before, and whatever it covered past the later one's end
    is kept as a separate period. Of two conflicting rows with the same
    start, the one ending later (or listed later) wins.
    """
    pending = list(ordered)
    resolved: List[RatePeriod] = []
    while pending:
        following = pending.pop(0)
        if not resolved or resolved[-1].end < following.start:
            resolved.append(following)
            continue

        current = resolved.pop()
        if current.same_rates(following):
            resolved.append(replace(current, end=max(current.end, following.end)))
            continue

        logger.debug(f"Conflicting rate periods overlap: {current} and {following}")
        if current.start < following.start:
            resolved.append(replace(current, end=following.start - timedelta(days=1)))
        if current.end > following.end:
            insort(pending, replace(current, start=following.end + timedelta(days=1)), key=_period_key)
        resolved.append(following)
    return resolved


def merge_periods(periods: Iterable[RatePeriod]) -> List[RatePeriod]:
    """
    Sort periods by (start, end), resolve overlaps, and merge
    calendar-contiguous neighbours carrying identical rate pairs.

    Only strictly adjacent pairs are merged: a gap or a rate change ends the
    run. The result never covers a day twice, and applying it to its own
    output returns the same list.
    """
    ordered = _resolve_overlaps(sorted(periods, key=_period_key))
    if not ordered:
        return []

    merged = []
    current = ordered[0]
    for following in ordered[1:]:
        contiguous = current.end + timedelta(days=1) == following.start
        if contiguous and current.same_rates(following):
            current = RatePeriod(
                start=current.start,
                end=following.end,
                contractual=current.contractual,
                overdue=current.overdue,
            )
        else:
            merged.append(current)
            current = following
    merged.append(current)
    return merged


def normalize(rows: Iterable[RawRateRow]) -> List[RatePeriod]:
    """
    Main entry point: parse raw rows and build the ordered, merged timeline.

    Malformed rows are dropped. An empty result is valid; deciding whether
    it is an error is up to the caller.
    """
    candidates = []
    skipped = 0
    for row in rows:
        try:
            candidates.append(parse_row(row))
        except MalformedRowError as e:
            skipped += 1
            logger.debug(f"Skipping malformed rate row: {e}")

    periods = merge_periods(candidates)
    logger.debug(
        "Normalized rate rows",
        extra={"parsed_rows": len(candidates), "skipped_rows": skipped, "periods": len(periods)},
    )
    return periods
