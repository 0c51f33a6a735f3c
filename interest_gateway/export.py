"""CSV export of an interest breakdown"""

import csv
import io
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from interest_gateway.domain.models import InterestBreakdown


def _fixed(value: Decimal) -> str:
    return f"{value:.2f}"


def render_csv(breakdown: InterestBreakdown) -> str:
    """
    Render the breakdown as CSV text.

    Layout: an Amount/RateType/Method header block, a blank line, then
    one From,To,Days,AnnualPercent,Interest line per slice.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Amount", "RateType", "Method"])
    writer.writerow([str(breakdown.amount), breakdown.rate_type.label, breakdown.day_count.label])
    writer.writerow([])
    writer.writerow(["From", "To", "Days", "AnnualPercent", "Interest"])
    for item in breakdown.slices:
        writer.writerow(
            [
                item.date_from.isoformat(),
                item.date_to.isoformat(),
                item.days,
                _fixed(item.annual_rate_percent),
                _fixed(item.interest),
            ]
        )
    return buffer.getvalue()


def default_csv_name(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"interest_breakdown_{now:%Y%m%d_%H%M%S}.csv"


def write_csv(breakdown: InterestBreakdown, path: str | Path) -> Path:
    """Write the breakdown to path (a directory gets a timestamped file name)"""
    target = Path(path)
    if target.is_dir():
        target = target / default_csv_name()
    target.write_text(render_csv(breakdown), encoding="utf-8")
    return target
