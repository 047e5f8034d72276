"""Date aggregation: pivot records into one row per calendar day.

Each row maps sector name to that day's amount. When a sector appears twice
on the same day the later record in input order wins.
"""

from collections.abc import Iterable
from datetime import date

import pandas as pd

from src.common.config import MONTH_ABBREVIATIONS
from src.shared.models import AggregatedRow, EconomicDataPoint


def display_label(day: date) -> str:
    """Short chart label for a day, e.g. "Jan 2020"."""
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.year}"


def aggregate_by_date(records: Iterable[EconomicDataPoint]) -> list[AggregatedRow]:
    """Group records by calendar day into wide rows sorted by day key."""
    grouped: dict[str, AggregatedRow] = {}

    for record in records:
        day_key = record.date.isoformat()
        row = grouped.get(day_key)
        if row is None:
            row = AggregatedRow(date=day_key, display_date=display_label(record.date))
            grouped[day_key] = row
        row.values[record.sector] = record.amount

    return [grouped[key] for key in sorted(grouped)]


def to_wide_frame(rows: Iterable[AggregatedRow]) -> pd.DataFrame:
    """Convert aggregated rows to a DataFrame indexed by (date, display_date).

    The day key and label live in the index so any sector name, including
    "date" or "display_date", is a plain column. Sector columns follow
    first-seen order; a sector missing on a day is NaN.
    """
    rows = list(rows)
    sectors: list[str] = []
    for row in rows:
        for sector in row.values:
            if sector not in sectors:
                sectors.append(sector)

    index = pd.MultiIndex.from_arrays(
        [[row.date for row in rows], [row.display_date for row in rows]],
        names=["date", "display_date"],
    )
    return pd.DataFrame([row.values for row in rows], index=index, columns=sectors)
