"""Typed records and derived result objects for sector analytics.

Every object here is immutable once produced. Derived views (aggregated rows,
statistics) are freshly built from the parsed records and never share mutable
state with them, apart from ``AggregatedRow.values`` which is owned by the row.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

# ---------------------------------------------------------------------------
# Parsed records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EconomicDataPoint:
    """One normalized (sector, date, amount) observation."""

    id: str
    sector: str
    amount: float
    date: date
    date_str: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the export document shape."""
        return {
            "id": self.id,
            "sector": self.sector,
            "amount": self.amount,
            "date": self.date.isoformat(),
            "dateStr": self.date_str,
        }


@dataclass(frozen=True)
class SkippedLine:
    """A raw input line rejected by the parser."""

    line_number: int
    text: str
    reason: str


@dataclass(frozen=True)
class ParseResult:
    records: tuple[EconomicDataPoint, ...]
    skipped: tuple[SkippedLine, ...] = ()

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


# ---------------------------------------------------------------------------
# Wide table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AggregatedRow:
    """All sector amounts observed on one calendar day."""

    date: str  # ISO day key, YYYY-MM-DD
    display_date: str
    values: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a charting row: {"date", "displayDate", <sector>: amount}.

        ``date`` and ``displayDate`` always hold the day key and label; a
        sector with one of those names is left out of the flat row (it stays
        available in ``values``).
        """
        row: dict[str, Any] = dict(self.values)
        row["date"] = self.date
        row["displayDate"] = self.display_date
        return row


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LatestComparison:
    """Records at the two most recent distinct dates of a slice."""

    latest_date: date
    previous_date: date | None
    latest_items: tuple[EconomicDataPoint, ...]
    previous_items: tuple[EconomicDataPoint, ...]
    total_volume: float
    previous_total: float
    total_trend: float


@dataclass(frozen=True)
class SectorTrend:
    sector: str
    value: float
    previous_value: float
    trend: float


@dataclass(frozen=True)
class TopGrower:
    sector: str
    growth: float


@dataclass(frozen=True)
class PeriodStats:
    """Dashboard summary over the selected time window."""

    total_volume: float
    total_trend: float
    sector: str
    sector_volume: float
    sector_trend: float
    top_grower: TopGrower | None
    secondary_sector: str = ""
    secondary_volume: float = 0.0


@dataclass(frozen=True)
class SectorWindowStats:
    """Full-history figures for a single sector.

    ``total_growth`` and ``volatility`` are percentages; ``None`` means the
    figure is unavailable because a baseline amount is zero.
    """

    sector: str
    observations: int
    first_amount: float
    latest_amount: float
    latest_date: date
    total_growth: float | None
    volatility: float | None


@dataclass(frozen=True)
class DistributionShare:
    sector: str
    amount: float
    share: float  # percent of the date total
