"""Period and sector statistics over normalized records.

All functions are pure: they take a record slice and return freshly built
result objects. Degenerate input (empty slice, single observation, zero
baseline) yields ``None`` or a documented zero, never NaN or infinity.

Typical dashboard flow:
    >>> window = filter_by_period(records, ChartPeriod.YEAR_1)
    >>> stats = period_stats(window, sector="Industry")
    >>> shares = distribution_snapshot(window)
    >>> detail = sector_window_stats(records, "Industry")
"""

import math
from collections.abc import Iterable, Sequence
from datetime import date

from src.common.config import ChartPeriod
from src.shared.config import Config
from src.shared.models import (
    DistributionShare,
    EconomicDataPoint,
    LatestComparison,
    PeriodStats,
    SectorTrend,
    SectorWindowStats,
    TopGrower,
)


def percent_change(current: float, baseline: float) -> float:
    """Percentage change from baseline to current; 0 when baseline is 0."""
    if not baseline:
        return 0.0
    return (current - baseline) / baseline * 100


def _sum_amounts(items: Iterable[EconomicDataPoint]) -> float:
    # Plain left-to-right float addition, not the compensated sum() of 3.12+
    total = 0.0
    for item in items:
        total += item.amount
    return total


def _subtract_years(day: date, years: int) -> date:
    """Same month/day ``years`` earlier; Feb 29 maps to Mar 1 in a non-leap year."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return date(day.year - years, 3, 1)


def filter_by_period(
    records: Sequence[EconomicDataPoint],
    period: ChartPeriod | str,
) -> list[EconomicDataPoint]:
    """Keep records within ``period`` years of the latest date.

    The cutoff is inclusive. ``ChartPeriod.ALL`` returns every record.
    """
    period = ChartPeriod(period)
    if period.years is None or not records:
        return list(records)

    latest = max(r.date for r in records)
    cutoff = _subtract_years(latest, period.years)
    return [r for r in records if r.date >= cutoff]


def compare_latest(records: Iterable[EconomicDataPoint]) -> LatestComparison | None:
    """Collect the records at the latest and previous distinct dates.

    Returns None for an empty slice.
    """
    ordered = sorted(records, key=lambda r: r.date)
    if not ordered:
        return None

    distinct_dates = sorted({r.date for r in ordered})
    latest_date = distinct_dates[-1]
    previous_date = distinct_dates[-2] if len(distinct_dates) > 1 else None

    latest_items = tuple(r for r in ordered if r.date == latest_date)
    previous_items = tuple(r for r in ordered if r.date == previous_date)

    total_volume = _sum_amounts(latest_items)
    previous_total = _sum_amounts(previous_items)

    return LatestComparison(
        latest_date=latest_date,
        previous_date=previous_date,
        latest_items=latest_items,
        previous_items=previous_items,
        total_volume=total_volume,
        previous_total=previous_total,
        total_trend=percent_change(total_volume, previous_total),
    )


def _first_amount(items: Iterable[EconomicDataPoint], sector: str) -> float:
    for item in items:
        if item.sector == sector:
            return item.amount
    return 0.0


def sector_trend(comparison: LatestComparison, sector: str) -> SectorTrend:
    """Value and trend of one sector between the previous and latest dates.

    A sector absent at a date counts as 0.
    """
    value = _first_amount(comparison.latest_items, sector)
    previous_value = _first_amount(comparison.previous_items, sector)
    return SectorTrend(
        sector=sector,
        value=value,
        previous_value=previous_value,
        trend=percent_change(value, previous_value),
    )


def top_grower(comparison: LatestComparison) -> TopGrower | None:
    """Sector with the largest growth between the previous and latest dates.

    Only sectors present at both dates with a non-zero previous amount are
    candidates. On ties the first sector in latest-items order wins.
    """
    best: TopGrower | None = None
    for item in comparison.latest_items:
        previous = next((p for p in comparison.previous_items if p.sector == item.sector), None)
        if previous is None or previous.amount == 0:
            continue
        growth = (item.amount - previous.amount) / previous.amount * 100
        if best is None or growth > best.growth:
            best = TopGrower(sector=item.sector, growth=growth)
    return best


def period_stats(
    records: Iterable[EconomicDataPoint],
    sector: str | None = None,
    secondary_sector: str | None = None,
) -> PeriodStats | None:
    """Summary figures for the dashboard over an already filtered window.

    Args:
        records: Records of the selected window.
        sector: Sector to highlight (default: Config.FOCUS_SECTOR).
        secondary_sector: Sector whose latest volume is shown alongside
            (default: Config.SECONDARY_SECTOR).

    Returns:
        PeriodStats, or None when the window is empty.
    """
    comparison = compare_latest(records)
    if comparison is None:
        return None

    focus = sector_trend(comparison, sector or Config.FOCUS_SECTOR)
    secondary = secondary_sector or Config.SECONDARY_SECTOR
    return PeriodStats(
        total_volume=comparison.total_volume,
        total_trend=comparison.total_trend,
        sector=focus.sector,
        sector_volume=focus.value,
        sector_trend=focus.trend,
        top_grower=top_grower(comparison),
        secondary_sector=secondary,
        secondary_volume=_first_amount(comparison.latest_items, secondary),
    )


def sector_window_stats(
    records: Iterable[EconomicDataPoint],
    sector: str,
) -> SectorWindowStats | None:
    """Growth and volatility of one sector across its full history.

    Volatility is the population standard deviation of period-over-period
    fractional changes, in percent.

    Returns:
        SectorWindowStats, or None with fewer than two observations.
    """
    history = sorted((r for r in records if r.sector == sector), key=lambda r: r.date)
    if len(history) < 2:
        return None

    first, latest = history[0], history[-1]
    total_growth = None
    if first.amount != 0:
        total_growth = (latest.amount - first.amount) / first.amount * 100

    volatility = None
    if all(r.amount != 0 for r in history[:-1]):
        changes = [
            (curr.amount - prev.amount) / prev.amount for prev, curr in zip(history, history[1:])
        ]
        mean_change = 0.0
        for change in changes:
            mean_change += change
        mean_change /= len(changes)

        variance = 0.0
        for change in changes:
            variance += (change - mean_change) ** 2
        variance /= len(changes)

        volatility = math.sqrt(variance) * 100

    return SectorWindowStats(
        sector=sector,
        observations=len(history),
        first_amount=first.amount,
        latest_amount=latest.amount,
        latest_date=latest.date,
        total_growth=total_growth,
        volatility=volatility,
    )


def distribution_snapshot(records: Iterable[EconomicDataPoint]) -> list[DistributionShare]:
    """Share of each sector in the total at the latest date.

    Sorted by amount, largest first. Shares are 0 when the date total is 0.
    """
    records = list(records)
    if not records:
        return []

    latest_date = max(r.date for r in records)
    latest_items = [r for r in records if r.date == latest_date]
    total = _sum_amounts(latest_items)

    shares = [
        DistributionShare(
            sector=item.sector,
            amount=item.amount,
            share=item.amount / total * 100 if total != 0 else 0.0,
        )
        for item in latest_items
    ]
    return sorted(shares, key=lambda s: s.amount, reverse=True)
