"""Derived views over parsed sector records: wide table, statistics, table search."""

from src.analytics.aggregation import aggregate_by_date, to_wide_frame
from src.analytics.statistics import (
    compare_latest,
    distribution_snapshot,
    filter_by_period,
    period_stats,
    sector_trend,
    sector_window_stats,
    top_grower,
)
from src.analytics.table_query import list_sectors, search_records

__all__ = [
    "aggregate_by_date",
    "compare_latest",
    "distribution_snapshot",
    "filter_by_period",
    "list_sectors",
    "period_stats",
    "search_records",
    "sector_trend",
    "sector_window_stats",
    "to_wide_frame",
    "top_grower",
]
