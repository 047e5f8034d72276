"""Script to parse a sector report and print the dashboard summary.

Reads a raw semicolon-delimited report (or a JSON export) and prints period
statistics, the latest sector distribution and, optionally, one sector's
full-history figures.

Usage:
    python scripts/build_sector_report.py data/raw/sectors/credits.csv
    python scripts/build_sector_report.py credits.csv --period 3Y --sector Agriculture
    python scripts/build_sector_report.py credits.csv --search 2020
    python scripts/build_sector_report.py credits.csv --export-json data/processed/
    python scripts/build_sector_report.py --all-raw                # process data/raw/sectors/*.csv

Output:
    Summary on stdout; optional JSON export and processed CSV/Parquet files.
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

from src.analytics.aggregation import aggregate_by_date
from src.analytics.statistics import (
    distribution_snapshot,
    filter_by_period,
    period_stats,
    sector_window_stats,
)
from src.analytics.table_query import search_records
from src.common.config import ChartPeriod
from src.ingestion.preprocessors.sector_parser import SectorCsvPreprocessor
from src.shared.config import Config
from src.storage.json_store import DatasetImportError, DatasetStore


def _fmt_percent(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"{value:+.1f}%"


def main():
    parser = argparse.ArgumentParser(description="Parse a sector report and print statistics")
    parser.add_argument("path", nargs="?", type=Path, help="Raw report (.csv) or JSON export")
    parser.add_argument(
        "--period",
        choices=[p.value for p in ChartPeriod],
        default=Config.DEFAULT_PERIOD,
        help="Lookback window for period statistics (default: %(default)s)",
    )
    parser.add_argument(
        "--sector",
        default=Config.FOCUS_SECTOR,
        help="Sector to highlight (default: %(default)s)",
    )
    parser.add_argument("--search", metavar="TERM", help="List records whose sector or date contains TERM")
    parser.add_argument("--export-json", type=Path, help="Write the parsed records as JSON")
    parser.add_argument(
        "--all-raw",
        action="store_true",
        help="Preprocess every report in data/raw/sectors/ and export to data/processed/sectors/",
    )
    args = parser.parse_args()

    Config.validate()

    if args.all_raw:
        log_file = Config.LOGS_DIR / "preprocessors" / f"sectors_{datetime.now():%Y%m%d_%H%M%S}.log"
        preprocessor = SectorCsvPreprocessor(log_file=log_file)
        paths = preprocessor.process_and_export()
        print(f"✓ Exported {len(paths)} reports")
        for identifier, path in paths.items():
            print(f"  - {identifier}: {path}")
        return 0

    if args.path is None:
        parser.error("path is required unless --all-raw is given")

    store = DatasetStore()
    try:
        store.load_file(args.path)
    except (OSError, DatasetImportError) as e:
        print(f"✗ Failed to load {args.path}: {e}")
        return 1

    records = store.records
    window = filter_by_period(records, args.period)
    stats = period_stats(window, sector=args.sector)

    print("Sector Report")
    print(f"{'=' * 60}")
    print(f"Input:   {args.path}")
    print(f"Records: {len(records)} ({len(aggregate_by_date(records))} dates)")
    print(f"Period:  {args.period} ({len(window)} records)")
    print()

    if stats is None:
        print("No data in the selected period")
        return 0

    print(f"Total volume:  {stats.total_volume:,.0f} ({_fmt_percent(stats.total_trend)})")
    print(
        f"{stats.sector}: {stats.sector_volume:,.0f} ({_fmt_percent(stats.sector_trend)})"
    )
    if stats.top_grower:
        print(f"Top grower:    {stats.top_grower.sector} ({_fmt_percent(stats.top_grower.growth)})")
    else:
        print("Top grower:    n/a")
    print(f"{stats.secondary_sector}: {stats.secondary_volume:,.0f}")
    print()

    print("Distribution at latest date:")
    for share in distribution_snapshot(window):
        print(f"  - {share.sector}: {share.amount:,.0f} ({share.share:.1f}%)")
    print()

    detail = sector_window_stats(records, args.sector)
    if detail is None:
        print(f"{args.sector}: not enough history")
    else:
        print(f"{args.sector} ({detail.observations} observations):")
        print(f"  - Latest:      {detail.latest_amount:,.0f} ({detail.latest_date})")
        print(f"  - Growth:      {_fmt_percent(detail.total_growth)}")
        volatility = "n/a" if detail.volatility is None else f"{detail.volatility:.2f}%"
        print(f"  - Volatility:  {volatility}")

    if args.search is not None:
        matches = search_records(records, args.search, limit=Config.TABLE_ROW_LIMIT)
        print()
        print(f"Records matching '{args.search}' (first {Config.TABLE_ROW_LIMIT}):")
        for record in matches:
            print(f"  - {record.date_str}  {record.sector}: {record.amount:,.2f}")

    if args.export_json:
        path = store.save(args.export_json)
        print()
        print(f"✓ Exported JSON to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
