"""Record table search and sector listing."""

from collections.abc import Iterable

from src.shared.models import EconomicDataPoint


def search_records(
    records: Iterable[EconomicDataPoint],
    term: str = "",
    sector: str | None = None,
    limit: int | None = None,
) -> list[EconomicDataPoint]:
    """Filter records for the data table, newest first.

    A record matches ``term`` when its sector contains it (case-insensitive)
    or its date text contains it. ``sector`` restricts to an exact sector.
    ``limit`` caps the number of rows returned (the table shows
    Config.TABLE_ROW_LIMIT).
    """
    needle = term.lower()
    newest_first = sorted(records, key=lambda r: r.date, reverse=True)
    matches = [
        r
        for r in newest_first
        if (needle in r.sector.lower() or term in r.date_str)
        and (sector is None or r.sector == sector)
    ]
    if limit is not None:
        return matches[:limit]
    return matches


def list_sectors(records: Iterable[EconomicDataPoint]) -> list[str]:
    """Distinct sectors in first-seen order."""
    return list(dict.fromkeys(r.sector for r in records))
