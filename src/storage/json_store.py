"""JSON export/import of parsed records and the in-memory dataset holder.

Document shape (array of objects):

    [
      {
        "id": "Industry-01.01.2020",
        "sector": "Industry",
        "amount": 1000.0,
        "date": "2020-01-01",
        "dateStr": "01.01.2020"
      }
    ]

``date`` is written as an ISO calendar date. On import, ISO datetimes
("2020-01-01T00:00:00.000Z") are accepted as well and reduced to their date.
"""

import json
import math
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd

from src.ingestion.preprocessors.sector_parser import parse_records
from src.shared.config import Config
from src.shared.models import EconomicDataPoint
from src.shared.utils import setup_logger, utc_today

REQUIRED_FIELDS = ("sector", "amount")


class DatasetImportError(ValueError):
    """Raised when an import document cannot be turned into records."""


def export_records(records: Iterable[EconomicDataPoint]) -> str:
    """Serialize records to the JSON export document."""
    return json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)


def export_filename(today: date | None = None) -> str:
    """Default export file name, e.g. economic_data_2024-02-08.json."""
    return f"economic_data_{(today or utc_today()).isoformat()}.json"


def _parse_document_date(value: Any, position: int) -> date:
    if not isinstance(value, str) or not value.strip():
        raise DatasetImportError(f"Item {position}: 'date' must be a non-empty string")
    try:
        timestamp = pd.Timestamp(value)
    except (ValueError, TypeError) as e:
        raise DatasetImportError(f"Item {position}: invalid date '{value}': {e}") from e
    if pd.isna(timestamp):
        raise DatasetImportError(f"Item {position}: invalid date '{value}'")
    return timestamp.date()


def _record_from_item(item: Any, position: int) -> EconomicDataPoint:
    if not isinstance(item, dict):
        raise DatasetImportError(f"Item {position}: expected an object")

    sector = item.get("sector")
    if not isinstance(sector, str) or not sector:
        raise DatasetImportError(f"Item {position}: 'sector' must be a non-empty string")

    amount = item.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise DatasetImportError(f"Item {position}: 'amount' must be a number")
    if not math.isfinite(amount):
        raise DatasetImportError(f"Item {position}: 'amount' must be finite")

    record_date = _parse_document_date(item.get("date"), position)
    date_str = item.get("dateStr") or record_date.strftime("%d.%m.%Y")
    record_id = item.get("id") or f"{sector}-{date_str}"

    return EconomicDataPoint(
        id=str(record_id),
        sector=sector,
        amount=float(amount),
        date=record_date,
        date_str=str(date_str),
    )


def import_records(text: str) -> list[EconomicDataPoint]:
    """Rebuild records from a JSON export document.

    Raises:
        DatasetImportError: If the text is not JSON, is not a non-empty
            array, the first item lacks sector/amount, or any item cannot be
            rebuilt.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DatasetImportError(f"Failed to parse JSON: {e}") from e

    if not isinstance(document, list) or not document:
        raise DatasetImportError("Invalid data format: expected a non-empty array")

    first = document[0]
    if not isinstance(first, dict) or any(first.get(f) in (None, "") for f in REQUIRED_FIELDS):
        raise DatasetImportError(
            f"Invalid data format: first item must provide {', '.join(REQUIRED_FIELDS)}"
        )

    records = [_record_from_item(item, i) for i, item in enumerate(document)]
    records.sort(key=lambda r: r.date)
    return records


class DatasetStore:
    """Holds the currently loaded record set.

    Loading replaces the held records only when the new data was built
    completely; a rejected import leaves the previous dataset in place.
    """

    def __init__(self, records: Iterable[EconomicDataPoint] = (), log_file: Path | None = None) -> None:
        self._records: tuple[EconomicDataPoint, ...] = tuple(records)
        self.logger = setup_logger(self.__class__.__name__, log_file, Config.LOG_LEVEL)

    @property
    def records(self) -> tuple[EconomicDataPoint, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def load_csv(self, text: str) -> int:
        """Replace the dataset with records parsed from raw report text."""
        result = parse_records(text)
        if result.skipped:
            self.logger.warning("Skipped %d malformed lines", result.skipped_count)
        self._records = result.records
        self.logger.info("Loaded %d records from report text", len(self._records))
        return len(self._records)

    def load_json(self, text: str) -> int:
        """Replace the dataset with records from an export document.

        Raises:
            DatasetImportError: If the document is invalid; the held
                dataset is unchanged.
        """
        try:
            records = import_records(text)
        except DatasetImportError as e:
            self.logger.error("Import rejected: %s", e)
            raise
        self._records = tuple(records)
        self.logger.info("Imported %d records", len(self._records))
        return len(self._records)

    def dump_json(self) -> str:
        return export_records(self._records)

    def save(self, path: Path) -> Path:
        """Write the dataset as a JSON export document.

        A directory path (existing, or without a suffix) gets the default
        export file name.
        """
        if path.is_dir() or not path.suffix:
            path = path / export_filename()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.dump_json(), encoding="utf-8")
        self.logger.info("Exported %d records to %s", len(self._records), path)
        return path

    def load_file(self, path: Path) -> int:
        """Load a JSON export document or a raw report, chosen by file suffix."""
        if path.suffix.lower() == ".json":
            return self.load_json(path.read_text(encoding="utf-8"))
        return self.load_csv(path.read_text(encoding=Config.CSV_ENCODING))
