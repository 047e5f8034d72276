"""Sector Report Parser (raw → processed).

Turns the semicolon-delimited sector report into normalized records.

Raw format (one header line, then one observation per line):
    name; amount; totalAmount; dateStr[; ...ignored]

    Промышленность;45 222,62;120 000,00;01.01.2018 г.;;;

- amount: decimal comma, whitespace as thousands separator
- totalAmount: carried in the report but not used downstream
- dateStr: DD.MM.YYYY with an optional " г." unit marker

Processed schema:
    id: "{sector}-{date_str}" (not unique when the report repeats a sector/date pair)
    sector: canonical sector name (translation table, raw name as fallback)
    amount: finite float
    date: calendar date
    date_str: normalized date text

Parsing is best-effort: malformed lines are skipped, never raised. The
skipped lines are reported in ``ParseResult.skipped`` with a reason.

Example:
    >>> from src.ingestion.preprocessors.sector_parser import parse_records
    >>> result = parse_records(text)
    >>> len(result.records), result.skipped_count
"""

import math
import re
from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from pathlib import Path

import numpy as np
import pandas as pd

from src.common.config import DATE_UNIT_MARKER, FIELD_SEPARATOR, SECTOR_TRANSLATIONS
from src.ingestion.preprocessors.base_preprocessor import BasePreprocessor
from src.shared.config import Config
from src.shared.models import EconomicDataPoint, ParseResult, SkippedLine
from src.shared.utils import setup_logger

logger = setup_logger(__name__, level=Config.LOG_LEVEL)

# Longest leading decimal literal, the way parseFloat reads "45222.62abc"
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = re.compile(r"\s+")
_DATE_PART = re.compile(r"\d+")

MIN_FIELDS = 4

# Skip reasons
TOO_FEW_FIELDS = "too_few_fields"
EMPTY_SECTOR = "empty_sector"
INVALID_AMOUNT = "invalid_amount"
INVALID_DATE = "invalid_date"


def parse_amount(raw: str) -> float | None:
    """Parse a locale-formatted amount ("45 222,62") into a float.

    All whitespace is removed and the first comma becomes the decimal point.
    Trailing garbage after a numeric prefix is ignored. Returns None when no
    finite number can be read.
    """
    cleaned = _WHITESPACE.sub("", raw).replace(",", ".", 1)
    match = _FLOAT_PREFIX.match(cleaned)
    if not match:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def normalize_date_text(raw: str) -> str:
    """Strip the unit marker from a report date ("01.01.2018 г." → "01.01.2018")."""
    return raw.replace(DATE_UNIT_MARKER, "", 1).strip()


def parse_report_date(text: str) -> date | None:
    """Parse normalized DD.MM.YYYY text into a calendar date.

    Day must be within 1-31 and month within 1-12. A day past the end of its
    month rolls over into the next month (31.02.2020 → 2020-03-02).
    """
    parts = text.split(".")
    if len(parts) < 3:
        return None

    numbers = []
    for part in parts[:3]:
        part = part.strip()
        if not _DATE_PART.fullmatch(part):
            return None
        numbers.append(int(part))

    day, month, year = numbers
    if not (1 <= day <= 31 and 1 <= month <= 12 and year > 0):
        return None

    try:
        return date(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def parse_records(
    text: str,
    translations: Mapping[str, str] = SECTOR_TRANSLATIONS,
) -> ParseResult:
    """Parse raw report text into records sorted by date.

    Never raises on malformed content. The first line is always treated as
    the header. Empty lines are ignored; every other rejected line is listed
    in the result's ``skipped``.

    Args:
        text: Complete report text.
        translations: Raw sector name → canonical name.

    Returns:
        ParseResult with records in ascending date order (stable for ties).
    """
    records: list[EconomicDataPoint] = []
    skipped: list[SkippedLine] = []

    lines = text.split("\n")
    for index in range(1, len(lines)):
        line = lines[index].strip()
        if not line:
            continue

        line_number = index + 1
        fields = line.split(FIELD_SEPARATOR)
        if len(fields) < MIN_FIELDS:
            skipped.append(SkippedLine(line_number, line, TOO_FEW_FIELDS))
            continue

        raw_name = fields[0].strip()
        if not raw_name:
            skipped.append(SkippedLine(line_number, line, EMPTY_SECTOR))
            continue

        amount = parse_amount(fields[1])
        if amount is None:
            skipped.append(SkippedLine(line_number, line, INVALID_AMOUNT))
            continue

        date_text = normalize_date_text(fields[3])
        parsed_date = parse_report_date(date_text)
        if parsed_date is None:
            skipped.append(SkippedLine(line_number, line, INVALID_DATE))
            continue

        sector = translations.get(raw_name, raw_name)
        records.append(
            EconomicDataPoint(
                id=f"{sector}-{date_text}",
                sector=sector,
                amount=amount,
                date=parsed_date,
                date_str=date_text,
            )
        )

    records.sort(key=lambda r: r.date)

    duplicates = [rid for rid, count in Counter(r.id for r in records).items() if count > 1]
    if duplicates:
        logger.warning("Found %d duplicate record ids: %s", len(duplicates), duplicates[:5])

    logger.debug("Parsed %d records, skipped %d lines", len(records), len(skipped))
    return ParseResult(records=tuple(records), skipped=tuple(skipped))


def parse_csv(text: str, translations: Mapping[str, str] = SECTOR_TRANSLATIONS) -> list[EconomicDataPoint]:
    """Parse raw report text and return only the records."""
    return list(parse_records(text, translations).records)


class SectorCsvPreprocessor(BasePreprocessor):
    """Preprocessor for sector report files (raw → processed).

    Reads every ``*.csv`` report in data/raw/sectors/ and produces one
    processed DataFrame per file, keyed by file stem.
    """

    CATEGORY = "sectors"

    COLUMNS = ["id", "sector", "amount", "date", "date_str"]

    def __init__(
        self,
        input_dir: Path | None = None,
        output_dir: Path | None = None,
        log_file: Path | None = None,
        translations: Mapping[str, str] = SECTOR_TRANSLATIONS,
    ) -> None:
        """Initialize the sector preprocessor.

        Args:
            input_dir: Directory containing raw reports (default: data/raw/sectors/).
            output_dir: Directory for processed exports (default: data/processed/sectors/).
            log_file: Optional path for file-based logging.
            translations: Raw sector name → canonical name.
        """
        super().__init__(
            input_dir=input_dir or Config.DATA_DIR / "raw" / "sectors",
            output_dir=output_dir or Config.DATA_DIR / "processed" / "sectors",
            log_file=log_file or Config.LOGS_DIR / "preprocessors" / "sector_parser.log",
        )
        self.translations = translations

    def parse_text(self, text: str, source_name: str = "<text>") -> list[EconomicDataPoint]:
        """Parse one report, logging how many lines were dropped."""
        result = parse_records(text, self.translations)
        if result.skipped:
            reasons = Counter(s.reason for s in result.skipped)
            self.logger.warning(
                "Skipped %d malformed lines in %s: %s",
                result.skipped_count,
                source_name,
                dict(reasons),
            )
        self.logger.info("Parsed %d records from %s", len(result.records), source_name)
        return list(result.records)

    def preprocess(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> dict[str, pd.DataFrame]:
        """Parse every raw report in input_dir.

        Args:
            start_date: Optional inclusive start date filter.
            end_date: Optional inclusive end date filter.

        Returns:
            Mapping of file stem to processed DataFrame.
        """
        self.logger.info("Starting sector preprocessing from %s", self.input_dir)

        if not self.input_dir.exists():
            self.logger.warning("Input directory not found: %s", self.input_dir)
            return {}

        report_files = sorted(self.input_dir.glob("*.csv"))
        if not report_files:
            self.logger.warning("No raw sector reports found in %s", self.input_dir)
            return {}

        result = {}
        for report_file in report_files:
            try:
                text = report_file.read_text(encoding=Config.CSV_ENCODING)
            except (OSError, UnicodeDecodeError) as e:
                self.logger.error("Failed to read %s: %s", report_file.name, e)
                continue

            records = self.parse_text(text, report_file.name)
            if start_date:
                records = [r for r in records if r.date >= start_date]
            if end_date:
                records = [r for r in records if r.date <= end_date]

            if not records:
                self.logger.warning("No records left for %s", report_file.name)
                continue

            df = self.to_frame(records)
            self.validate(df)
            result[report_file.stem] = df

        self.logger.info("Preprocessing complete: %d reports processed", len(result))
        return result

    def to_frame(self, records: Iterable[EconomicDataPoint]) -> pd.DataFrame:
        """Build the processed DataFrame from records, preserving their order."""
        rows = [
            {
                "id": r.id,
                "sector": r.sector,
                "amount": r.amount,
                "date": r.date,
                "date_str": r.date_str,
            }
            for r in records
        ]
        df = pd.DataFrame(rows, columns=self.COLUMNS)
        df["amount"] = df["amount"].astype(float)
        df["date"] = pd.to_datetime(df["date"])
        return df

    def validate(self, df: pd.DataFrame) -> bool:
        """Validate that DataFrame conforms to the processed sector schema.

        Checks:
        - Exactly the processed columns
        - sector is a non-empty string
        - amount is numeric and finite
        - date is a datetime column without missing values
        - rows sorted ascending by date

        Raises:
            ValueError: If validation fails with details.
        """
        missing_cols = set(self.COLUMNS) - set(df.columns)
        if missing_cols:
            raise ValueError(f"Missing required columns: {missing_cols}")

        extra_cols = set(df.columns) - set(self.COLUMNS)
        if extra_cols:
            raise ValueError(f"Unexpected columns: {extra_cols}")

        if df["sector"].isna().any() or (df["sector"] == "").any():
            raise ValueError("sector contains empty or null values")

        if not pd.api.types.is_numeric_dtype(df["amount"]):
            raise ValueError("amount column must be numeric")

        if not np.isfinite(df["amount"].to_numpy(dtype=float)).all():
            raise ValueError("amount column contains NaN or infinite values")

        if not pd.api.types.is_datetime64_any_dtype(df["date"]):
            raise ValueError("date column must be datetime")

        if df["date"].isna().any():
            raise ValueError("date column contains missing values")

        if not df["date"].is_monotonic_increasing:
            raise ValueError("Records are not sorted by date")

        return True

    def process_and_export(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        format: str | None = None,
    ) -> dict[str, Path]:
        """Convenience method: preprocess and export all reports.

        Returns:
            Dictionary mapping file stem to exported file path.
        """
        data = self.preprocess(start_date, end_date)

        if not data:
            self.logger.warning("No data to export")
            return {}

        paths = {}
        for identifier, df in data.items():
            file_start = df["date"].min().date()
            file_end = df["date"].max().date()
            paths[identifier] = self.export(
                df, identifier, file_start, file_end, format=format or Config.EXPORT_FORMAT
            )

        return paths
