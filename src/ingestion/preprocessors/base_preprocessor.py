"""Abstract base class for raw → processed preprocessors.

Processed data contract:
- One row per normalized record
- Calendar dates (no time-of-day component)
- Standardized column names
- Validated data types
- Store in data/processed/{category}/
- File naming: {category}_{identifier}_{start_date}_{end_date}.{format}

Preprocessors read from data/raw/{category}/ and write to data/processed/{category}/.
"""

from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

import pandas as pd

from src.common.config import EXPORT_FORMATS
from src.shared.config import Config
from src.shared.utils import setup_logger


class BasePreprocessor(ABC):
    """Base class for all data preprocessors.

    Subclasses must define:
        CATEGORY (str): data category for output (e.g., "sectors").

    Subclasses must implement:
        preprocess(): transform raw files to the processed schema.
        validate(): ensure data conforms to the processed contract.

    The export() method handles file naming and format selection.
    """

    CATEGORY: str

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path,
        log_file: Path | None = None,
    ) -> None:
        """Initialize the preprocessor.

        Args:
            input_dir: Directory containing raw data.
            output_dir: Directory for processed exports.
            log_file: Optional path for file-based logging.
        """
        self.input_dir = input_dir
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logger = setup_logger(self.__class__.__name__, log_file, Config.LOG_LEVEL)

    @abstractmethod
    def preprocess(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> dict[str, pd.DataFrame]:
        """Transform raw data to the processed schema.

        Args:
            start_date: Start of the processing window (inclusive).
            end_date: End of the processing window (inclusive).

        Returns:
            Mapping of dataset identifier to standardized DataFrame.
        """
        ...

    @abstractmethod
    def validate(self, df: pd.DataFrame) -> bool:
        """Validate that DataFrame conforms to the processed schema.

        Returns:
            True if valid.

        Raises:
            ValueError: If validation fails with details.
        """
        ...

    def export(
        self,
        df: pd.DataFrame,
        identifier: str,
        start_date: date,
        end_date: date,
        format: str = "csv",
    ) -> Path:
        """Export DataFrame to the processed layer.

        File path: {output_dir}/{CATEGORY}_{identifier}_{YYYY-MM-DD}_{YYYY-MM-DD}.{format}

        Args:
            df: DataFrame to export.
            identifier: Dataset identifier (e.g., raw file stem).
            start_date: Start date of the data.
            end_date: End date of the data.
            format: Output format ("csv" or "parquet").

        Returns:
            Path to the written file.

        Raises:
            ValueError: If the DataFrame is empty or format is invalid.
        """
        if df.empty:
            raise ValueError(f"Cannot export empty DataFrame for '{identifier}'")

        if format not in EXPORT_FORMATS:
            raise ValueError(f"Invalid format '{format}'. Must be 'csv' or 'parquet'.")

        start_str = start_date.strftime("%Y-%m-%d")
        end_str = end_date.strftime("%Y-%m-%d")
        parts = [self.CATEGORY] + ([identifier] if identifier else []) + [start_str, end_str]
        filename = f"{'_'.join(parts)}.{format}"
        path = self.output_dir / filename

        if format == "csv":
            df.to_csv(path, index=False, encoding="utf-8")
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")

        self.logger.info("Exported %d records to %s", len(df), path)
        return path
