"""Configuration management for the sector analytics pipeline."""

import os
from pathlib import Path

from dotenv import load_dotenv

from src.common.config import EXPORT_FORMATS, ChartPeriod

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Project paths
    ROOT_DIR = Path(__file__).parent.parent.parent
    DATA_DIR = ROOT_DIR / "data"
    LOGS_DIR = ROOT_DIR / "logs"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Raw file handling
    CSV_ENCODING: str = os.getenv("CSV_ENCODING", "utf-8")

    # Dashboard defaults
    FOCUS_SECTOR: str = os.getenv("FOCUS_SECTOR", "Industry")
    SECONDARY_SECTOR: str = os.getenv("SECONDARY_SECTOR", "Individuals")
    TABLE_ROW_LIMIT: int = int(os.getenv("TABLE_ROW_LIMIT", "100"))
    DEFAULT_PERIOD: str = os.getenv("DEFAULT_PERIOD", ChartPeriod.ALL.value)
    EXPORT_FORMAT: str = os.getenv("EXPORT_FORMAT", "csv")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        valid_periods = {p.value for p in ChartPeriod}
        if cls.DEFAULT_PERIOD not in valid_periods:
            raise ValueError(
                f"DEFAULT_PERIOD must be one of {sorted(valid_periods)}, got '{cls.DEFAULT_PERIOD}'"
            )
        if cls.EXPORT_FORMAT not in EXPORT_FORMATS:
            raise ValueError(
                f"EXPORT_FORMAT must be one of {list(EXPORT_FORMATS)}, got '{cls.EXPORT_FORMAT}'"
            )

    @property
    def default_period(self) -> ChartPeriod:
        """Configured default lookback window."""
        return ChartPeriod(self.DEFAULT_PERIOD)


config = Config()
