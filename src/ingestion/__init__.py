"""Data ingestion module - raw report parsing and preprocessing."""

from src.ingestion.preprocessors import (
    BasePreprocessor,
    SectorCsvPreprocessor,
    parse_csv,
    parse_records,
)

__all__ = [
    "BasePreprocessor",
    "SectorCsvPreprocessor",
    "parse_csv",
    "parse_records",
]
