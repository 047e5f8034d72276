"""Data preprocessors for raw → processed transformation."""

from src.ingestion.preprocessors.base_preprocessor import BasePreprocessor
from src.ingestion.preprocessors.sector_parser import (
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
