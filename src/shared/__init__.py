"""Shared utilities and configuration."""

from src.shared.config import Config
from src.shared.utils import setup_logger, utc_today

__all__ = ["Config", "setup_logger", "utc_today"]
