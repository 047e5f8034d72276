"""Tests for configuration module."""
import os
from pathlib import Path

import pytest

from src.common.config import SECTOR_TRANSLATIONS, ChartPeriod
from src.shared.config import Config


def test_config_paths_exist():
    """Test that config paths are properly initialized."""
    assert isinstance(Config.ROOT_DIR, Path)
    assert Config.DATA_DIR == Config.ROOT_DIR / "data"
    assert Config.LOGS_DIR == Config.ROOT_DIR / "logs"


def test_config_default_values():
    """Test default configuration values."""
    assert Config.FOCUS_SECTOR == os.getenv("FOCUS_SECTOR", "Industry")
    assert Config.DEFAULT_PERIOD == os.getenv("DEFAULT_PERIOD", "ALL")
    assert Config.CSV_ENCODING == os.getenv("CSV_ENCODING", "utf-8")


def test_config_validation_passes_for_defaults(monkeypatch):
    monkeypatch.setattr(Config, "DEFAULT_PERIOD", "ALL")
    monkeypatch.setattr(Config, "EXPORT_FORMAT", "csv")
    Config.validate()


def test_config_validation_rejects_unknown_period(monkeypatch):
    monkeypatch.setattr(Config, "DEFAULT_PERIOD", "2Y")
    with pytest.raises(ValueError, match="DEFAULT_PERIOD"):
        Config.validate()


def test_config_validation_rejects_unknown_format(monkeypatch):
    monkeypatch.setattr(Config, "DEFAULT_PERIOD", "ALL")
    monkeypatch.setattr(Config, "EXPORT_FORMAT", "xlsx")
    with pytest.raises(ValueError, match="EXPORT_FORMAT"):
        Config.validate()


def test_default_period_property(monkeypatch):
    monkeypatch.setattr(Config, "DEFAULT_PERIOD", "3Y")
    assert Config().default_period is ChartPeriod.YEAR_3


def test_chart_period_years():
    assert ChartPeriod.ALL.years is None
    assert ChartPeriod.YEAR_1.years == 1
    assert ChartPeriod.YEAR_3.years == 3
    assert ChartPeriod.YEAR_5.years == 5


def test_sector_translations_read_only():
    assert SECTOR_TRANSLATIONS["Промышленность"] == "Industry"
    with pytest.raises(TypeError):
        SECTOR_TRANSLATIONS["New"] = "value"  # type: ignore[index]


def test_dashboard_defaults():
    assert Config.SECONDARY_SECTOR == os.getenv("SECONDARY_SECTOR", "Individuals")
    assert Config.TABLE_ROW_LIMIT == int(os.getenv("TABLE_ROW_LIMIT", "100"))
