"""
Root pytest configuration.

Shared fixtures: a small raw sector report and a factory for building
records directly without going through the parser.
"""

from datetime import date

import pytest

from src.shared.models import EconomicDataPoint


SAMPLE_REPORT = """Наименование;Сумма;Всего;Дата
Industry;1000,00;0;01.01.2020 г.
Agriculture;500,00;0;01.01.2020 г.
Industry;1200,00;0;01.02.2020 г.
"""


@pytest.fixture
def sample_report() -> str:
    """The three-line report used for end-to-end checks."""
    return SAMPLE_REPORT


@pytest.fixture
def make_record():
    """Factory: make_record("Industry", date(2020, 1, 1), 100.0)."""

    def _make(sector: str, day: date, amount: float) -> EconomicDataPoint:
        date_str = day.strftime("%d.%m.%Y")
        return EconomicDataPoint(
            id=f"{sector}-{date_str}",
            sector=sector,
            amount=amount,
            date=day,
            date_str=date_str,
        )

    return _make
