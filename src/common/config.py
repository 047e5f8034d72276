# Global static configuration (sector catalogue, chart periods)

from enum import Enum
from types import MappingProxyType

# Raw sector names as published in the source report → canonical English names
SECTOR_TRANSLATIONS = MappingProxyType(
    {
        "Промышленность": "Industry",
        "Сельское хозяйство": "Agriculture",
        "Строительство": "Construction",
        "Торговля и общественное питание": "Trade",
        "Транспорт и коммуникации": "Transport",
        "Материально-техническое снабжение и сбыт": "Supply and Sales",
        "Жилищно-коммунальное обслуживание": "Housing and Utilities",
        "Физические лица": "Individuals",
        "Прочие": "Other",
        "Sanoat": "Industry",
        "Qishloq xo'jaligi": "Agriculture",
        "Qurilish": "Construction",
        "Savdo va umumiy ovqatlanish": "Trade",
        "Transport va kommunikatsiya": "Transport",
        "Jismoniy shaxslar": "Individuals",
        "Boshqalar": "Other",
    }
)

# Unit marker appended to dates in the source report ("01.01.2018 г.")
DATE_UNIT_MARKER = " г."

FIELD_SEPARATOR = ";"

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


class ChartPeriod(str, Enum):
    """Lookback windows offered for period statistics."""

    ALL = "ALL"
    YEAR_1 = "1Y"
    YEAR_3 = "3Y"
    YEAR_5 = "5Y"

    @property
    def years(self) -> int | None:
        if self is ChartPeriod.ALL:
            return None
        return int(self.value[:-1])


EXPORT_FORMATS = ("csv", "parquet")
