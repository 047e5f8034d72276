"""Unit tests for date aggregation (wide table)."""

from datetime import date

import pandas as pd
import pytest

from src.analytics.aggregation import aggregate_by_date, display_label, to_wide_frame
from src.ingestion.preprocessors.sector_parser import parse_csv


def test_end_to_end_example(sample_report):
    rows = aggregate_by_date(parse_csv(sample_report))

    assert [row.date for row in rows] == ["2020-01-01", "2020-02-01"]
    assert rows[0].values == {"Industry": 1000.0, "Agriculture": 500.0}
    assert rows[1].values == {"Industry": 1200.0}


def test_display_label():
    assert display_label(date(2020, 1, 1)) == "Jan 2020"
    assert display_label(date(2023, 9, 30)) == "Sep 2023"
    assert display_label(date(2021, 12, 1)) == "Dec 2021"


def test_rows_sorted_by_day_key(make_record):
    records = [
        make_record("A", date(2021, 3, 1), 1.0),
        make_record("A", date(2020, 12, 1), 2.0),
        make_record("B", date(2021, 1, 1), 3.0),
    ]
    rows = aggregate_by_date(records)
    assert [row.date for row in rows] == ["2020-12-01", "2021-01-01", "2021-03-01"]


def test_last_record_wins_per_day_and_sector(make_record):
    records = [
        make_record("A", date(2020, 1, 1), 1.0),
        make_record("B", date(2020, 1, 1), 5.0),
        make_record("A", date(2020, 1, 1), 2.0),
    ]
    (row,) = aggregate_by_date(records)
    assert row.values == {"A": 2.0, "B": 5.0}


def test_empty_input():
    assert aggregate_by_date([]) == []


def test_row_to_dict(make_record):
    (row,) = aggregate_by_date([make_record("A", date(2020, 1, 1), 7.0)])
    assert row.to_dict() == {"date": "2020-01-01", "displayDate": "Jan 2020", "A": 7.0}


def test_input_records_untouched(sample_report):
    records = parse_csv(sample_report)
    snapshot = list(records)
    aggregate_by_date(records)
    assert records == snapshot


def test_to_wide_frame(sample_report):
    df = to_wide_frame(aggregate_by_date(parse_csv(sample_report)))

    assert list(df.index.names) == ["date", "display_date"]
    assert list(df.index.get_level_values("date")) == ["2020-01-01", "2020-02-01"]
    assert list(df.index.get_level_values("display_date")) == ["Jan 2020", "Feb 2020"]
    assert list(df.columns) == ["Industry", "Agriculture"]

    february = df.xs("2020-02-01", level="date")
    assert february["Industry"].iloc[0] == 1200.0
    assert pd.isna(february["Agriculture"].iloc[0])


def test_to_wide_frame_empty():
    df = to_wide_frame([])
    assert df.empty
    assert list(df.columns) == []


class TestSectorsNamedLikeFixedFields:
    """Sector names are free text; "date"-like names must not clobber the day key."""

    @pytest.fixture
    def rows(self, make_record):
        return aggregate_by_date(
            [
                make_record("date", date(2020, 1, 1), 5.0),
                make_record("display_date", date(2020, 1, 1), 6.0),
                make_record("displayDate", date(2020, 1, 1), 7.0),
                make_record("A", date(2020, 1, 1), 1.0),
            ]
        )

    def test_values_keep_every_sector(self, rows):
        (row,) = rows
        assert row.date == "2020-01-01"
        assert row.values == {"date": 5.0, "display_date": 6.0, "displayDate": 7.0, "A": 1.0}

    def test_to_dict_keeps_day_key_and_label(self, rows):
        flat = rows[0].to_dict()
        assert flat["date"] == "2020-01-01"
        assert flat["displayDate"] == "Jan 2020"
        assert flat["A"] == 1.0
        assert flat["display_date"] == 6.0

    def test_wide_frame_keeps_sector_columns(self, rows):
        df = to_wide_frame(rows)

        assert list(df.index.get_level_values("date")) == ["2020-01-01"]
        assert list(df.columns) == ["date", "display_date", "displayDate", "A"]
        assert df["date"].iloc[0] == 5.0
        assert df["display_date"].iloc[0] == 6.0
