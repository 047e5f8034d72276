"""Unit tests for record table search."""

from datetime import date

import pytest

from src.analytics.table_query import list_sectors, search_records


@pytest.fixture
def records(make_record):
    return [
        make_record("Industry", date(2020, 1, 1), 1.0),
        make_record("Agriculture", date(2020, 1, 1), 2.0),
        make_record("Industry", date(2020, 2, 1), 3.0),
        make_record("Individuals", date(2021, 2, 1), 4.0),
    ]


def test_empty_term_returns_all_newest_first(records):
    result = search_records(records)
    assert [r.amount for r in result] == [4.0, 3.0, 1.0, 2.0]


def test_sector_match_is_case_insensitive(records):
    result = search_records(records, "INDU")
    assert [r.sector for r in result] == ["Industry", "Industry"]


def test_date_text_match(records):
    result = search_records(records, "02.2020")
    assert [r.amount for r in result] == [3.0]


def test_sector_filter_is_exact(records):
    result = search_records(records, "", sector="Indi")
    assert result == []

    result = search_records(records, "2020", sector="Industry")
    assert [r.amount for r in result] == [3.0, 1.0]


def test_list_sectors_first_seen_order(records):
    assert list_sectors(records) == ["Industry", "Agriculture", "Individuals"]


def test_limit_caps_newest_rows(records):
    result = search_records(records, limit=2)
    assert [r.amount for r in result] == [4.0, 3.0]


def test_limit_larger_than_matches(records):
    assert len(search_records(records, "Industry", limit=100)) == 2
