"""
Date Proximity Tests.
"""

from datetime import date, datetime

import pytest

from edimaak.app.core.exceptions import ParseError
from edimaak.app.domain.matching.dates import date_proximity, parse_date, parse_optional_date


def test_date_inside_range():
    result = date_proximity("2025-03-10", "2025-03-08", "2025-03-12")
    assert result.within_range is True
    assert result.distance_days == 0


def test_range_bounds_are_inclusive():
    assert date_proximity("2025-03-08", "2025-03-08", "2025-03-12").within_range
    assert date_proximity("2025-03-12", "2025-03-08", "2025-03-12").within_range


def test_distance_to_nearer_bound():
    before = date_proximity("2025-03-05", "2025-03-08", "2025-03-12")
    after = date_proximity("2025-03-15", "2025-03-08", "2025-03-12")
    assert (before.within_range, before.distance_days) == (False, 3)
    assert (after.within_range, after.distance_days) == (False, 3)


def test_distance_crosses_month_and_year_boundaries():
    assert date_proximity("2025-01-02", "2024-12-20", "2024-12-30").distance_days == 3
    assert date_proximity("2024-02-28", "2024-03-01", "2024-03-05").distance_days == 2


def test_missing_bound_means_always_in_range():
    assert date_proximity("2030-01-01", None, "2025-03-12").within_range
    assert date_proximity("2000-01-01", "2025-03-08", None).within_range
    assert date_proximity("2025-03-10", "", "").distance_days == 0


def test_accepts_date_and_datetime_objects():
    result = date_proximity(datetime(2025, 3, 14, 23, 59), date(2025, 3, 8), "2025-03-12")
    assert result.distance_days == 2


@pytest.mark.parametrize("value", ["2025-13-01", "2025-02-30", "10/03/2025", "2025-3-1", "tomorrow", 20250310])
def test_malformed_dates_raise_parse_error(value):
    with pytest.raises(ParseError) as exc_info:
        parse_date(value, "departure_date")
    assert exc_info.value.error_code == "ERR_PARSE_001"
    assert exc_info.value.details["field"] == "departure_date"


def test_missing_departure_date_is_a_parse_error():
    with pytest.raises(ParseError):
        date_proximity(None, "2025-03-08", "2025-03-12")


def test_malformed_bound_is_a_parse_error():
    with pytest.raises(ParseError) as exc_info:
        date_proximity("2025-03-10", "2025-03-08", "12/03/2025")
    assert exc_info.value.details["field"] == "latest_date"


def test_inverted_range_is_rejected():
    with pytest.raises(ParseError) as exc_info:
        date_proximity("2025-03-10", "2025-03-12", "2025-03-08")
    assert exc_info.value.details["field"] == "date range"


def test_parse_optional_date():
    assert parse_optional_date(None) is None
    assert parse_optional_date("  ") is None
    assert parse_optional_date(" 2025-03-10 ") == date(2025, 3, 10)
