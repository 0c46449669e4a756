"""
Date Proximity Evaluator.

Compares a trip's single departure date with a shipment request's
inclusive date window, at calendar-day granularity.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel

from edimaak.app.core.exceptions import ParseError

DateInput = Union[str, date, datetime, None]

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateProximity(BaseModel):
    """Result of comparing one date against a date range."""
    within_range: bool
    distance_days: int

    class Config:
        frozen = True


def parse_date(value: DateInput, field: str = "date") -> date:
    """
    Parse a ``YYYY-MM-DD`` string (or pass a date through).

    Datetimes are truncated to their calendar date.

    Raises:
        ParseError: for anything that is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if ISO_DATE_RE.match(text):
            try:
                return date.fromisoformat(text)
            except ValueError:
                pass
    raise ParseError(value, field)


def parse_optional_date(value: DateInput, field: str = "date") -> Optional[date]:
    """Like :func:`parse_date` but None and empty strings mean "no bound"."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date(value, field)


def date_proximity(single_date: DateInput, range_start: DateInput, range_end: DateInput) -> DateProximity:
    """
    Where ``single_date`` sits relative to ``[range_start, range_end]``.

    A missing bound makes the range unbounded: every date is within it.
    Outside the range, ``distance_days`` is the day count to the nearer bound.

    Raises:
        ParseError: if any given date is malformed, or the range is inverted
    """
    day = parse_date(single_date, "departure_date")
    start = parse_optional_date(range_start, "earliest_date")
    end = parse_optional_date(range_end, "latest_date")

    if start is None or end is None:
        return DateProximity(within_range=True, distance_days=0)

    if start > end:
        raise ParseError(
            f"{start.isoformat()}..{end.isoformat()}",
            field="date range",
            reason="earliest_date is after latest_date",
        )

    if start <= day <= end:
        return DateProximity(within_range=True, distance_days=0)

    if day < start:
        return DateProximity(within_range=False, distance_days=(start - day).days)
    return DateProximity(within_range=False, distance_days=(day - end).days)
