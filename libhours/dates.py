"""
Date helpers shared by the week resolver and the calendar view.

The spreadsheet stores dates as text like "9/1/2024". Exception lookups are
done by comparing that text, so format_key() must produce exactly the same
M/D/YYYY form (no zero padding).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]

# Accepted text formats, tried in order
_DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", "%m/%d/%y")


def parse_date(value: DateLike) -> date:
    """
    Convert a date, datetime or date string into a plain date.

    Time-of-day is dropped, all comparisons in this package are per day.
    Raises ValueError if the value cannot be understood.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    # ISO strings with a time part, e.g. "2024-09-02T10:00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}") from None


def format_key(d: date) -> str:
    """
    Format a date the way the holiday sheet writes it: M/D/YYYY.
    """
    return f"{d.month}/{d.day}/{d.year}"


def iso_weekday(d: date) -> int:
    # 1 = Monday .. 7 = Sunday
    return d.isoweekday()


def start_of_week(d: date) -> date:
    """
    Monday of the ISO week containing d.
    """
    return d - timedelta(days=iso_weekday(d) - 1)


def week_dates(value: DateLike) -> tuple[date, ...]:
    """
    All seven dates (Monday..Sunday) of the week containing value.
    """
    monday = start_of_week(parse_date(value))
    return tuple(monday + timedelta(days=i) for i in range(7))


def is_next_day(previous: date, current: date) -> bool:
    return current == previous + timedelta(days=1)
