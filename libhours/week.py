"""
Opening hours for every location for one Monday..Sunday week.

For each day the value is picked by precedence:

    1. holiday / special hours entry for that exact date
    2. regular hours of the semester that contains the date
    3. "TBA"

The semester is looked up per day, so a week can start in one semester and
end in the next.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from libhours.dates import DateLike, format_key, iso_weekday, parse_date, week_dates
from libhours.model import DAY_NAMES, TBA
from libhours.sheets import (
    Sheets,
    build_exception_table,
    build_schedule_table,
    find_semester,
    load_semesters,
    location_names,
    lookup_exception,
    lookup_schedule,
)

logger = logging.getLogger(__name__)

# location -> 7 raw values (Monday first)
WeekResult = Mapping[str, tuple[str, ...]]


def resolve_week(sheets: Sheets, when: DateLike, include_exceptions: bool = True) -> WeekResult:
    """
    Resolve the week containing `when` for all locations.

    Values are returned as written in the sheets ("closed", "9:00-17:00")
    or "TBA". With include_exceptions=False the holiday sheet is ignored,
    which gives the plain semester schedule.
    """
    days = week_dates(when)
    semesters = load_semesters(sheets)
    schedule = build_schedule_table(sheets, semesters)
    exceptions = build_exception_table(sheets) if include_exceptions else {}

    semester_per_day = [find_semester(semesters, d) for d in days]
    for d, semester in zip(days, semester_per_day):
        if semester is None:
            logger.debug("No semester covers %s", d.isoformat())

    hours: dict[str, tuple[str, ...]] = {}
    for location in location_names(sheets, semesters):
        values: list[str] = []
        for i, d in enumerate(days):
            semester = semester_per_day[i]
            value: Optional[str] = lookup_exception(exceptions, location, format_key(d))
            if value is None and semester is not None:
                value = lookup_schedule(schedule, semester.name, location, DAY_NAMES[i])
            values.append(value if value is not None else TBA)
        hours[location] = tuple(values)

    return hours


def get_single_hours(week: WeekResult, when: DateLike, location: str) -> str:
    """
    Hours of one location on one day of an already resolved week.

    Raises KeyError if the location is not part of the week.
    """
    d: date = parse_date(when)
    return week[location][iso_weekday(d) - 1]
