"""
Short form of a week: adjacent days with equal hours are grouped.

    M T W R F  9:00-17:00
    S U        TBA

Only neighbours are merged. Monday and Wednesday with equal hours stay in
separate groups when Tuesday differs.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from libhours.dates import DateLike
from libhours.model import DAY_LETTERS, TBA, DayGroup, DayHours, Hours
from libhours.sheets import Sheets
from libhours.week import resolve_week


def split_hours(value: str) -> Hours:
    """
    Split "HH:MM-HH:MM" into start and end.

    No validation: a value without "-" becomes Hours(value, None).
    """
    parts = value.split("-")
    return Hours(start=parts[0], end=parts[1] if len(parts) > 1 else None)


def normalize_day(value: str) -> DayHours:
    if value == TBA:
        return TBA
    return split_hours(value)


def compact(week: Iterable[DayHours]) -> tuple[DayGroup, ...]:
    """
    Group a Monday..Sunday sequence of day values into runs.
    """
    groups: list[DayGroup] = []
    for letter, hours in zip(DAY_LETTERS, week):
        if groups and groups[-1].hours == hours:
            last = groups.pop()
            groups.append(DayGroup(hours=last.hours, days=last.days + (letter,)))
        else:
            groups.append(DayGroup(hours=hours, days=(letter,)))
    return tuple(groups)


def build_compact_week(
    sheets: Sheets,
    when: DateLike,
    include_exceptions: bool = True,
) -> Mapping[str, tuple[DayGroup, ...]]:
    week = resolve_week(sheets, when, include_exceptions=include_exceptions)
    return {
        location: compact(normalize_day(v) for v in values)
        for location, values in week.items()
    }
