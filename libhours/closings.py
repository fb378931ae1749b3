"""
Calendar view of the holiday sheet.

For every location the exception columns are walked in sheet order and
turned into date ranges:

- "closed" entries become closings
- "HH:MM-HH:MM" entries become timed exceptions

An entry is merged into the previous block of the same kind when its date is
exactly one day after that block's end (and, for timed exceptions, when the
hours are equal). The merged block keeps its first reason.

Columns are NOT sorted by date. A column that goes back in time starts a new
block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from functools import reduce
from typing import Mapping, Optional

from libhours.compact import split_hours
from libhours.dates import is_next_day, parse_date
from libhours.model import CLOSED, CalendarView, Closing, TimedException
from libhours.sheets import Row, Sheets, exception_columns, location_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Acc:
    closings: tuple[Closing, ...] = ()
    exceptions: tuple[TimedException, ...] = ()


def _add_closing(acc: _Acc, when: date, reason: str) -> _Acc:
    last: Optional[Closing] = acc.closings[-1] if acc.closings else None
    if last is not None and is_next_day(last.end, when):
        return replace(acc, closings=acc.closings[:-1] + (replace(last, end=when),))
    block = Closing(start=when, end=when, reason=reason)
    return replace(acc, closings=acc.closings + (block,))


def _add_exception(acc: _Acc, when: date, reason: str, value: str) -> _Acc:
    hours = split_hours(value)
    last: Optional[TimedException] = acc.exceptions[-1] if acc.exceptions else None
    if last is not None and is_next_day(last.end, when) and last.hours == hours:
        return replace(acc, exceptions=acc.exceptions[:-1] + (replace(last, end=when),))
    block = TimedException(start=when, end=when, reason=reason, hours=hours)
    return replace(acc, exceptions=acc.exceptions + (block,))


def _location_view(row: Row, columns: list[tuple[str, date]]) -> CalendarView:
    def step(acc: _Acc, column: tuple[str, date]) -> _Acc:
        name, when = column
        value = row.get(name)
        if not value:
            return acc
        value = str(value)
        if value == CLOSED:
            return _add_closing(acc, when, name)
        return _add_exception(acc, when, name, value)

    acc = reduce(step, columns, _Acc())
    return CalendarView(closings=acc.closings, exceptions=acc.exceptions)


def _dated_columns(sheets: Sheets) -> list[tuple[str, date]]:
    out: list[tuple[str, date]] = []
    for name, date_text in exception_columns(sheets):
        try:
            out.append((name, parse_date(date_text)))
        except ValueError:
            logger.warning("Exception column %r has no valid date (%r), ignoring it", name, date_text)
    return out


def build_calendar_view(sheets: Sheets) -> Mapping[str, CalendarView]:
    """
    Closings and timed exceptions for every location in the holiday sheet.
    """
    columns = _dated_columns(sheets)
    views: dict[str, CalendarView] = {}
    for row in location_rows(sheets):
        location = str(row.get("location") or "")
        if not location:
            continue
        views[location] = _location_view(row, columns)
    return views
