"""
Lookup tables built from the raw spreadsheet data.

The raw data is a dict keyed by sheet name. Every sheet looks like

    {"column_names": ["location", ...], "elements": [{...}, {...}]}

Three kinds of sheets are used:
- "Semester Breakdown": one row per semester (semestername, start, end)
- one sheet per semester name: one row per location (location, monday..sunday)
- "Holidays and Special Hours": first row holds the date of every exception
  column, every following row holds one location's values for those dates
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from libhours.dates import parse_date
from libhours.model import DAY_NAMES, Semester

logger = logging.getLogger(__name__)

SEMESTER_SHEET = "Semester Breakdown"
HOLIDAY_SHEET = "Holidays and Special Hours"

Sheets = Mapping[str, Any]
Row = Mapping[str, Any]

# semester name -> location -> day name -> hours text
ScheduleTable = Mapping[str, Mapping[str, Mapping[str, str]]]

# location -> M/D/YYYY key -> override text
ExceptionTable = Mapping[str, Mapping[str, str]]


class SheetError(ValueError):
    """Raised when a required sheet is missing from the data."""


def _cell(row: Row, key: str) -> str:
    value = row.get(key)
    return "" if value is None else str(value)


def _rows(sheet: Any) -> list[Row]:
    if isinstance(sheet, Mapping):
        rows = sheet.get("elements", [])
    else:
        rows = sheet
    return [r for r in (rows or []) if isinstance(r, Mapping)]


def require_sheet(sheets: Sheets, name: str) -> Any:
    if name not in sheets:
        raise SheetError(f"Missing sheet: {name!r}")
    return sheets[name]


# ---------------------------------------------------------------------------
# Semesters
# ---------------------------------------------------------------------------


def load_semesters(sheets: Sheets) -> tuple[Semester, ...]:
    """
    Read the semester list in sheet order.

    Rows with unreadable dates are skipped (and logged) instead of failing
    the whole lookup.
    """
    out: list[Semester] = []
    for row in _rows(sheets.get(SEMESTER_SHEET)):
        name = _cell(row, "semestername").strip()
        if not name:
            continue
        try:
            start = parse_date(_cell(row, "start"))
            end = parse_date(_cell(row, "end"))
        except ValueError:
            logger.warning("Skipping semester %r with invalid dates", name)
            continue
        out.append(Semester(name=name, start=start, end=end))
    return tuple(out)


def find_semester(semesters: Iterable[Semester], d: date) -> Optional[Semester]:
    """
    Return the first semester (in list order) whose range contains d.

    Overlapping semesters are allowed, the earlier one wins.
    """
    for semester in semesters:
        if semester.contains(d):
            return semester
    return None


# ---------------------------------------------------------------------------
# Regular hours
# ---------------------------------------------------------------------------


def build_schedule_table(sheets: Sheets, semesters: Iterable[Semester]) -> ScheduleTable:
    table: dict[str, dict[str, dict[str, str]]] = {}
    for semester in semesters:
        by_location = table.setdefault(semester.name, {})
        for row in _rows(sheets.get(semester.name)):
            location = _cell(row, "location")
            if not location:
                continue
            by_location[location] = {
                day: _cell(row, day) for day in DAY_NAMES if _cell(row, day)
            }
    return table


def lookup_schedule(
    table: ScheduleTable,
    semester_name: str,
    location: str,
    day_name: str,
) -> Optional[str]:
    return table.get(semester_name, {}).get(location, {}).get(day_name) or None


# ---------------------------------------------------------------------------
# Holidays and special hours
# ---------------------------------------------------------------------------


def exception_columns(sheets: Sheets) -> list[tuple[str, str]]:
    """
    Return (column name, date text) for every exception column, in sheet order.

    The first column ("location") is only there for people editing the sheet.
    """
    sheet = sheets.get(HOLIDAY_SHEET)
    rows = _rows(sheet)
    if not rows:
        return []

    header = rows[0]
    if isinstance(sheet, Mapping) and sheet.get("column_names"):
        names = [str(n) for n in sheet["column_names"][1:]]
    else:
        names = [str(n) for n in header if n != "location"]

    return [(name, _cell(header, name)) for name in names]


def location_rows(sheets: Sheets) -> list[Row]:
    # Skip the header row that only carries dates
    return _rows(sheets.get(HOLIDAY_SHEET))[1:]


def build_exception_table(sheets: Sheets) -> ExceptionTable:
    """
    Map every location to {date text: override value}.

    Keys are the date texts exactly as written in the header row.
    """
    columns = exception_columns(sheets)
    table: dict[str, dict[str, str]] = {}
    for row in location_rows(sheets):
        location = _cell(row, "location")
        if not location:
            continue
        overrides = table.setdefault(location, {})
        for name, date_text in columns:
            value = _cell(row, name)
            if not value:
                continue
            if not date_text:
                logger.warning("Exception column %r has no date, ignoring it", name)
                continue
            overrides[date_text] = value
    return table


def lookup_exception(table: ExceptionTable, location: str, date_key: str) -> Optional[str]:
    return table.get(location, {}).get(date_key) or None


def location_names(sheets: Sheets, semesters: Iterable[Semester] = ()) -> list[str]:
    """
    All location names: holiday sheet rows first, then locations that only
    appear in semester sheets (first seen order).
    """
    names: list[str] = []
    seen: set[str] = set()

    def add(name: str) -> None:
        if name not in seen:
            seen.add(name)
            names.append(name)

    for row in location_rows(sheets):
        location = _cell(row, "location")
        if location:
            add(location)
    for semester in semesters:
        for row in _rows(sheets.get(semester.name)):
            location = _cell(row, "location")
            if location:
                add(location)
    return names
