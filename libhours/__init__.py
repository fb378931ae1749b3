"""
libhours - opening hours of a set of libraries, computed from a spreadsheet
with semester schedules and holiday/special hours.
"""

from libhours.closings import build_calendar_view
from libhours.compact import build_compact_week, compact, normalize_day, split_hours
from libhours.model import (
    CLOSED,
    DAY_LETTERS,
    DAY_NAMES,
    TBA,
    CalendarView,
    Closing,
    DayGroup,
    Hours,
    Semester,
    TimedException,
)
from libhours.sheets import find_semester, load_semesters
from libhours.week import get_single_hours, resolve_week

__all__ = [
    "CLOSED",
    "DAY_LETTERS",
    "DAY_NAMES",
    "TBA",
    "CalendarView",
    "Closing",
    "DayGroup",
    "Hours",
    "Semester",
    "TimedException",
    "build_calendar_view",
    "build_compact_week",
    "compact",
    "find_semester",
    "get_single_hours",
    "load_semesters",
    "normalize_day",
    "resolve_week",
    "split_hours",
]
