"""
Central data model definitions used across the project.

All values are frozen dataclasses or tuples, so a result handed out by one
call can never be changed by another one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from libhours.dates import format_key

# Marker for a day without any known hours
TBA = "TBA"

# Holiday sheet value for a full-day closing
CLOSED = "closed"

# Monday-first, index 0..6
DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
DAY_LETTERS = ("M", "T", "W", "R", "F", "S", "U")


@dataclass(frozen=True)
class Semester:
    """
    One row of the "Semester Breakdown" sheet.
    """

    name: str
    start: date
    end: date

    def contains(self, d: date) -> bool:
        # inclusive on both ends
        return self.start <= d <= self.end


@dataclass(frozen=True)
class Hours:
    """
    Opening and closing time, kept as the raw text from the sheet.

    end is None when the source value had no "-" separator.
    """

    start: str
    end: Optional[str]

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"start": self.start, "end": self.end}


DayHours = Union[Hours, str]


def _hours_to_json(hours: DayHours) -> object:
    return hours.to_dict() if isinstance(hours, Hours) else hours


@dataclass(frozen=True)
class DayGroup:
    """
    A run of adjacent days sharing the same hours, e.g. M-F 9:00-17:00.
    """

    hours: DayHours
    days: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        return {"hours": _hours_to_json(self.hours), "days": list(self.days)}


@dataclass(frozen=True)
class Closing:
    """
    One or more consecutive days on which a location is closed.
    """

    start: date
    end: date
    reason: str

    def to_dict(self) -> dict[str, object]:
        return {
            "dates": {"start": format_key(self.start), "end": format_key(self.end)},
            "reason": self.reason,
        }


@dataclass(frozen=True)
class TimedException:
    """
    One or more consecutive days with the same special opening hours.
    """

    start: date
    end: date
    reason: str
    hours: Hours

    def to_dict(self) -> dict[str, object]:
        return {
            "dates": {"start": format_key(self.start), "end": format_key(self.end)},
            "reason": self.reason,
            "hours": self.hours.to_dict(),
        }


@dataclass(frozen=True)
class CalendarView:
    closings: tuple[Closing, ...]
    exceptions: tuple[TimedException, ...]

    def to_dict(self) -> dict[str, list[dict[str, object]]]:
        return {
            "closings": [c.to_dict() for c in self.closings],
            "exceptions": [e.to_dict() for e in self.exceptions],
        }
