"""
Tests for the calendar view (closings and timed exceptions as date ranges).
"""

import unittest
from datetime import date

from libhours.closings import build_calendar_view
from libhours.model import Closing, Hours, TimedException


def holiday_sheets(columns: list[tuple[str, str]], values: dict[str, dict[str, str]]) -> dict:
    header = {"location": ""}
    header.update({name: when for name, when in columns})
    rows = [dict(location=location, **cells) for location, cells in values.items()]
    return {
        "Holidays and Special Hours": {
            "column_names": ["location"] + [name for name, _ in columns],
            "elements": [header] + rows,
        }
    }


class TestClosings(unittest.TestCase):
    def test_consecutive_closed_days_merge(self) -> None:
        sheets = holiday_sheets(
            [("Thanksgiving", "11/28/2024"), ("Day after", "11/29/2024")],
            {"Main": {"Thanksgiving": "closed", "Day after": "closed"}},
        )
        view = build_calendar_view(sheets)["Main"]
        self.assertEqual(view.closings, (Closing(date(2024, 11, 28), date(2024, 11, 29), "Thanksgiving"),))
        self.assertEqual(view.exceptions, ())

    def test_gap_starts_new_block(self) -> None:
        sheets = holiday_sheets(
            [("Labor Day", "9/2/2024"), ("Thanksgiving", "11/28/2024")],
            {"Main": {"Labor Day": "closed", "Thanksgiving": "closed"}},
        )
        closings = build_calendar_view(sheets)["Main"].closings
        self.assertEqual([c.reason for c in closings], ["Labor Day", "Thanksgiving"])

    def test_columns_are_not_sorted(self) -> None:
        sheets = holiday_sheets(
            [("Day after", "11/29/2024"), ("Thanksgiving", "11/28/2024")],
            {"Main": {"Day after": "closed", "Thanksgiving": "closed"}},
        )
        closings = build_calendar_view(sheets)["Main"].closings
        self.assertEqual(len(closings), 2)

    def test_merge_across_year_end(self) -> None:
        sheets = holiday_sheets(
            [("New Year's Eve", "12/31/2024"), ("New Year", "1/1/2025")],
            {"Main": {"New Year's Eve": "closed", "New Year": "closed"}},
        )
        closings = build_calendar_view(sheets)["Main"].closings
        self.assertEqual(closings[0].start, date(2024, 12, 31))
        self.assertEqual(closings[0].end, date(2025, 1, 1))


class TestTimedExceptions(unittest.TestCase):
    def test_same_hours_merge_and_keep_first_reason(self) -> None:
        sheets = holiday_sheets(
            [("Reading Day", "12/9/2024"), ("Finals", "12/10/2024")],
            {"Main": {"Reading Day": "8:00-23:00", "Finals": "8:00-23:00"}},
        )
        view = build_calendar_view(sheets)["Main"]
        self.assertEqual(
            view.exceptions,
            (TimedException(date(2024, 12, 9), date(2024, 12, 10), "Reading Day", Hours("8:00", "23:00")),),
        )

    def test_different_hours_stay_separate(self) -> None:
        sheets = holiday_sheets(
            [("Reading Day", "12/9/2024"), ("Finals", "12/10/2024")],
            {"Main": {"Reading Day": "8:00-23:00", "Finals": "8:00-20:00"}},
        )
        exceptions = build_calendar_view(sheets)["Main"].exceptions
        self.assertEqual(len(exceptions), 2)
        self.assertEqual(exceptions[1].hours, Hours("8:00", "20:00"))

    def test_kinds_are_tracked_separately(self) -> None:
        # a closing in between does not break a run of timed exceptions
        sheets = holiday_sheets(
            [("A", "12/9/2024"), ("B", "12/20/2024"), ("C", "12/10/2024")],
            {"Main": {"A": "10:00-14:00", "B": "closed", "C": "10:00-14:00"}},
        )
        view = build_calendar_view(sheets)["Main"]
        self.assertEqual(len(view.closings), 1)
        self.assertEqual(len(view.exceptions), 1)
        self.assertEqual(view.exceptions[0].end, date(2024, 12, 10))

    def test_empty_cells_are_skipped(self) -> None:
        sheets = holiday_sheets(
            [("A", "12/9/2024"), ("B", "12/10/2024")],
            {"Main": {"A": "closed"}, "Science": {"B": ""}},
        )
        views = build_calendar_view(sheets)
        self.assertEqual(len(views["Main"].closings), 1)
        self.assertEqual(views["Science"].closings, ())
        self.assertEqual(views["Science"].exceptions, ())

    def test_column_without_date_is_ignored(self) -> None:
        sheets = holiday_sheets(
            [("Someday", ""), ("B", "12/10/2024")],
            {"Main": {"Someday": "closed", "B": "closed"}},
        )
        closings = build_calendar_view(sheets)["Main"].closings
        self.assertEqual([c.reason for c in closings], ["B"])

    def test_to_dict_uses_sheet_dates(self) -> None:
        sheets = holiday_sheets(
            [("Thanksgiving", "11/28/2024"), ("Day after", "11/29/2024")],
            {"Main": {"Thanksgiving": "closed", "Day after": "9:00-13:00"}},
        )
        data = build_calendar_view(sheets)["Main"].to_dict()
        self.assertEqual(
            data,
            {
                "closings": [
                    {"dates": {"start": "11/28/2024", "end": "11/28/2024"}, "reason": "Thanksgiving"},
                ],
                "exceptions": [
                    {
                        "dates": {"start": "11/29/2024", "end": "11/29/2024"},
                        "reason": "Day after",
                        "hours": {"start": "9:00", "end": "13:00"},
                    },
                ],
            },
        )

    def test_same_input_same_output(self) -> None:
        sheets = holiday_sheets(
            [("A", "12/9/2024"), ("B", "12/10/2024")],
            {"Main": {"A": "closed", "B": "10:00-12:00"}},
        )
        self.assertEqual(build_calendar_view(sheets), build_calendar_view(sheets))


if __name__ == "__main__":
    unittest.main()
