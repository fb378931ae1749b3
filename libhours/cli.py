"""
CLI (Command Line Interface).

    libhours week <date> [--regular]
    libhours compact <date> [--regular]
    libhours day <date> <location>
    libhours calendar [--location NAME]
    libhours fetch "Semester Breakdown=<url>" ... [--out sheets.json]

All commands except fetch read the local sheets file (--data, default
libhours/data/sheets.json). Dates can be written as M/D/YYYY or YYYY-MM-DD.
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any

import requests
from rich.console import Console
from rich.table import Table

from libhours.closings import build_calendar_view
from libhours.compact import build_compact_week
from libhours.dates import format_key, parse_date, week_dates
from libhours.fetch import fetch_sheets
from libhours.model import DAY_NAMES
from libhours.sheets import HOLIDAY_SHEET, SEMESTER_SHEET, SheetError, require_sheet
from libhours.storage import load_sheets, save_sheets
from libhours.week import get_single_hours, resolve_week


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _load(args: argparse.Namespace) -> dict[str, Any]:
    """
    Load the sheets and make sure the two fixed sheets are present.
    """
    sheets = load_sheets(args.data)
    require_sheet(sheets, SEMESTER_SHEET)
    require_sheet(sheets, HOLIDAY_SHEET)
    return sheets


def _cmd_week(args: argparse.Namespace, sheets: dict[str, Any]) -> int:
    """
    Print the hours of every location for the week containing the date.
    """
    week = resolve_week(sheets, args.date, include_exceptions=not args.regular)
    days = week_dates(args.date)

    table = Table(title=f"Week of {format_key(days[0])}")
    table.add_column("Location")
    for name, d in zip(DAY_NAMES, days):
        table.add_column(f"{name[:3].title()} {d.month}/{d.day}")

    for location, values in week.items():
        table.add_row(location, *values)

    Console().print(table)
    return 0


def _cmd_compact(args: argparse.Namespace, sheets: dict[str, Any]) -> int:
    groups = build_compact_week(sheets, args.date, include_exceptions=not args.regular)
    _print_json({location: [g.to_dict() for g in gs] for location, gs in groups.items()})
    return 0


def _cmd_day(args: argparse.Namespace, sheets: dict[str, Any]) -> int:
    """
    Print one location's hours on one day.
    """
    location = (args.location or "").strip()
    week = resolve_week(sheets, args.date)
    try:
        hours = get_single_hours(week, args.date, location)
    except KeyError:
        print(f"Unknown location: {location!r}")
        return 1

    print(f"{location} {format_key(parse_date(args.date))}: {hours}")
    return 0


def _cmd_calendar(args: argparse.Namespace, sheets: dict[str, Any]) -> int:
    views = build_calendar_view(sheets)
    if args.location:
        if args.location not in views:
            print(f"Unknown location: {args.location!r}")
            return 1
        views = {args.location: views[args.location]}

    _print_json({location: view.to_dict() for location, view in views.items()})
    return 0


def _cmd_fetch(args: argparse.Namespace) -> int:
    """
    Download the given sheet pages and store them locally.
    """
    urls: dict[str, str] = {}
    for item in args.sheets:
        name, sep, url = item.partition("=")
        if not sep or not name.strip() or not url.strip():
            print(f"Expected NAME=URL, got: {item!r}")
            return 1
        urls[name.strip()] = url.strip()

    try:
        sheets = fetch_sheets(urls, timeout=args.timeout)
    except (requests.RequestException, ValueError) as e:
        print(f"Fetching failed: {e}")
        return 1

    out = save_sheets(sheets, args.out or args.data)
    print(f"Saved {len(sheets)} sheets to: {out}")
    return 0


def _date_arg(text: str) -> str:
    # validate early so argparse prints a usage error
    try:
        parse_date(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    return text


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="libhours", description="Library opening hours")
    parser.add_argument("--data", type=str, default=None, help="Path to sheets.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_week = sub.add_parser("week", help="Show the hours of all locations for one week")
    p_week.add_argument("date", type=_date_arg, help="Any date in the week (e.g. 9/2/2024)")
    p_week.add_argument("--regular", action="store_true", help="Ignore holidays and special hours")

    p_compact = sub.add_parser("compact", help="Show the week grouped by equal hours (JSON)")
    p_compact.add_argument("date", type=_date_arg, help="Any date in the week")
    p_compact.add_argument("--regular", action="store_true", help="Ignore holidays and special hours")

    p_day = sub.add_parser("day", help="Show the hours of one location on one day")
    p_day.add_argument("date", type=_date_arg, help="Date (e.g. 9/2/2024)")
    p_day.add_argument("location", type=str, help="Location name (e.g. Main)")

    p_calendar = sub.add_parser("calendar", help="Show closings and special hours (JSON)")
    p_calendar.add_argument("--location", type=str, default=None, help="Only this location")

    p_fetch = sub.add_parser("fetch", help="Download published sheets")
    p_fetch.add_argument("sheets", nargs="+", help='Sheet name and URL, e.g. "Fall=https://..."')
    p_fetch.add_argument("--out", type=str, default=None, help="Output path (default: --data)")
    p_fetch.add_argument("--timeout", type=float, default=30.0, help="Request timeout in seconds")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args))

    try:
        sheets = _load(args)
    except SheetError as e:
        print(f"{e}. Run 'libhours fetch' first or pass --data.")
        raise SystemExit(1)

    if args.command == "week":
        raise SystemExit(_cmd_week(args, sheets))
    if args.command == "compact":
        raise SystemExit(_cmd_compact(args, sheets))
    if args.command == "day":
        raise SystemExit(_cmd_day(args, sheets))
    if args.command == "calendar":
        raise SystemExit(_cmd_calendar(args, sheets))

    raise SystemExit(2)
