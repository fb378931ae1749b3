"""
Download published spreadsheet tabs and turn them into sheet dicts.

A spreadsheet tab published as a web page is a plain HTML table. The first
non-empty row holds the column names, every following row becomes one
element keyed by those names:

    {"column_names": ["location", "monday", ...],
     "elements": [{"location": "Main", "monday": "9:00-17:00", ...}, ...]}

Header cells (<th>) such as row numbers or column letters are ignored.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = 30


def _row_cells(row: Any) -> list[str]:
    return [td.get_text(" ", strip=True) for td in row.find_all("td")]


def parse_sheet_html(html: str) -> dict[str, Any]:
    """
    Parse the first table of a published sheet page.

    Raises ValueError if the page has no table or no header row.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table")
    if table is None:
        raise ValueError("No table found in sheet page")

    column_names: list[str] = []
    elements: list[dict[str, str]] = []

    for tr in table.find_all("tr"):
        cells = _row_cells(tr)
        if not any(cells):
            continue

        if not column_names:
            column_names = cells
            continue

        # Short rows are padded, extra cells without a column name are dropped
        padded = cells + [""] * (len(column_names) - len(cells))
        elements.append({name: value for name, value in zip(column_names, padded) if name})

    if not column_names:
        raise ValueError("No header row found in sheet page")

    return {"column_names": column_names, "elements": elements}


def fetch_sheet(url: str, timeout: float = TIMEOUT_SECONDS) -> dict[str, Any]:
    logger.info("Fetching %s", url)
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return parse_sheet_html(resp.text)


def fetch_sheets(
    urls: Mapping[str, str],
    timeout: float = TIMEOUT_SECONDS,
    sleep_seconds: float = 0.2,
) -> dict[str, Any]:
    """
    Fetch several tabs, keyed by sheet name (e.g. "Semester Breakdown").
    """
    sheets: dict[str, Any] = {}
    for i, (name, url) in enumerate(urls.items()):
        if i and sleep_seconds:
            time.sleep(sleep_seconds)
        sheets[name] = fetch_sheet(url, timeout=timeout)
        logger.info("Sheet %r: %d rows", name, len(sheets[name]["elements"]))
    return sheets
