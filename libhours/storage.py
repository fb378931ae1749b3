"""
Local copy of the spreadsheet data.

The file data/sheets.json holds every sheet in the shape

    {"<sheet name>": {"column_names": [...], "elements": [...]}, ...}

It is written by `libhours fetch` and read by every other command, so the
hours can be computed without network access.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def default_sheets_path() -> Path:
    """
    Return the default path of sheets.json inside the package.

    A function instead of a constant, so tests can point somewhere else.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "sheets.json"


def load_sheets(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the sheets dict from JSON.

    Returns an empty dict if the file does not exist or is not a JSON object.
    """
    sheets_path = Path(path) if path is not None else default_sheets_path()

    if not sheets_path.exists():
        logger.warning("Sheets file not found: %s", sheets_path)
        return {}

    try:
        data = json.loads(sheets_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", sheets_path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Unexpected content in %s, expected an object", sheets_path)
        return {}
    return data


def save_sheets(sheets: Mapping[str, Any], path: str | Path | None = None) -> Path:
    """
    Save the sheets dict as JSON. Creates parent directories if needed.
    """
    sheets_path = Path(path) if path is not None else default_sheets_path()
    sheets_path.parent.mkdir(parents=True, exist_ok=True)
    sheets_path.write_text(json.dumps(dict(sheets), indent=2, ensure_ascii=False), encoding="utf-8")
    return sheets_path
