"""
Shared utilities for report ingestion: amount coercion, date parsing,
row padding, banner detection.
"""

import calendar
import logging
import math
import re
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

logger = logging.getLogger(__name__)

# ASCII digits only; matched against the whole cell with fullmatch
_AMOUNT_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
_US_DATE_RE = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{2}|[0-9]{4})")


def parse_amount(val: Any) -> float | None:
    """Coerce a report cell to float, returning None for non-numeric values.

    Thousands separators (commas) are stripped first. The remainder must be
    a whole-string match of an optional minus sign, digits and an optional
    decimal fraction; "12abc", "1e5" and "$100" are all None.
    """
    if val is None:
        return None
    if isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        return None if math.isnan(val) else float(val)
    text = str(val).replace(",", "")
    if not _AMOUNT_RE.fullmatch(text):
        return None
    return float(text)


def parse_report_date(val: Any) -> date | None:
    """Parse an MM/DD/YY or MM/DD/YYYY cell into a calendar date.

    Two-digit years always map to 20YY. Month must be 1-12 and day 1-31;
    the day is range-checked only, so 4/31/24 is accepted and rolled over
    to the next month the way a lenient calendar would (May 1st).
    Returns None for blank or malformed values.
    """
    if val is None:
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    match = _US_DATE_RE.fullmatch(str(val))
    if match is None:
        return None

    mm, dd, yy = match.groups()
    month = int(mm)
    day = int(dd)
    year = 2000 + int(yy) if len(yy) == 2 else int(yy)

    if not 1 <= month <= 12 or not 1 <= day <= 31:
        logger.debug("Date out of range: %s", val)
        return None

    try:
        if day <= calendar.monthrange(year, month)[1]:
            return date(year, month, day)
        # Day beyond the month's length rolls into the next month
        return date.fromordinal(date(year, month, 1).toordinal() + day - 1)
    except (ValueError, OverflowError):
        logger.debug("Date outside the supported calendar: %s", val)
        return None


def pad_row(row: Sequence[Any], width: int) -> list[str]:
    """Return the row as strings (None -> ""), padded with "" to width."""
    cells = ["" if c is None else str(c) for c in row]
    if len(cells) < width:
        cells.extend([""] * (width - len(cells)))
    return cells


def cell(row: Sequence[str], idx: int) -> str:
    """Return the trimmed cell at idx, or "" for short rows."""
    if idx >= len(row) or row[idx] is None:
        return ""
    return str(row[idx]).strip()


def row_contains(row: Sequence[str], needle: str) -> bool:
    """True if any cell contains needle, case-insensitively."""
    target = needle.upper()
    return any(target in (c or "").upper() for c in row)
