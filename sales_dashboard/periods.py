"""
Period keying for month and week buckets.

Dates are plain calendar dates (datetime.date) with no time or timezone
component, so a key never depends on the machine's UTC offset.

Keys are unpadded ("2024-1", "2024-W3") and therefore do not sort
lexicographically; always order them with period_sort_key.
"""

import math
import re
from collections.abc import Callable, Iterable
from datetime import date

PeriodKeyFunc = Callable[[date], str]

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
_WEEK_KEY_RE = re.compile(r"^(\d{4})-W(\d{1,2})$")


def month_key(d: date) -> str:
    """Return the calendar-month key, e.g. "2024-1"."""
    return f"{d.year}-{d.month}"


def day_offset_week(d: date) -> int:
    """Return the calendar-day-offset week number of a date.

    Week 1 is January 1-7, week 2 January 8-14 and so on, regardless of
    weekday. Not an ISO-8601 week: weeks never span two years and the last
    week of a year may hold only one or two days (week 53).
    """
    day_of_year = (d - date(d.year, 1, 1)).days + 1
    return math.ceil(day_of_year / 7)


def week_key(d: date) -> str:
    """Return the calendar-day-offset week key, e.g. "2024-W3"."""
    return f"{d.year}-W{day_offset_week(d)}"


def period_sort_key(key: str) -> tuple[int, int]:
    """Chronological sort key for a month or week key.

    Unrecognised keys sort after every valid one.
    """
    match = _MONTH_KEY_RE.match(key) or _WEEK_KEY_RE.match(key)
    if match is None:
        return (10_000, 0)
    return int(match.group(1)), int(match.group(2))


def sort_periods(keys: Iterable[str]) -> list[str]:
    """Return the distinct keys in chronological order."""
    return sorted(set(keys), key=period_sort_key)
