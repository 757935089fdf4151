from __future__ import annotations

from datetime import date

from sales_dashboard.periods import (
    day_offset_week,
    month_key,
    period_sort_key,
    sort_periods,
    week_key,
)


def test_month_key_is_unpadded() -> None:
    assert month_key(date(2024, 1, 15)) == "2024-1"
    assert month_key(date(2024, 12, 1)) == "2024-12"


def test_week_key_counts_from_january_first() -> None:
    assert week_key(date(2024, 1, 1)) == "2024-W1"
    assert week_key(date(2024, 1, 7)) == "2024-W1"
    assert week_key(date(2024, 1, 8)) == "2024-W2"
    assert week_key(date(2024, 1, 15)) == "2024-W3"


def test_week_key_does_not_cross_years() -> None:
    # Dec 31 of a leap year is day 366
    assert day_offset_week(date(2024, 12, 31)) == 53
    assert week_key(date(2025, 1, 1)) == "2025-W1"


def test_period_sort_key_orders_chronologically() -> None:
    months = ["2024-10", "2023-12", "2024-2", "2024-1"]
    assert sorted(months, key=period_sort_key) == ["2023-12", "2024-1", "2024-2", "2024-10"]

    weeks = ["2024-W10", "2024-W2", "2023-W52"]
    assert sorted(weeks, key=period_sort_key) == ["2023-W52", "2024-W2", "2024-W10"]


def test_sort_periods_deduplicates() -> None:
    assert sort_periods(["2024-2", "2024-1", "2024-2"]) == ["2024-1", "2024-2"]


def test_unknown_keys_sort_last() -> None:
    assert sort_periods(["bogus", "2024-1"]) == ["2024-1", "bogus"]
