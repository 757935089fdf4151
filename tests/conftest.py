from __future__ import annotations

from datetime import date
from collections.abc import Callable

import pytest

from sales_dashboard.config import DEFAULT_LAYOUT
from sales_dashboard.models import Operation


def _make_row(
    identifier: str = "",
    date: str = "",
    client: str = "",
    income: str = "",
    expense: str = "",
    profit: str = "",
    commission: str = "",
) -> list[str]:
    row = [""] * DEFAULT_LAYOUT.width
    row[DEFAULT_LAYOUT.identifier] = identifier
    row[DEFAULT_LAYOUT.date] = date
    row[DEFAULT_LAYOUT.client] = client
    row[DEFAULT_LAYOUT.income] = income
    row[DEFAULT_LAYOUT.expense] = expense
    row[DEFAULT_LAYOUT.profit] = profit
    row[DEFAULT_LAYOUT.commission] = commission
    return row


def _header_rows(name: str) -> list[list[str]]:
    banner = [""] * DEFAULT_LAYOUT.width
    banner[0] = "Shipment Detail"
    return [_make_row(identifier=name), banner]


def _make_op(
    executive: str = "Ana",
    when: date | None = date(2024, 1, 15),
    client: str | None = "Acme",
    income: float | None = 1000.0,
    expense: float | None = 400.0,
    profit: float | None = 600.0,
    commission: float | None = None,
    invoice_ref: str = "INV001",
) -> Operation:
    return Operation(
        executive=executive,
        date=when,
        invoice_ref=invoice_ref,
        client=client,
        income=income,
        expense=expense,
        profit=profit,
        commission=commission,
    )


@pytest.fixture()
def make_row() -> Callable[..., list[str]]:
    return _make_row


@pytest.fixture()
def header_rows() -> Callable[[str], list[list[str]]]:
    return _header_rows


@pytest.fixture()
def make_op() -> Callable[..., Operation]:
    return _make_op


@pytest.fixture()
def scenario_a_rows() -> list[list[str]]:
    return _header_rows("Ana") + [
        _make_row("INV001", "1/15/24", "Acme", "1,000", "400", "600"),
    ]


@pytest.fixture()
def two_executive_ops() -> list[Operation]:
    return [
        _make_op("Ana", date(2024, 1, 10), "Acme", 1000.0, 400.0, 600.0),
        _make_op("Ana", date(2024, 2, 5), "Beta", 2000.0, 1500.0, 500.0),
        _make_op("Ana", date(2024, 2, 6), "Acme", None, None, None),
        _make_op("Bruno", date(2024, 1, 20), "Acme", 3000.0, 2000.0, 1000.0),
        _make_op("Bruno", date(2024, 2, 21), "Gamma", 500.0, 300.0, 200.0),
        _make_op("Bruno", None, "Delta", 700.0, 200.0, 500.0),
    ]
