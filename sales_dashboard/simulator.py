"""
Simulated report generator for the sales dashboard.

Produces raw rows in the layout of the commercial report export, including
the noise the extractor has to skip (titles, column headings, subtotals).
All values are synthetic — no real commercial data is used.
"""

import numpy as np
import pandas as pd

from .config import DEFAULT_LAYOUT, SECTION_BANNER_KEYWORD, ReportLayout

# ---------------------------------------------------------------------------
# Typical sales parameters (CLP)
# ---------------------------------------------------------------------------
_EXECUTIVES = {
    "Ana Rojas": {"income": 2_400_000, "std": 450_000, "margin": 0.32},
    "Bruno Diaz": {"income": 1_800_000, "std": 380_000, "margin": 0.27},
    "Carla Soto": {"income": 3_100_000, "std": 620_000, "margin": 0.22},
}

_CLIENTS = [
    "Acme Logistics",
    "Andes Export",
    "Frutas del Sur",
    "Minera Norte",
    "Puerto Austral",
    "Vinos Maipo",
    "Retail Central",
    "Agro Pacifico",
]

COMMISSION_RATE = 0.05


def _blank(layout: ReportLayout) -> list[str]:
    return [""] * layout.width


def _money(val: float) -> str:
    return f"{val:,.0f}"


def generate_report_rows(
    executives: dict[str, dict] | None = None,
    start_month: str = "2024-01-01",
    n_months: int = 6,
    ops_per_month: int = 6,
    quote_rate: float = 0.2,
    undated_rate: float = 0.05,
    seed: int = 42,
    layout: ReportLayout = DEFAULT_LAYOUT,
) -> list[list[str]]:
    """Generate a simulated commercial report as raw string rows.

    Each executive block has a name row, a SHIPMENT banner row, a column
    heading row, then invoice rows and a subtotal row. A share of rows are
    quotes (amount cells left blank) and a smaller share have no date.
    """
    executives = executives or _EXECUTIVES
    rng = np.random.default_rng(seed)
    months = pd.date_range(start_month, periods=n_months, freq="MS")

    title = _blank(layout)
    title[0] = "REPORTE DE OPERACIONES COMERCIALES"
    rows = [title]
    invoice_no = 1000

    for name, params in executives.items():
        header = _blank(layout)
        header[layout.identifier] = name
        banner = _blank(layout)
        banner[0] = f"{SECTION_BANNER_KEYWORD} DETAIL"
        headings = _blank(layout)
        headings[layout.identifier] = "Invoice"
        headings[layout.date] = "Date"
        headings[layout.client] = "Customer"
        headings[layout.income] = "Income"
        rows.extend([header, banner, headings])

        block_income = 0.0
        for month in months:
            for _ in range(ops_per_month):
                invoice_no += 1
                row = _blank(layout)
                row[layout.identifier] = f"INV{invoice_no}" if invoice_no % 3 else str(invoice_no)
                row[layout.client] = _CLIENTS[int(rng.integers(len(_CLIENTS)))]

                if rng.random() >= undated_rate:
                    day = int(rng.integers(1, 29))
                    row[layout.date] = f"{month.month}/{day}/{month.year % 100:02d}"

                if rng.random() >= quote_rate:
                    income = max(params["income"] / ops_per_month + rng.normal(0, params["std"] / ops_per_month), 10_000)
                    profit = income * (params["margin"] + rng.normal(0, 0.03))
                    expense = income - profit
                    row[layout.income] = _money(income)
                    row[layout.expense] = _money(expense)
                    row[layout.profit] = _money(profit)
                    row[layout.commission] = _money(profit * COMMISSION_RATE)
                    block_income += round(income)

                rows.append(row)

        subtotal = _blank(layout)
        subtotal[layout.identifier] = "Total"
        subtotal[layout.income] = _money(block_income)
        rows.append(subtotal)

    return rows
