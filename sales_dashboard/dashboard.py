"""
Dashboard-ready output functions.

These are the primary entry points for a front end. Each function returns
plain dicts or DataFrames suitable for rendering cards, charts, and tables.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import asdict

import pandas as pd

from .config import ALL
from .kpis import (
    calculate_advanced_kpis,
    calculate_global_kpis,
    executive_trends,
    top_performers,
)
from .models import Operation, PeriodAgg, TrendComparison
from .periods import month_key, sort_periods
from .transforms import (
    aggregate_monthly,
    available_periods,
    executive_operations,
    executive_options,
    filter_aggregates,
    filter_operations_by_month,
    summarise_by_executive,
)

logger = logging.getLogger(__name__)

_OPERATION_COLUMNS = [
    "executive", "date", "invoice_ref", "client",
    "income", "expense", "profit", "commission", "is_quote",
]
_AGG_COLUMNS = [
    "executive", "period", "income", "expense", "profit", "profit_pct",
    "ops", "quotes", "winrate", "active_clients",
]
_TREND_COLUMNS = [
    "executive", "current_period", "previous_period", "current_profit",
    "previous_profit", "profit_change", "profit_pct_change", "ops_change", "trend",
]


def get_sales_overview(
    operations: Sequence[Operation],
    executive: str = ALL,
    month: str = ALL,
) -> dict:
    """Single entry point to populate the overview cards and tables.

    Parameters
    ----------
    operations : Current operation set.
    executive : Executive name or "all".
    month : Month key ("YYYY-M") or "all".

    Returns
    -------
    Dict with structure:
    {
        "executive": "all", "month": "all",
        "months": [...], "executives": [...],
        "summaries": {executive: ExecutiveSummary},
        "global_kpis": GlobalKPIs,
        "advanced_kpis": AdvancedKPIs,
        "top_performers": [TopPerformer],
        "trends": {executive: TrendComparison},
    }
    Trends are only filled when no month is selected and at least two
    months of data exist.
    """
    monthly = aggregate_monthly(operations)
    months = available_periods(monthly)

    in_scope = filter_aggregates(monthly, executive=executive, period=month)
    summaries = summarise_by_executive(in_scope)

    scoped_ops = filter_operations_by_month(operations, month)
    if executive != ALL:
        scoped_ops = [op for op in scoped_ops if op.executive == executive]

    # Growth needs the full month series, so only the executive filter applies
    series_aggs = filter_aggregates(monthly, executive=executive)

    trends = {}
    if month == ALL and len(months) >= 2:
        trends = executive_trends(monthly)

    if not summaries:
        logger.warning("No data for executive '%s' in month '%s'", executive, month)

    return {
        "executive": executive,
        "month": month,
        "months": months,
        "executives": executive_options(operations),
        "summaries": summaries,
        "global_kpis": calculate_global_kpis(scoped_ops, series_aggs, summaries),
        "advanced_kpis": calculate_advanced_kpis(series_aggs, summaries),
        "top_performers": top_performers(summaries),
        "trends": trends,
    }


def get_chart_series(
    monthly: Sequence[PeriodAgg],
    executive: str = ALL,
    month: str = ALL,
) -> pd.DataFrame:
    """Income, profit and ops per month for the revenue/margin charts.

    Returns
    -------
    DataFrame with columns: month, income, profit, ops, profit_pct
    (profit_pct is 0 for a month with no income).
    """
    aggs = filter_aggregates(monthly, executive=executive, period=month)
    columns = ["month", "income", "profit", "ops", "profit_pct"]
    if not aggs:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame({
        "month": [a.period for a in aggs],
        "income": [a.income for a in aggs],
        "profit": [a.profit for a in aggs],
        "ops": [a.ops for a in aggs],
    })
    result = df.groupby("month", sort=False)[["income", "profit", "ops"]].sum()
    result = result.reindex(available_periods(aggs)).rename_axis("month").reset_index()

    income = result["income"]
    result["profit_pct"] = (result["profit"] / income.where(income > 0) * 100).fillna(0.0)
    return result[columns]


def get_executive_detail(
    operations: Sequence[Operation],
    executive: str,
    month: str = ALL,
) -> dict:
    """Drill-down for one executive: operations newest first plus totals."""
    ops = executive_operations(operations, executive, month)
    return {
        "executive": executive,
        "month": month,
        "operations": ops,
        "total_income": sum(op.income or 0.0 for op in ops),
        "total_profit": sum(op.profit or 0.0 for op in ops),
        "months": sort_periods(month_key(op.date) for op in ops if op.date is not None),
    }


# ---------------------------------------------------------------------------
# DataFrame views
# ---------------------------------------------------------------------------

def operations_to_frame(operations: Iterable[Operation]) -> pd.DataFrame:
    rows = [{**asdict(op), "is_quote": op.is_quote} for op in operations]
    if not rows:
        return pd.DataFrame(columns=_OPERATION_COLUMNS)
    return pd.DataFrame(rows)[_OPERATION_COLUMNS]


def aggregates_to_frame(aggregates: Iterable[PeriodAgg]) -> pd.DataFrame:
    rows = [
        {col: getattr(a, col) for col in _AGG_COLUMNS}
        for a in aggregates
    ]
    if not rows:
        return pd.DataFrame(columns=_AGG_COLUMNS)
    return pd.DataFrame(rows)[_AGG_COLUMNS]


def trends_to_frame(trends: Iterable[TrendComparison]) -> pd.DataFrame:
    rows = []
    for t in trends:
        rows.append({
            "executive": t.executive,
            "current_period": t.current.period if t.current else None,
            "previous_period": t.previous.period if t.previous else None,
            "current_profit": t.current.profit if t.current else None,
            "previous_profit": t.previous.profit if t.previous else None,
            "profit_change": t.profit_change,
            "profit_pct_change": t.profit_pct_change,
            "ops_change": t.ops_change,
            "trend": t.trend,
        })
    if not rows:
        return pd.DataFrame(columns=_TREND_COLUMNS)
    return pd.DataFrame(rows)[_TREND_COLUMNS]
