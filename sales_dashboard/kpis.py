"""
KPI computation functions — pure functions with no side effects.

Provides global and advanced KPI snapshots, monthly revenue series with
growth and volatility, executive trend classification and top performers.
Every function recomputes from its inputs; nothing is cached.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

import numpy as np
import pandas as pd

from .config import QUARTER_MONTHS, STABLE_TREND_BAND_PCT, UNNAMED_EXECUTIVE
from .models import (
    AdvancedKPIs,
    ExecutiveSummary,
    GlobalKPIs,
    Operation,
    PeriodAgg,
    TopPerformer,
    TrendComparison,
)
from .periods import period_sort_key, sort_periods

logger = logging.getLogger(__name__)

LATEST = "latest"
PREVIOUS = "previous"


def calc_change(current: float, previous: float) -> tuple[float, float | None]:
    """Return (absolute_change, pct_change).

    pct_change is relative to |previous| and None if previous == 0.
    """
    absolute = current - previous
    if previous == 0:
        return absolute, None
    return absolute, (absolute / abs(previous)) * 100


def classify_trend(pct_change: float | None, band_pct: float = STABLE_TREND_BAND_PCT) -> str:
    """Return 'new', 'stable', 'up' or 'down' for a profit % change.

    Logic
    -----
    - None (no prior period, or prior profit was 0) -> 'new'
    - |pct_change| < band_pct                       -> 'stable'
    - pct_change > 0                                -> 'up'
    - otherwise                                     -> 'down'
    """
    if pct_change is None:
        return "new"
    if abs(pct_change) < band_pct:
        return "stable"
    if pct_change > 0:
        return "up"
    return "down"


# ---------------------------------------------------------------------------
# Monthly series
# ---------------------------------------------------------------------------

def monthly_series(monthly: Sequence[PeriodAgg], field: str = "income") -> pd.Series:
    """Sum `field` across executives per month, in chronological order."""
    if not monthly:
        return pd.Series(dtype=float)

    df = pd.DataFrame({
        "month": [m.period for m in monthly],
        field: [float(getattr(m, field)) for m in monthly],
    })
    series = df.groupby("month")[field].sum()
    return series.reindex(sort_periods(series.index))


def period_growth(series: pd.Series) -> float | None:
    """Percent change of the last value over the one before it.

    None with fewer than two points or a non-positive prior value.
    """
    if len(series) < 2:
        return None
    current = float(series.iloc[-1])
    previous = float(series.iloc[-2])
    if previous <= 0:
        return None
    return ((current - previous) / previous) * 100


def quarter_growth(series: pd.Series, months: int = QUARTER_MONTHS) -> float | None:
    """Percent change of the last `months` total over the `months` before.

    Needs at least two full windows of data; None otherwise or when the
    earlier window totals zero or less.
    """
    if len(series) < 2 * months:
        return None
    last = float(series.iloc[-months:].sum())
    prior = float(series.iloc[-2 * months:-months].sum())
    if prior <= 0:
        return None
    return ((last - prior) / prior) * 100


def calculate_volatility(values: Iterable[float]) -> float:
    """Coefficient of variation (population std / mean) in percent.

    0 for an empty series or a non-positive mean.
    """
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    mean = arr.mean()
    if mean <= 0:
        return 0.0
    return float(arr.std() / mean * 100)


# ---------------------------------------------------------------------------
# Concentration
# ---------------------------------------------------------------------------

def client_revenues(operations: Iterable[Operation]) -> dict[str, float]:
    """Income per client across all executives, from the raw operations."""
    revenues: dict[str, float] = {}
    for op in operations:
        if op.client and op.income:
            revenues[op.client] = revenues.get(op.client, 0.0) + op.income
    return revenues


def _share_pct(part: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return min(max(part / total * 100, 0.0), 100.0)


def executive_concentration(summaries: Mapping[str, ExecutiveSummary]) -> float:
    """Share of total income billed by the top executive, in percent."""
    total = sum(s.income for s in summaries.values())
    top = max((s.income for s in summaries.values()), default=0.0)
    return _share_pct(top, total)


# ---------------------------------------------------------------------------
# KPI snapshots
# ---------------------------------------------------------------------------

def calculate_global_kpis(
    operations: Sequence[Operation],
    monthly: Sequence[PeriodAgg],
    summaries: Mapping[str, ExecutiveSummary],
) -> GlobalKPIs:
    """Headline KPIs for the executives in scope.

    Parameters
    ----------
    operations : Raw operations in scope, used for client concentration.
    monthly : Monthly aggregates, used for the growth series.
    summaries : Per-executive summary map (see transforms.summarise_by_executive).

    Returns
    -------
    GlobalKPIs. Ratios fall back to 0 on a zero denominator; growth
    figures are None when there is no positive prior month.
    """
    values = list(summaries.values())
    total_income = sum(s.income for s in values)
    total_profit = sum(s.profit for s in values)
    total_expenses = sum(s.expense for s in values)
    total_ops = sum(s.ops for s in values)

    all_clients: set[str] = set()
    for s in values:
        all_clients |= s.clients

    revenues = client_revenues(operations)
    top_client_revenue = max(revenues.values(), default=0.0)

    kpis = GlobalKPIs(
        total_income=total_income,
        total_profit=total_profit,
        total_expenses=total_expenses,
        total_ops=total_ops,
        total_clients=len(all_clients),
        executive_count=len(values),
        avg_profit_margin=(total_profit / total_income) * 100 if total_income > 0 else 0.0,
        avg_deal_size=total_income / total_ops if total_ops > 0 else 0.0,
        roi=(total_profit / total_expenses) * 100 if total_expenses > 0 else 0.0,
        operational_efficiency=total_profit / total_expenses if total_expenses > 0 else 0.0,
        top_client_revenue=top_client_revenue,
        client_concentration_risk=_share_pct(top_client_revenue, total_income),
        executive_concentration=executive_concentration(summaries),
        revenue_growth=period_growth(monthly_series(monthly, "income")),
        profit_growth=period_growth(monthly_series(monthly, "profit")),
    )
    logger.debug("Global KPIs over %d executives: income=%.2f", len(values), total_income)
    return kpis


def calculate_advanced_kpis(
    monthly: Sequence[PeriodAgg],
    summaries: Mapping[str, ExecutiveSummary],
) -> AdvancedKPIs:
    """Efficiency, growth, risk and volatility KPIs.

    Per-executive ratios are 0 when no executive is in scope.
    deal_success_rate is the winrate over all aggregates passed in.
    """
    values = list(summaries.values())
    n = len(values)
    total_income = sum(s.income for s in values)
    total_profit = sum(s.profit for s in values)
    total_ops = sum(s.ops for s in values)

    all_clients: set[str] = set()
    for s in values:
        all_clients |= s.clients

    closed = sum(m.ops for m in monthly)
    attempts = closed + sum(m.quotes for m in monthly)

    revenue = monthly_series(monthly, "income")

    return AdvancedKPIs(
        revenue_per_executive=total_income / n if n else 0.0,
        profit_per_executive=total_profit / n if n else 0.0,
        ops_per_executive=total_ops / n if n else 0.0,
        clients_per_executive=len(all_clients) / n if n else 0.0,
        avg_margin_per_deal=(total_profit / total_income) * 100 if total_income > 0 else 0.0,
        deal_success_rate=(closed / attempts) * 100 if attempts else None,
        month_over_month_growth=period_growth(revenue),
        quarter_over_quarter_growth=quarter_growth(revenue),
        executive_concentration=executive_concentration(summaries),
        monthly_volatility=calculate_volatility(revenue.tolist()),
    )


# ---------------------------------------------------------------------------
# Trends
# ---------------------------------------------------------------------------

def _compare(executive: str, current: PeriodAgg | None, previous: PeriodAgg | None) -> TrendComparison:
    if current is None or previous is None:
        profit_change = None
        ops_change = None
    else:
        profit_change = current.profit - previous.profit
        ops_change = current.ops - previous.ops

    pct_change = None
    if previous is not None:
        current_profit = current.profit if current is not None else 0.0
        _, pct_change = calc_change(current_profit, previous.profit)

    return TrendComparison(
        executive=executive,
        current=current,
        previous=previous,
        profit_change=profit_change,
        profit_pct_change=pct_change,
        ops_change=ops_change,
        trend=classify_trend(pct_change),
    )


def executive_trends(aggregates: Sequence[PeriodAgg]) -> dict[str, TrendComparison]:
    """Compare each executive's two most recent periods.

    Works for monthly or weekly aggregates. An executive with a single
    period is reported as 'new' with no changes.
    """
    by_exec: dict[str, list[PeriodAgg]] = {}
    for agg in aggregates:
        by_exec.setdefault(agg.executive, []).append(agg)

    trends = {}
    for executive, aggs in by_exec.items():
        aggs = sorted(aggs, key=lambda a: period_sort_key(a.period))
        previous = aggs[-2] if len(aggs) >= 2 else None
        trends[executive] = _compare(executive, aggs[-1], previous)
    return trends


def resolve_periods(
    periods: Sequence[str],
    current: str = LATEST,
    previous: str = PREVIOUS,
) -> tuple[str, str]:
    """Resolve the 'latest'/'previous' placeholders against available periods.

    Returns ("", "") when no periods exist; previous is "" when the current
    period has no predecessor.
    """
    if not periods:
        return "", ""
    curr = periods[-1] if current == LATEST else current
    if previous != PREVIOUS:
        return curr, previous
    idx = periods.index(curr) if curr in periods else -1
    return curr, periods[idx - 1] if idx > 0 else ""


def compare_periods(
    aggregates: Sequence[PeriodAgg],
    current: str = LATEST,
    previous: str = PREVIOUS,
) -> list[TrendComparison]:
    """Per-executive comparison between two chosen periods.

    Executives with data in neither period are omitted. Returns an empty
    list if either period cannot be resolved.
    """
    periods = sort_periods(a.period for a in aggregates)
    curr, prev = resolve_periods(periods, current, previous)
    if not curr or not prev:
        return []

    lookup = {(a.executive, a.period): a for a in aggregates}
    executives = list(dict.fromkeys(a.executive for a in aggregates))

    result = []
    for executive in executives:
        cur_agg = lookup.get((executive, curr))
        prev_agg = lookup.get((executive, prev))
        if cur_agg is None and prev_agg is None:
            continue
        result.append(_compare(executive, cur_agg, prev_agg))
    return result


def top_performers(summaries: Mapping[str, ExecutiveSummary]) -> list[TopPerformer]:
    """Executives ranked by profit, highest first."""
    performers = [
        TopPerformer(
            executive=s.executive,
            profit=s.profit,
            profit_margin=(s.profit / s.income) * 100 if s.income > 0 else 0.0,
            income=s.income,
            ops=s.ops,
        )
        for s in summaries.values()
        if s.executive and s.executive != UNNAMED_EXECUTIVE
    ]
    performers.sort(key=lambda p: p.profit, reverse=True)
    return performers
