"""
Data transforms: roll extracted operations into per-period aggregates and
per-executive summaries, plus the filters the dashboard applies to them.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from .config import ALL
from .models import ExecutiveSummary, MonthlyAgg, Operation, PeriodAgg, WeeklyAgg
from .periods import PeriodKeyFunc, month_key, period_sort_key, sort_periods, week_key

logger = logging.getLogger(__name__)


class _Bucket:
    """Mutable accumulator for one (executive, period) pair."""

    __slots__ = ("income", "expense", "profit", "ops", "quotes", "clients")

    def __init__(self) -> None:
        self.income = 0.0
        self.expense = 0.0
        self.profit = 0.0
        self.ops = 0
        self.quotes = 0
        self.clients: set[str] = set()

    def add(self, op: Operation) -> None:
        if op.is_quote:
            self.quotes += 1
            return
        self.ops += 1
        self.income += op.income or 0.0
        self.expense += op.expense or 0.0
        self.profit += op.profit or 0.0
        if op.client:
            self.clients.add(op.client)


def aggregate_by_period(
    operations: Iterable[Operation],
    key_func: PeriodKeyFunc,
    record_cls: type[PeriodAgg] = PeriodAgg,
) -> list[PeriodAgg]:
    """Group operations by (executive, period) and total each bucket.

    Rules
    -----
    - Operations without a date are left out entirely.
    - Quotes (income, expense and profit all absent) only count towards
      `quotes`; every other operation is closed and counts towards `ops`,
      the money totals (absent amounts as 0) and the client set.
    - profit_pct is None when income is 0; winrate is None with no attempts.

    Returns
    -------
    One record per bucket, ordered by executive then chronologically.
    """
    buckets: dict[tuple[str, str], _Bucket] = {}

    for op in operations:
        if op.date is None:
            continue
        key = (op.executive, key_func(op.date))
        buckets.setdefault(key, _Bucket()).add(op)

    result = []
    for (executive, period), b in buckets.items():
        attempts = b.ops + b.quotes
        result.append(record_cls(
            period=period,
            executive=executive,
            income=b.income,
            expense=b.expense,
            profit=b.profit,
            ops=b.ops,
            quotes=b.quotes,
            clients=frozenset(b.clients),
            profit_pct=(b.profit / b.income) * 100 if b.income != 0 else None,
            winrate=(b.ops / attempts) * 100 if attempts else None,
        ))

    result.sort(key=lambda a: (a.executive, period_sort_key(a.period)))
    logger.debug("Aggregated %d buckets", len(result))
    return result


def aggregate_monthly(operations: Iterable[Operation]) -> list[MonthlyAgg]:
    """Aggregate operations into calendar-month buckets."""
    return aggregate_by_period(operations, month_key, MonthlyAgg)


def aggregate_weekly(operations: Iterable[Operation]) -> list[WeeklyAgg]:
    """Aggregate operations into calendar-day-offset week buckets."""
    return aggregate_by_period(operations, week_key, WeeklyAgg)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def filter_operations_by_month(operations: Sequence[Operation], month: str) -> list[Operation]:
    """Operations dated within `month` ("YYYY-M"); "all" keeps everything."""
    if month == ALL:
        return list(operations)
    return [op for op in operations if op.date is not None and month_key(op.date) == month]


def filter_aggregates(
    aggregates: Sequence[PeriodAgg],
    executive: str = ALL,
    period: str = ALL,
) -> list[PeriodAgg]:
    """Restrict aggregates to one executive and/or one period."""
    result = list(aggregates)
    if period != ALL:
        result = [a for a in result if a.period == period]
    if executive != ALL:
        result = [a for a in result if a.executive == executive]
    return result


# ---------------------------------------------------------------------------
# Executive summaries
# ---------------------------------------------------------------------------

class _ExecutiveTotals:
    """Mutable accumulator for one executive's summary."""

    __slots__ = ("ops", "income", "expense", "profit", "commission", "clients")

    def __init__(self) -> None:
        self.ops = 0
        self.income = 0.0
        self.expense = 0.0
        self.profit = 0.0
        self.commission = 0.0
        self.clients: set[str] = set()

    def to_summary(self, executive: str) -> ExecutiveSummary:
        return ExecutiveSummary(
            executive=executive,
            ops=self.ops,
            income=self.income,
            expense=self.expense,
            profit=self.profit,
            commission=self.commission,
            clients=frozenset(self.clients),
        )


def summarise_by_executive(aggregates: Iterable[PeriodAgg]) -> dict[str, ExecutiveSummary]:
    """Fold period aggregates into one summary per executive.

    Client sets are unioned so a client active in several periods is counted
    once. Commission is not carried by aggregates and stays 0 here; use
    executive_totals for raw-operation totals including commission.
    """
    acc: dict[str, _ExecutiveTotals] = {}
    for agg in aggregates:
        t = acc.setdefault(agg.executive, _ExecutiveTotals())
        t.ops += agg.ops
        t.income += agg.income
        t.expense += agg.expense
        t.profit += agg.profit
        t.clients |= agg.clients

    return {executive: t.to_summary(executive) for executive, t in acc.items()}


def executive_totals(operations: Iterable[Operation]) -> dict[str, ExecutiveSummary]:
    """Totals per executive straight from the operation list.

    Every operation counts, dated or not and quote or not, matching the
    raw-operation view of the report.
    """
    acc: dict[str, _ExecutiveTotals] = {}
    for op in operations:
        t = acc.setdefault(op.executive, _ExecutiveTotals())
        t.ops += 1
        t.income += op.income or 0.0
        t.expense += op.expense or 0.0
        t.profit += op.profit or 0.0
        t.commission += op.commission or 0.0
        if op.client:
            t.clients.add(op.client)

    return {executive: t.to_summary(executive) for executive, t in acc.items()}


# ---------------------------------------------------------------------------
# Dropdown options and drill-down
# ---------------------------------------------------------------------------

def available_periods(aggregates: Iterable[PeriodAgg]) -> list[str]:
    """Distinct period keys in chronological order."""
    return sort_periods(a.period for a in aggregates)


def executive_options(operations: Iterable[Operation]) -> list[str]:
    """Distinct non-blank executive names in order of first appearance."""
    seen: dict[str, None] = {}
    for op in operations:
        if op.executive and op.executive.strip():
            seen.setdefault(op.executive, None)
    return list(seen)


def executive_operations(
    operations: Sequence[Operation],
    executive: str,
    month: str = ALL,
) -> list[Operation]:
    """One executive's operations, newest first, undated ones last."""
    ops = [op for op in filter_operations_by_month(operations, month) if op.executive == executive]
    return sorted(ops, key=lambda op: op.date or date.min, reverse=True)
