"""
Value records produced by the extraction, aggregation and KPI stages.

All records are frozen: every stage builds new records from its input and
never mutates the output of an earlier stage.
"""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Operation:
    """One invoice or quote row attributed to an executive.

    Amounts are None when the source cell was not a well-formed number,
    which is distinct from a zero amount.
    """

    executive: str
    date: date | None
    invoice_ref: str
    client: str | None = None
    income: float | None = None
    expense: float | None = None
    profit: float | None = None
    commission: float | None = None

    @property
    def is_quote(self) -> bool:
        """True when income, expense and profit are all absent."""
        return self.income is None and self.expense is None and self.profit is None


@dataclass(frozen=True)
class PeriodAgg:
    """Closed-operation totals for one (executive, period) bucket."""

    period: str
    executive: str
    income: float = 0.0
    expense: float = 0.0
    profit: float = 0.0
    ops: int = 0
    quotes: int = 0
    clients: frozenset[str] = field(default_factory=frozenset)
    profit_pct: float | None = None
    winrate: float | None = None

    @property
    def active_clients(self) -> int:
        return len(self.clients)


@dataclass(frozen=True)
class MonthlyAgg(PeriodAgg):
    """Bucket keyed by calendar month ("YYYY-M")."""


@dataclass(frozen=True)
class WeeklyAgg(PeriodAgg):
    """Bucket keyed by calendar-day-offset week ("YYYY-W<n>")."""


@dataclass(frozen=True)
class ExecutiveSummary:
    executive: str
    ops: int = 0
    income: float = 0.0
    expense: float = 0.0
    profit: float = 0.0
    commission: float = 0.0
    clients: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class TrendComparison:
    """Profit movement of one executive between two periods."""

    executive: str
    current: PeriodAgg | None
    previous: PeriodAgg | None
    profit_change: float | None
    profit_pct_change: float | None
    ops_change: int | None
    trend: str


@dataclass(frozen=True)
class TopPerformer:
    executive: str
    profit: float
    profit_margin: float
    income: float
    ops: int


@dataclass(frozen=True)
class GlobalKPIs:
    total_income: float
    total_profit: float
    total_expenses: float
    total_ops: int
    total_clients: int
    executive_count: int
    avg_profit_margin: float
    avg_deal_size: float
    roi: float
    operational_efficiency: float
    top_client_revenue: float
    client_concentration_risk: float
    executive_concentration: float
    revenue_growth: float | None
    profit_growth: float | None


@dataclass(frozen=True)
class AdvancedKPIs:
    revenue_per_executive: float
    profit_per_executive: float
    ops_per_executive: float
    clients_per_executive: float
    avg_margin_per_deal: float
    deal_success_rate: float | None
    month_over_month_growth: float | None
    quarter_over_quarter_growth: float | None
    executive_concentration: float
    monthly_volatility: float
