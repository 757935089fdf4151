"""
Sales Dashboard — End-to-end analytics pipeline.

Runs the full data pipeline from a report export to dashboard-ready outputs
and prints smoke-test summaries.

Usage:
    python main.py [report.csv]
    python main.py --demo
"""

import argparse
import logging
import sys

from sales_dashboard.config import SALES_REPORT_FILE
from sales_dashboard.dashboard import (
    aggregates_to_frame,
    get_chart_series,
    get_sales_overview,
    trends_to_frame,
)
from sales_dashboard.exceptions import SalesReportError
from sales_dashboard.formatters import format_money, format_pct
from sales_dashboard.kpis import compare_periods, executive_trends
from sales_dashboard.loaders import extract_operations
from sales_dashboard.simulator import generate_report_rows
from sales_dashboard.store import OperationStore
from sales_dashboard.transforms import aggregate_monthly, aggregate_weekly

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the full analytics pipeline and print smoke-test outputs."""
    parser = argparse.ArgumentParser(description="Sales dashboard pipeline smoke test")
    parser.add_argument("report", nargs="?", default=str(SALES_REPORT_FILE))
    parser.add_argument("--demo", action="store_true", help="use a simulated report")
    args = parser.parse_args(argv)

    print("=" * 70)
    print("  SALES DASHBOARD — Executive Performance Analytics")
    print("  Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Load source data
    # ------------------------------------------------------------------
    print("[ 1 ] LOADING SOURCE DATA")
    print("-" * 40)

    store = OperationStore()
    if args.demo:
        store.replace(extract_operations(generate_report_rows()), source="simulator")
    else:
        try:
            store.load_file(args.report)
        except SalesReportError as e:
            logger.error("Could not load report: %s", e)
            return 1

    operations = store.operations
    quotes = sum(1 for op in operations if op.is_quote)
    undated = sum(1 for op in operations if op.date is None)
    print(f"\nOperations: {len(operations)} ({quotes} quotes, {undated} undated)")

    # ------------------------------------------------------------------
    # 2. Aggregates
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] BUILDING PERIOD AGGREGATES")
    print("-" * 40)

    monthly = aggregate_monthly(operations)
    weekly = aggregate_weekly(operations)
    print(f"\nMonthly buckets: {len(monthly)}")
    print(aggregates_to_frame(monthly).to_string(index=False))
    print(f"\nWeekly buckets: {len(weekly)}")

    # ------------------------------------------------------------------
    # 3. Dashboard outputs
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] DASHBOARD OUTPUTS")
    print("-" * 40)

    overview = get_sales_overview(operations)
    g = overview["global_kpis"]
    a = overview["advanced_kpis"]
    print(f"\nAvailable months: {overview['months']}")
    print(f"  Total income     | {format_money(g.total_income)}")
    print(f"  Total profit     | {format_money(g.total_profit)}")
    print(f"  Avg margin       | {format_pct(g.avg_profit_margin)}")
    print(f"  ROI              | {format_pct(g.roi)}")
    print(f"  Revenue growth   | {format_pct(g.revenue_growth)}")
    print(f"  QoQ growth       | {format_pct(a.quarter_over_quarter_growth)}")
    print(f"  Client conc.     | {format_pct(g.client_concentration_risk)}")
    print(f"  Volatility       | {format_pct(a.monthly_volatility)}")

    print("\nTop performers:")
    for p in overview["top_performers"]:
        print(f"  {p.executive:20s} | {format_money(p.profit)} | {format_pct(p.profit_margin)}")

    print("\nMonthly chart series:")
    print(get_chart_series(monthly).to_string(index=False))

    print("\nMonthly trends:")
    print(trends_to_frame(overview["trends"].values()).to_string(index=False))

    print("\nWeekly trends:")
    print(trends_to_frame(executive_trends(weekly).values()).to_string(index=False))

    print("\nLatest vs previous month:")
    print(trends_to_frame(compare_periods(monthly)).to_string(index=False))

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
