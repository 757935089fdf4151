"""Data ingestion loaders for commercial report exports."""

from .sales_report import read_report_rows, extract_operations, load_operations
from .sales_report import classify_row, is_operation_ref
from .utils import parse_amount, parse_report_date, pad_row

__all__ = [
    "read_report_rows",
    "extract_operations",
    "load_operations",
    "classify_row",
    "is_operation_ref",
    "parse_amount",
    "parse_report_date",
    "pad_row",
]
