"""Custom exceptions for the sales dashboard package."""


class SalesReportError(RuntimeError):
    """Base error for commercial report ingestion."""


class ReportReadError(SalesReportError):
    """Raised when a report file cannot be opened or decoded."""


class NoOperationsFoundError(SalesReportError):
    """Raised when a report yields no recognisable operations."""
