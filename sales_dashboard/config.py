"""
Configuration: report layout, detection patterns, file paths, constants.

ReportLayout pins each semantic column of the commercial report export to
its fixed 0-based offset. The export has no reliable header row, so these
offsets are the contract with the upstream file format.
"""

import re
from dataclasses import dataclass, fields
from pathlib import Path

# ---------------------------------------------------------------------------
# File paths — adjust these if source files move
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent

SALES_REPORT_FILE = DATA_DIR / "reporte_comercial.csv"

# ---------------------------------------------------------------------------
# Source file dialect
# ---------------------------------------------------------------------------
REPORT_ENCODING = "latin-1"
REPORT_DELIMITER = ","
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


# ---------------------------------------------------------------------------
# Report layout
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ReportLayout:
    """Fixed 0-based column offsets of the commercial report export."""

    identifier: int = 2
    date: int = 5
    client: int = 17
    income: int = 24
    expense: int = 27
    profit: int = 28
    commission: int = 33

    @property
    def width(self) -> int:
        """Minimum row width that covers every mapped column."""
        return max(getattr(self, f.name) for f in fields(self)) + 1


DEFAULT_LAYOUT = ReportLayout()

# ---------------------------------------------------------------------------
# Row detection
# ---------------------------------------------------------------------------
# The row after an executive name carries the shipment section banner
SECTION_BANNER_KEYWORD = "SHIPMENT"

# ASCII digits only. The invoice pattern is a prefix match, the id pattern a whole-token match
INVOICE_REF_PATTERN = re.compile(r"INV[0-9]+")
NUMERIC_ID_PATTERN = re.compile(r"[0-9]{3,}")

# ---------------------------------------------------------------------------
# Analytics constants
# ---------------------------------------------------------------------------
# |profit % change| below this band is reported as "stable"
STABLE_TREND_BAND_PCT = 5.0

QUARTER_MONTHS = 3

ALL = "all"

UNNAMED_EXECUTIVE = "Sin nombre"
