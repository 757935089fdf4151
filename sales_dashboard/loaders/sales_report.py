"""
Loader for the commercial sales report export (CSV or Excel).

The export is not a normalised table. Each executive's block starts with a
row whose identifier column holds the executive's name, immediately followed
by a section banner row mentioning SHIPMENT. Invoice rows follow, identified
by an "INV<digits>" or bare numeric (3+ digits) token in the same column.
Subtotals, blank spacers and repeated column headings are interleaved and
must be skipped.
"""

import csv
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

import openpyxl

from ..config import (
    DEFAULT_LAYOUT,
    EXCEL_SUFFIXES,
    INVOICE_REF_PATTERN,
    NUMERIC_ID_PATTERN,
    REPORT_DELIMITER,
    REPORT_ENCODING,
    SECTION_BANNER_KEYWORD,
    ReportLayout,
)
from ..exceptions import NoOperationsFoundError, ReportReadError
from ..models import Operation
from .utils import cell, pad_row, parse_amount, parse_report_date, row_contains

logger = logging.getLogger(__name__)

HEADER = "header"
OPERATION = "operation"
SKIP = "skip"


# ---------------------------------------------------------------------------
# File reading
# ---------------------------------------------------------------------------

def read_report_rows(
    path: str | Path,
    encoding: str = REPORT_ENCODING,
    delimiter: str = REPORT_DELIMITER,
) -> list[list[str]]:
    """Read a report file into a list of string rows.

    .xlsx/.xlsm files are read from the active sheet with openpyxl; anything
    else is parsed as delimited text. Completely empty lines are dropped,
    rows that merely contain empty cells are kept.

    Raises
    ------
    ReportReadError
        If the file is missing, unreadable or cannot be decoded.
    """
    path = Path(path)
    if path.suffix.lower() in EXCEL_SUFFIXES:
        rows = _read_excel_rows(path)
    else:
        rows = _read_csv_rows(path, encoding, delimiter)

    logger.info("Read %d rows from %s", len(rows), path)
    return rows


def _read_csv_rows(path: Path, encoding: str, delimiter: str) -> list[list[str]]:
    try:
        with open(path, newline="", encoding=encoding) as fh:
            return [row for row in csv.reader(fh, delimiter=delimiter) if row]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        logger.exception("Failed to read sales report: %s", path)
        raise ReportReadError(f"Could not read sales report {path}: {exc}") from exc


def _read_excel_rows(path: Path) -> list[list[str]]:
    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except Exception as exc:
        logger.exception("Failed to open sales report workbook: %s", path)
        raise ReportReadError(f"Could not open workbook {path}: {exc}") from exc

    try:
        ws = wb.active
        rows = []
        for values in ws.iter_rows(values_only=True):
            if all(v is None for v in values):
                continue
            rows.append([_excel_cell_text(v) for v in values])
    finally:
        wb.close()
    return rows


def _excel_cell_text(val: Any) -> str:
    """Render an Excel cell the way the CSV export would."""
    if val is None:
        return ""
    if isinstance(val, (datetime, date)):
        return f"{val.month}/{val.day}/{val.year}"
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)


# ---------------------------------------------------------------------------
# Operation extraction
# ---------------------------------------------------------------------------

def is_operation_ref(token: str) -> bool:
    """True for an invoice reference ("INV123") or a bare numeric id ("4521")."""
    return bool(INVOICE_REF_PATTERN.match(token) or NUMERIC_ID_PATTERN.fullmatch(token))


def classify_row(
    row: Sequence[str],
    next_row: Sequence[str] | None,
    layout: ReportLayout = DEFAULT_LAYOUT,
) -> str:
    """Classify a row as HEADER, OPERATION or SKIP.

    Classification depends only on the identifier column of this row and,
    for headers, on the banner keyword appearing anywhere in the next row.
    """
    token = cell(row, layout.identifier)
    if not token:
        return SKIP
    if is_operation_ref(token):
        return OPERATION
    if next_row is not None and row_contains(next_row, SECTION_BANNER_KEYWORD):
        return HEADER
    return SKIP


@dataclass
class _ScanState:
    current_executive: str = ""
    operations: list[Operation] = field(default_factory=list)


def _build_operation(row: Sequence[str], executive: str, layout: ReportLayout) -> Operation:
    return Operation(
        executive=executive,
        date=parse_report_date(cell(row, layout.date)),
        invoice_ref=cell(row, layout.identifier),
        client=cell(row, layout.client) or None,
        income=parse_amount(cell(row, layout.income)),
        expense=parse_amount(cell(row, layout.expense)),
        profit=parse_amount(cell(row, layout.profit)),
        commission=parse_amount(cell(row, layout.commission)),
    )


def _scan_row(
    state: _ScanState,
    row: Sequence[str],
    next_row: Sequence[str] | None,
    layout: ReportLayout,
) -> _ScanState:
    kind = classify_row(row, next_row, layout)

    if kind == HEADER:
        state.current_executive = cell(row, layout.identifier)
    elif kind == OPERATION:
        if state.current_executive:
            state.operations.append(_build_operation(row, state.current_executive, layout))
        else:
            logger.debug("Dropped operation row before any executive header: %s",
                         cell(row, layout.identifier))
    return state


def extract_operations(
    rows: Sequence[Sequence[str]],
    layout: ReportLayout = DEFAULT_LAYOUT,
) -> list[Operation]:
    """Extract Operation records from raw report rows.

    A single forward pass carries the current executive from each header
    row to the operation rows below it. The scan starts from a fresh state
    on every call, so the same rows always yield the same operations.

    Parameters
    ----------
    rows : Raw rows as read from the export; short rows are padded.
    layout : Column offsets of the export.

    Returns
    -------
    Operations in source row order. Empty if nothing was recognised.
    """
    padded = [pad_row(r, layout.width) for r in rows]
    state = _ScanState()

    for idx, row in enumerate(padded):
        next_row = padded[idx + 1] if idx + 1 < len(padded) else None
        state = _scan_row(state, row, next_row, layout)

    executives = {op.executive for op in state.operations}
    logger.info(
        "Extracted %d operations for %d executives from %d rows",
        len(state.operations), len(executives), len(padded),
    )
    return state.operations


def load_operations(
    path: str | Path,
    layout: ReportLayout = DEFAULT_LAYOUT,
    encoding: str = REPORT_ENCODING,
) -> list[Operation]:
    """Read a report file and extract its operations.

    Raises
    ------
    ReportReadError
        If the file cannot be read.
    NoOperationsFoundError
        If the file holds no recognisable operation rows.
    """
    rows = read_report_rows(path, encoding=encoding)
    operations = extract_operations(rows, layout)
    if not operations:
        logger.warning("No operations found in %s", path)
        raise NoOperationsFoundError(
            f"No valid operations found in {path}. Check the report format."
        )
    return operations
