from __future__ import annotations

import csv
from datetime import date, datetime

import openpyxl
import pytest

from sales_dashboard.config import DEFAULT_LAYOUT, ReportLayout
from sales_dashboard.exceptions import NoOperationsFoundError, ReportReadError
from sales_dashboard.loaders import (
    classify_row,
    extract_operations,
    is_operation_ref,
    load_operations,
    read_report_rows,
)
from sales_dashboard.loaders.sales_report import HEADER, OPERATION, SKIP


def test_scenario_a_single_invoice(scenario_a_rows) -> None:
    ops = extract_operations(scenario_a_rows)

    assert len(ops) == 1
    op = ops[0]
    assert op.executive == "Ana"
    assert op.date == date(2024, 1, 15)
    assert op.client == "Acme"
    assert op.invoice_ref == "INV001"
    assert op.income == 1000.0
    assert op.expense == 400.0
    assert op.profit == 600.0
    assert op.commission is None
    assert not op.is_quote


def test_operation_before_any_header_is_dropped(make_row, header_rows) -> None:
    rows = [make_row("INV001", "1/15/24", "Acme", "100", "50", "50")]
    assert extract_operations(rows) == []

    rows += header_rows("Ana") + [make_row("INV002", "1/16/24", "Acme", "10", "5", "5")]
    ops = extract_operations(rows)
    assert [op.invoice_ref for op in ops] == ["INV002"]


def test_quote_row_has_all_amounts_absent(header_rows, make_row) -> None:
    rows = header_rows("Ana") + [make_row("INV002", "2/1/24", "Acme")]
    (op,) = extract_operations(rows)
    assert op.income is None and op.expense is None and op.profit is None
    assert op.is_quote


def test_numeric_identifier_rows_are_operations(header_rows, make_row) -> None:
    rows = header_rows("Ana") + [
        make_row("4521", "3/3/24", "Acme", "10", "5", "5"),
        make_row("45", "3/3/24", "Acme", "10", "5", "5"),
    ]
    ops = extract_operations(rows)
    assert [op.invoice_ref for op in ops] == ["4521"]


def test_header_requires_banner_on_next_row(make_row, header_rows) -> None:
    rows = header_rows("Ana") + [
        make_row("Subtotal"),
        make_row("INV001", "1/15/24", "Acme", "100", "40", "60"),
    ]
    ops = extract_operations(rows)
    assert ops[0].executive == "Ana"


def test_executive_context_switches_between_blocks(header_rows, make_row) -> None:
    rows = (
        header_rows("Ana")
        + [make_row("INV001", "1/15/24", "Acme", "100", "40", "60")]
        + header_rows("Bruno")
        + [make_row("INV002", "1/16/24", "Beta", "200", "50", "150")]
    )
    ops = extract_operations(rows)
    assert [(op.executive, op.invoice_ref) for op in ops] == [("Ana", "INV001"), ("Bruno", "INV002")]


def test_bad_cells_become_absent(header_rows, make_row) -> None:
    rows = header_rows("Ana") + [make_row("INV003", "31/31/24", "  ", "n/a", "400", "x", "1,5x")]
    (op,) = extract_operations(rows)
    assert op.date is None
    assert op.client is None
    assert op.income is None
    assert op.expense == 400.0
    assert op.profit is None
    assert op.commission is None
    assert not op.is_quote


def test_unrepresentable_year_does_not_stop_extraction(header_rows, make_row) -> None:
    rows = header_rows("Ana") + [
        make_row("INV001", "1/15/0000", "Acme", "100", "40", "60"),
        make_row("INV002", "1/16/24", "Acme", "200", "50", "150"),
    ]
    ops = extract_operations(rows)
    assert [op.invoice_ref for op in ops] == ["INV001", "INV002"]
    assert ops[0].date is None
    assert ops[1].date == date(2024, 1, 16)


def test_ragged_rows_are_tolerated(header_rows) -> None:
    rows = header_rows("Ana") + [["", "", "INV004", "", "", "1/2/24"], [], ["x"]]
    (op,) = extract_operations(rows)
    assert op.date == date(2024, 1, 2)
    assert op.is_quote


def test_extraction_is_idempotent(scenario_a_rows, header_rows, make_row) -> None:
    rows = scenario_a_rows + header_rows("Bruno") + [make_row("999", "2/2/24", "Z", "1", "1", "0")]
    assert extract_operations(rows) == extract_operations(rows)


def test_classify_row(make_row) -> None:
    banner = ["SHIPMENT"]
    assert classify_row(make_row("Ana"), banner) == HEADER
    assert classify_row(make_row("Ana"), make_row("x")) == SKIP
    assert classify_row(make_row("Ana"), None) == SKIP
    assert classify_row(make_row("INV1"), banner) == OPERATION
    assert classify_row(make_row(""), banner) == SKIP


def test_is_operation_ref() -> None:
    assert is_operation_ref("INV001")
    assert is_operation_ref("INV12-A")
    assert is_operation_ref("123")
    assert not is_operation_ref("12")
    assert not is_operation_ref("inv001")
    assert not is_operation_ref("Ana")
    assert not is_operation_ref("123\n")
    assert not is_operation_ref("\u0661\u0662\u0663")
    assert not is_operation_ref("INV\u0661")


def test_custom_layout() -> None:
    layout = ReportLayout(identifier=0, date=1, client=2, income=3, expense=4, profit=5, commission=6)
    rows = [
        ["Ana"],
        ["SHIPMENT"],
        ["INV9", "5/5/24", "Acme", "10", "4", "6", "1"],
    ]
    (op,) = extract_operations(rows, layout)
    assert op.commission == 1.0
    assert layout.width == 7


def _write_csv(path, rows) -> None:
    with open(path, "w", newline="", encoding="latin-1") as fh:
        csv.writer(fh).writerows(rows)


def test_read_report_rows_csv_skips_empty_lines(tmp_path, scenario_a_rows) -> None:
    path = tmp_path / "report.csv"
    _write_csv(path, [scenario_a_rows[0], [], scenario_a_rows[1], scenario_a_rows[2]])

    rows = read_report_rows(path)
    assert len(rows) == 3
    assert rows[0][DEFAULT_LAYOUT.identifier] == "Ana"


def test_read_report_rows_decodes_latin1(tmp_path, make_row) -> None:
    path = tmp_path / "report.csv"
    _write_csv(path, [make_row("José Muñoz"), ["SHIPMENT"]])
    rows = read_report_rows(path)
    assert rows[0][DEFAULT_LAYOUT.identifier] == "José Muñoz"


def test_read_report_rows_missing_file(tmp_path) -> None:
    with pytest.raises(ReportReadError):
        read_report_rows(tmp_path / "missing.csv")


def test_read_report_rows_xlsx(tmp_path) -> None:
    path = tmp_path / "report.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.cell(row=1, column=DEFAULT_LAYOUT.identifier + 1, value="Ana")
    ws.cell(row=2, column=1, value="SHIPMENT DETAIL")
    ws.cell(row=4, column=DEFAULT_LAYOUT.identifier + 1, value=12345)
    ws.cell(row=4, column=DEFAULT_LAYOUT.date + 1, value=datetime(2024, 1, 15))
    ws.cell(row=4, column=DEFAULT_LAYOUT.income + 1, value=1000.0)
    ws.cell(row=4, column=DEFAULT_LAYOUT.profit + 1, value=250.5)
    wb.save(path)

    rows = read_report_rows(path)
    assert len(rows) == 3

    (op,) = extract_operations(rows)
    assert op.invoice_ref == "12345"
    assert op.date == date(2024, 1, 15)
    assert op.income == 1000.0
    assert op.profit == 250.5


def test_read_report_rows_corrupt_xlsx(tmp_path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip file")
    with pytest.raises(ReportReadError):
        read_report_rows(path)


def test_load_operations(tmp_path, scenario_a_rows) -> None:
    path = tmp_path / "report.csv"
    _write_csv(path, scenario_a_rows)
    ops = load_operations(path)
    assert len(ops) == 1


def test_load_operations_without_data_raises(tmp_path, make_row) -> None:
    path = tmp_path / "report.csv"
    _write_csv(path, [make_row("Title"), make_row("INV001", "1/1/24")])
    with pytest.raises(NoOperationsFoundError):
        load_operations(path)
