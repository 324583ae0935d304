import pytest
from openpyxl import load_workbook

from excel_export import export_excel
from models import SplitRecord


@pytest.fixture
def workbook(tmp_path):
    records = [
        SplitRecord("Alice", "Bob", 30.0),
        SplitRecord("Alice", "Carol", 30.0),
        SplitRecord("Bob", "Carol", 10.0),
    ]
    fp = str(tmp_path / "report.xlsx")
    export_excel(records, fp, currency="Rupees")
    return load_workbook(fp)


def rows(ws):
    return [list(r) for r in ws.iter_rows(min_row=2, values_only=True)]


def test_sheets(workbook):
    assert workbook.sheetnames == ["Expenses", "Balances", "Transfers"]
    assert workbook["Expenses"]["C1"].value == "Amount (Rupees)"


def test_expenses_sheet(workbook):
    assert rows(workbook["Expenses"]) == [
        ["Alice", "Bob", 30.0],
        ["Alice", "Carol", 30.0],
        ["Bob", "Carol", 10.0],
        ["TOTAL", None, "=SUM(C2:C4)"],
    ]


def test_balances_sheet(workbook):
    assert rows(workbook["Balances"]) == [
        ["Alice", 60.0, "is owed"],
        ["Bob", -20.0, "owes"],
        ["Carol", -40.0, "owes"],
    ]


def test_transfers_sheet(workbook):
    assert rows(workbook["Transfers"]) == [
        ["Bob", "Alice", 20.0],
        ["Carol", "Alice", 40.0],
    ]


def test_empty_ledger(tmp_path):
    fp = str(tmp_path / "empty.xlsx")
    export_excel([], fp)
    wb = load_workbook(fp)
    assert rows(wb["Expenses"]) == []
    assert rows(wb["Transfers"]) == []
    assert wb["Transfers"]["C1"].value == "Amount"
