"""
Excel export functionality for SettleLedger
"""
from __future__ import annotations
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import SplitRecord
from computations import EPS, compute_balances, compute_transfers


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = max((len(str(c.value)) for c in ws[letter] if c.value is not None), default=0)
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _money_column(ws, col):
    for r in range(2, ws.max_row + 1):
        ws.cell(r, col).number_format = "0.00"


def export_excel(records: Sequence[SplitRecord], filepath: str, currency: str = "", eps: float = EPS) -> None:
    """
    Export ledger to Excel file with three sheets:
    - Expenses (raw split records)
    - Balances
    - Transfers (settlement)
    """
    wb = Workbook()
    wb.remove(wb.active)
    suffix = f" ({currency})" if currency else ""

    ws = wb.create_sheet("Expenses")
    ws.append(["From (Payer)", "To (Owes)", f"Amount{suffix}"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for r in records:
        ws.append([r.from_person, r.to_person, r.amount])
    if len(records):
        ws.append(["TOTAL", None, f"=SUM(C2:C{ws.max_row})"])
        ws.cell(ws.max_row, 1).font = Font(bold=True)
    _money_column(ws, 3)
    _autosize_columns(ws)

    balance = compute_balances(records)
    ws = wb.create_sheet("Balances")
    ws.append(["Person", f"Balance{suffix}", "Status"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for p, v in balance.items():
        status = "is owed" if v > eps else ("owes" if v < -eps else "settled")
        ws.append([p, v, status])
    _money_column(ws, 2)
    _autosize_columns(ws)

    ws = wb.create_sheet("Transfers")
    ws.append(["From (Debtor)", "To (Creditor)", f"Amount{suffix}"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for t in compute_transfers(balance, eps):
        ws.append([t.from_person, t.to_person, t.amount])
    _money_column(ws, 3)
    _autosize_columns(ws)

    wb.save(filepath)
