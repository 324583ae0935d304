"""
Main application window for SettleLedger GUI
"""
from __future__ import annotations
import logging

try:
    import tkinter as tk
    from tkinter import ttk, messagebox, filedialog
except ModuleNotFoundError:
    tk = None
    ttk = None
    messagebox = None
    filedialog = None

from config import Settings, get_default_store
from session import LedgerSession
from excel_export import export_excel
from csv_handler import export_records_to_csv, import_records_from_csv

logger = logging.getLogger(__name__)

PAYER_PLACEHOLDER = "Select Person..."
EMPTY_SETTLEMENT = "Add people and expenses to see the result."


class SettleLedgerApp(ttk.Frame):
    """Main application window"""

    def __init__(self, master: tk.Tk, settings: Settings):
        super().__init__(master, padding=8)
        self.master = master
        self.master.title("SettleLedger")
        self.master.geometry("900x600")
        self.grid(row=0, column=0, sticky="nsew")
        self.master.rowconfigure(0, weight=1)
        self.master.columnconfigure(0, weight=1)

        self.settings = settings
        self.session = LedgerSession(get_default_store(settings), settings.currency, settings.eps)
        self.people = []
        self.check_vars = {}

        self._build_menu()
        self._build_ui()

        self.session.load()
        for name in self.session.people():
            self._add_person_name(name)
        self.refresh_all()

    # ---------- Menu ----------
    def _build_menu(self):
        """Build application menu bar"""
        menubar = tk.Menu(self.master)
        filem = tk.Menu(menubar, tearoff=0)
        filem.add_command(label="Export CSV…", command=self.export_csv_dialog)
        filem.add_command(label="Import CSV…", command=self.import_csv_dialog)
        filem.add_separator()
        filem.add_command(label="Export Excel…", command=self.export_excel_dialog)
        filem.add_separator()
        filem.add_command(label="Exit", command=self.master.destroy)
        menubar.add_cascade(label="File", menu=filem)
        self.master.config(menu=menubar)

    # ---------- UI ----------
    def _build_ui(self):
        """Build people panel on the left, expenses and settlement on the right"""
        self.columnconfigure(1, weight=1)
        self.rowconfigure(0, weight=1)

        left = ttk.Frame(self, padding=(0, 0, 8, 0))
        left.grid(row=0, column=0, sticky="ns")

        ttk.Label(left, text="People:").grid(row=0, column=0, sticky="w")
        self.people_list = tk.Listbox(left, height=10)
        self.people_list.grid(row=1, column=0, columnspan=2, sticky="nsew", pady=4)
        self.new_person_var = tk.StringVar()
        ttk.Entry(left, textvariable=self.new_person_var, width=18).grid(row=2, column=0, sticky="w")
        ttk.Button(left, text="Add", command=self.add_person).grid(row=2, column=1, padx=4)
        ttk.Button(left, text="Remove Selected", command=self.remove_selected_person).grid(
            row=3, column=0, columnspan=2, sticky="w", pady=(4, 12))

        ttk.Label(left, text="Paid by:").grid(row=4, column=0, sticky="w")
        self.payer_var = tk.StringVar(value=PAYER_PLACEHOLDER)
        self.payer_combo = ttk.Combobox(left, textvariable=self.payer_var, state="readonly", width=20)
        self.payer_combo.grid(row=5, column=0, columnspan=2, sticky="w", pady=4)

        ttk.Label(left, text=f"Amount ({self.settings.currency}):").grid(row=6, column=0, sticky="w")
        self.amount_var = tk.StringVar()
        ttk.Entry(left, textvariable=self.amount_var, width=12).grid(row=7, column=0, sticky="w", pady=4)

        ttk.Label(left, text="Involved:").grid(row=8, column=0, sticky="w")
        self.checks_frame = ttk.Frame(left)
        self.checks_frame.grid(row=9, column=0, columnspan=2, sticky="w", pady=4)

        btns = ttk.Frame(left)
        btns.grid(row=10, column=0, columnspan=2, sticky="w", pady=(8, 0))
        ttk.Button(btns, text="Add Expense", command=self.add_expense).pack(side="left")
        ttk.Button(btns, text="Reset", command=self.reset).pack(side="left", padx=6)

        right = ttk.Frame(self)
        right.grid(row=0, column=1, sticky="nsew")
        right.columnconfigure(0, weight=1)
        right.rowconfigure(1, weight=1)
        right.rowconfigure(3, weight=1)

        ttk.Label(right, text="Expenses:").grid(row=0, column=0, sticky="w")
        self.expense_list = tk.Listbox(right, height=14)
        self.expense_list.grid(row=1, column=0, sticky="nsew", pady=4)
        yscroll = ttk.Scrollbar(right, orient="vertical", command=self.expense_list.yview)
        self.expense_list.configure(yscrollcommand=yscroll.set)
        yscroll.grid(row=1, column=1, sticky="ns")

        ttk.Label(right, text="Settlement:").grid(row=2, column=0, sticky="w", pady=(10, 0))
        self.settlement_list = tk.Listbox(right, height=10)
        self.settlement_list.grid(row=3, column=0, sticky="nsew", pady=4)

    # ---------- People ----------
    def _add_person_name(self, name: str):
        self.people.append(name)
        v = tk.BooleanVar(value=False)
        self.check_vars[name] = v
        ttk.Checkbutton(self.checks_frame, text=name, variable=v).grid(sticky="w")

    def _rebuild_checks(self):
        for child in self.checks_frame.winfo_children():
            child.destroy()
        old = self.check_vars
        self.check_vars = {}
        for name in self.people:
            v = tk.BooleanVar(value=old[name].get() if name in old else False)
            self.check_vars[name] = v
            ttk.Checkbutton(self.checks_frame, text=name, variable=v).grid(sticky="w")

    def add_person(self):
        """Add new person"""
        name = self.new_person_var.get()
        if not name.strip():
            return
        if name in self.people:
            messagebox.showinfo("People", "Name already exists.")
            return
        self._add_person_name(name)
        self.new_person_var.set("")
        self.refresh_people()

    def remove_selected_person(self):
        """Remove selected person from the pickers; recorded expenses stay"""
        sel = self.people_list.curselection()
        if not sel:
            return
        name = self.people_list.get(sel[0])
        self.people = [p for p in self.people if p != name]
        self._rebuild_checks()
        if self.payer_var.get() == name:
            self.payer_var.set(PAYER_PLACEHOLDER)
        self.refresh_people()

    # ---------- Expenses ----------
    def _reset_form(self):
        for v in self.check_vars.values():
            v.set(False)
        self.payer_var.set(PAYER_PLACEHOLDER)
        self.amount_var.set("")

    def add_expense(self):
        """Split the entered expense among the checked people"""
        payer = self.payer_var.get()
        if payer == PAYER_PLACEHOLDER:
            payer = ""
        involved = [p for p in self.people if self.check_vars[p].get()]
        added = self.session.add_expense(payer, self.amount_var.get(), involved)
        self._reset_form()
        if not added:
            messagebox.showerror(
                "Invalid expense",
                "Select who paid, a positive amount and at least two people including the payer.",
            )
            return
        self.refresh_all()

    def reset(self):
        """Clear everything"""
        if not messagebox.askyesno("Reset", "Remove all people and expenses?"):
            return
        self.session.reset()
        self.people = []
        self._rebuild_checks()
        self._reset_form()
        self.refresh_all()

    # ---------- File ops ----------
    def export_csv_dialog(self):
        """Export current split records to CSV file"""
        records = self.session.records()
        if not records:
            messagebox.showinfo("Export CSV", "No expenses to export.")
            return
        fp = filedialog.asksaveasfilename(
            title="Export Expenses to CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")]
        )
        if not fp:
            return
        try:
            n = export_records_to_csv(records, fp)
            messagebox.showinfo("Export CSV", f"Exported {n} entries to:\n{fp}")
        except Exception as ex:
            logger.exception("CSV export failed")
            messagebox.showerror("Export failed", str(ex))

    def import_csv_dialog(self):
        """Replace the ledger with split records read from CSV"""
        fp = filedialog.askopenfilename(
            title="Import Expenses from CSV",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")]
        )
        if not fp:
            return
        try:
            imported = import_records_from_csv(fp)
        except Exception as ex:
            logger.exception("CSV import failed")
            messagebox.showerror("Import failed", str(ex))
            return
        if not imported:
            messagebox.showinfo("Import CSV", "No expenses found in CSV file.")
            return
        if not messagebox.askyesno("Import CSV", f"Replace current expenses with {len(imported)} entries?"):
            return
        self.session.replace(imported)
        for name in self.session.people():
            if name not in self.people:
                self._add_person_name(name)
        self.refresh_all()

    def export_excel_dialog(self):
        """Export to Excel file"""
        fp = filedialog.asksaveasfilename(
            title="Export Excel",
            defaultextension=".xlsx",
            filetypes=[("Excel Workbook", "*.xlsx")]
        )
        if not fp:
            return
        try:
            export_excel(self.session.records(), fp, self.settings.currency, self.settings.eps)
            messagebox.showinfo("Export", f"Exported: {fp}")
        except Exception as ex:
            logger.exception("Excel export failed")
            messagebox.showerror("Export failed", str(ex))

    # ---------- Refresh ----------
    def refresh_all(self):
        """Refresh all UI elements"""
        self.refresh_people()
        self.refresh_expenses()
        self.refresh_settlement()

    def refresh_people(self):
        """Refresh people list and payer choices"""
        self.people_list.delete(0, tk.END)
        for p in self.people:
            self.people_list.insert(tk.END, p)
        self.payer_combo["values"] = [PAYER_PLACEHOLDER] + self.people

    def refresh_expenses(self):
        """Refresh raw expense list"""
        self.expense_list.delete(0, tk.END)
        for line in self.session.expense_lines():
            self.expense_list.insert(tk.END, line)

    def refresh_settlement(self):
        """Replace the settlement list with freshly computed transfers"""
        self.settlement_list.delete(0, tk.END)
        lines = self.session.settlement_lines()
        for line in lines or [EMPTY_SETTLEMENT]:
            self.settlement_list.insert(tk.END, line)
