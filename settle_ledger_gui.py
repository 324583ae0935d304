"""
SettleLedger GUI
- Record who paid for what and who took part.
- Shows the raw split entries and a short list of transfers that settles everyone.

Run:
  python settle_ledger_gui.py

Dependencies:
  pip install openpyxl
(Tkinter ships with most Python distributions; on some Linux you may need: sudo apt-get install python3-tk)
"""
from __future__ import annotations
import logging
import os

try:
    import tkinter as tk
except ModuleNotFoundError:
    tk = None

from config import load_settings


def main():
    """Main entry point for the application"""
    logging.basicConfig(
        level=os.environ.get("SETTLE_LEDGER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if tk is None:
        raise RuntimeError(
            'tkinter is not available. Install it (e.g., on Ubuntu: sudo apt-get install python3-tk) '
            'and re-run to use the GUI.'
        )

    from main_app import SettleLedgerApp

    root = tk.Tk()
    SettleLedgerApp(root, load_settings())
    root.mainloop()


if __name__ == "__main__":
    main()
