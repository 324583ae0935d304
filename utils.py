"""
Utility functions for SettleLedger application
"""
from __future__ import annotations
import os
from typing import Optional


def safe_float(x: str, default: Optional[float] = 0.0) -> Optional[float]:
    """Convert string to float safely, returning default on error"""
    try:
        return float(x)
    except (TypeError, ValueError):
        return default


def app_dir() -> str:
    """
    Get application data directory.
    SETTLE_LEDGER_HOME wins; otherwise ~/.local/share/SettleLedger.
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("SETTLE_LEDGER_HOME")
    if not path:
        base = os.environ.get("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")
        path = os.path.join(base, "SettleLedger")
    os.makedirs(path, exist_ok=True)
    return path
