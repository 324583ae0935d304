"""
Session state for SettleLedger: owns the live ledger and its persistence
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from computations import EPS, compute_balances, compute_transfers, describe_entries, split_expense
from models import InvalidExpense, Ledger, LedgerState, PersistenceUnavailable, Person, SplitRecord, Transfer

logger = logging.getLogger(__name__)


class LedgerSession:
    """
    Single owner of the ledger for one running application.

    Each action (add_expense, reset, load) completes, including the
    snapshot write, before it returns. Balances and transfers are derived
    from the current records on every call.
    """

    def __init__(self, store=None, currency: str = "Rupees", eps: float = EPS):
        self.store = store
        self.currency = currency
        self.eps = eps
        self.ledger = Ledger()

    @property
    def state(self) -> LedgerState:
        return self.ledger.state

    # ---------- Actions ----------
    def add_expense(self, payer: Optional[str], amount, participants: Iterable[str]) -> Tuple[SplitRecord, ...]:
        """
        Split one expense and append it.
        An invalid expense is logged and ignored; returns the appended records.
        """
        try:
            records = split_expense(payer, amount, participants)
        except InvalidExpense as ex:
            logger.warning("expense rejected: %s", ex)
            return ()
        self.ledger.append(*records)
        logger.info("added %d split records paid by %s", len(records), payer)
        self._save()
        return records

    def reset(self) -> None:
        """Wipe the ledger and the stored snapshot"""
        self.ledger.clear()
        logger.info("ledger reset")
        self._save()

    def load(self) -> None:
        """Replace the ledger with the stored snapshot (empty if none)"""
        records = self.store.load() if self.store is not None else []
        self.ledger.load_snapshot(records)
        logger.info("loaded %d split records", len(records))

    def replace(self, records: Iterable[SplitRecord]) -> None:
        """Swap in records from an import and store them"""
        self.ledger.load_snapshot(records)
        logger.info("replaced ledger with %d imported records", len(self.ledger))
        self._save()

    def _save(self) -> None:
        if self.store is None:
            return
        try:
            self.store.save(self.ledger.snapshot())
        except PersistenceUnavailable as ex:
            logger.warning("could not save ledger: %s", ex)

    # ---------- Derived views ----------
    def records(self) -> Tuple[SplitRecord, ...]:
        return self.ledger.snapshot()

    def people(self) -> List[Person]:
        return self.ledger.people()

    def balances(self) -> Dict[Person, float]:
        return compute_balances(self.ledger)

    def transfers(self) -> List[Transfer]:
        return compute_transfers(self.balances(), self.eps)

    def expense_lines(self) -> List[str]:
        return describe_entries(self.records(), self.currency)

    def settlement_lines(self) -> List[str]:
        return describe_entries(self.transfers(), self.currency)
