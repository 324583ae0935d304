"""
Business logic and computations for SettleLedger
"""
from __future__ import annotations
import logging
import math
from typing import Dict, Iterable, List, Sequence, Tuple

from models import InvalidExpense, Person, SplitRecord, Transfer

logger = logging.getLogger(__name__)

EPS = 1e-6


def parse_amount(value) -> float:
    """Parse an amount given as number or text; must be finite and positive"""
    if isinstance(value, bool):
        raise InvalidExpense(f"amount must be a number, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
    try:
        amount = float(value)
    except (TypeError, ValueError) as ex:
        raise InvalidExpense(f"amount is not a number: {value!r}") from ex
    except OverflowError as ex:
        raise InvalidExpense("amount is too large") from ex
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidExpense(f"amount must be finite and positive, got {value!r}")
    return amount


def split_expense(payer: str, amount, participants: Iterable[str]) -> Tuple[SplitRecord, ...]:
    """
    Expand one expense into split records.
    Every participant except the payer owes the payer amount / len(participants).
    Participants are deduplicated by exact name, keeping the given order.
    """
    if not payer:
        raise InvalidExpense("no payer selected")
    value = parse_amount(amount)
    people = list(dict.fromkeys(participants))
    if len(people) < 2:
        raise InvalidExpense("at least two distinct participants are required")
    if payer not in people:
        raise InvalidExpense(f"payer {payer!r} is not among the participants")

    share = value / len(people)
    return tuple(
        SplitRecord(Person(payer), Person(p), share)
        for p in people if p != payer
    )


def compute_balances(records: Iterable[SplitRecord]) -> Dict[Person, float]:
    """
    Fold split records into net balances.
    Positive -> is owed money; negative -> owes money.
    Keys appear in order of first appearance.
    """
    balance: Dict[Person, float] = {}
    for r in records:
        balance.setdefault(r.from_person, 0.0)
        balance.setdefault(r.to_person, 0.0)
        balance[r.from_person] += r.amount
        balance[r.to_person] -= r.amount
    return balance


def compute_transfers(balance: Dict[Person, float], eps: float = EPS) -> List[Transfer]:
    """
    Greedy settlement: debtors pay creditors.
    Creditors and debtors are matched in the order they appear in balance,
    not sorted by amount, so the result is reproducible but not always the
    smallest possible number of transfers.
    """
    creditors = [[p, v] for p, v in balance.items() if v > eps]
    debtors = [[p, -v] for p, v in balance.items() if v < -eps]

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        x = min(debtor[1], creditor[1])
        transfers.append(Transfer(debtor[0], creditor[0], x))
        debtor[1] -= x
        creditor[1] -= x
        if debtor[1] <= eps:
            i += 1
        if creditor[1] <= eps:
            j += 1

    logger.debug("settled %d balances with %d transfers",
                 len(creditors) + len(debtors), len(transfers))
    return transfers


def apply_transfers(balance: Dict[Person, float], transfers: Iterable[Transfer]) -> Dict[Person, float]:
    """Balances left after every transfer is paid (all ~0 for a full settlement)"""
    out = dict(balance)
    for t in transfers:
        out[t.from_person] = out.get(t.from_person, 0.0) + t.amount
        out[t.to_person] = out.get(t.to_person, 0.0) - t.amount
    return out


def format_entry(entry, currency: str) -> str:
    """'<from> pays <to>: <currency> <amount>' for a split record or transfer"""
    return f"{entry.from_person} pays {entry.to_person}: {currency} {entry.amount:.2f}"


def describe_entries(entries: Sequence, currency: str) -> List[str]:
    """Format every entry for display"""
    return [format_entry(e, currency) for e in entries]
