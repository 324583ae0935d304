"""
Data models for SettleLedger
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, NewType, Tuple

Person = NewType("Person", str)


class InvalidExpense(ValueError):
    """Expense rejected before touching the ledger"""


class MalformedSnapshot(ValueError):
    """Stored or imported ledger data that does not parse"""


class PersistenceUnavailable(RuntimeError):
    """Storage backend could not be read or written"""


def _amount_from(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSnapshot(f"amount must be a number, got {value!r}")
    try:
        amount = float(value)
    except OverflowError as ex:
        raise MalformedSnapshot("amount is too large") from ex
    if not math.isfinite(amount) or amount <= 0:
        raise MalformedSnapshot(f"amount must be finite and positive, got {value!r}")
    return amount


@dataclass(frozen=True)
class SplitRecord:
    """Raw obligation: to_person owes from_person (the payer) this amount"""
    from_person: Person
    to_person: Person
    amount: float

    def to_dict(self) -> dict:
        return {"from": self.from_person, "to": self.to_person, "amount": self.amount}

    @classmethod
    def from_dict(cls, d: dict) -> "SplitRecord":
        if not isinstance(d, dict):
            raise MalformedSnapshot(f"record must be an object, got {type(d).__name__}")
        try:
            frm, to, amount = d["from"], d["to"], d["amount"]
        except KeyError as ex:
            raise MalformedSnapshot(f"record is missing {ex.args[0]!r}") from ex
        if not isinstance(frm, str) or not isinstance(to, str):
            raise MalformedSnapshot("record names must be strings")
        if not frm or not to:
            raise MalformedSnapshot("record names must not be empty")
        if frm == to:
            raise MalformedSnapshot(f"record pays {frm!r} to themselves")
        return cls(Person(frm), Person(to), _amount_from(amount))


@dataclass(frozen=True)
class Transfer:
    """Settlement instruction: from_person pays to_person"""
    from_person: Person
    to_person: Person
    amount: float

    def to_dict(self) -> dict:
        return {"from": self.from_person, "to": self.to_person, "amount": self.amount}


class LedgerState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class Ledger:
    """
    Ordered, append-only collection of split records.
    Records are never edited in place; corrections go through clear().
    """

    def __init__(self, records: Iterable[SplitRecord] = ()):
        self._records: List[SplitRecord] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SplitRecord]:
        return iter(self._records)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ledger):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"Ledger({self._records!r})"

    @property
    def state(self) -> LedgerState:
        return LedgerState.POPULATED if self._records else LedgerState.EMPTY

    def append(self, *records: SplitRecord) -> None:
        """Append records in the given order"""
        for r in records:
            if not isinstance(r, SplitRecord):
                raise TypeError(f"expected SplitRecord, got {type(r).__name__}")
        self._records.extend(records)

    def clear(self) -> None:
        self._records.clear()

    def load_snapshot(self, records: Iterable[SplitRecord]) -> None:
        """Replace the whole contents with a snapshot"""
        self._records = list(records)

    def snapshot(self) -> Tuple[SplitRecord, ...]:
        """Immutable copy of the records, safe to hand to collaborators"""
        return tuple(self._records)

    def people(self) -> List[Person]:
        """Names in order of first appearance (payer before debtor), blanks skipped"""
        seen = {}
        for r in self._records:
            for name in (r.from_person, r.to_person):
                if name and name not in seen:
                    seen[name] = None
        return list(seen)
