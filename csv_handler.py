"""
CSV export and import functionality for SettleLedger
"""
from __future__ import annotations
import csv
from typing import Iterable, List

from models import MalformedSnapshot, SplitRecord
from utils import safe_float

FIELDS = ["from", "to", "amount"]


def export_records_to_csv(records: Iterable[SplitRecord], filepath: str) -> int:
    """
    Export split records to CSV file
    CSV columns: from, to, amount
    Returns the number of rows written.
    """
    n = 0
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(FIELDS)
        for r in records:
            writer.writerow([r.from_person, r.to_person, repr(r.amount)])
            n += 1
    return n


def import_records_from_csv(filepath: str) -> List[SplitRecord]:
    """
    Import split records from CSV file
    Raises MalformedSnapshot on a missing column or bad row.
    """
    records = []

    with open(filepath, 'r', newline='', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        missing = [c for c in FIELDS if c not in (reader.fieldnames or [])]
        if missing:
            raise MalformedSnapshot(f"CSV is missing columns: {', '.join(missing)}")

        for line_no, row in enumerate(reader, start=2):
            amount = safe_float(row['amount'], None)
            try:
                records.append(SplitRecord.from_dict({
                    "from": row['from'],
                    "to": row['to'],
                    "amount": amount,
                }))
            except MalformedSnapshot as ex:
                raise MalformedSnapshot(f"line {line_no}: {ex}") from ex

    return records
