"""Integrity Classification — maps driver constraint messages to a violation kind.

Invariants:
    - Pure string inspection; works for PostgreSQL (asyncpg) and SQLite messages
    - Returns None for anything that is not a unique or foreign-key violation
    - foreign_key_reference names the referenced entity only when the driver
      reports it (PostgreSQL DETAIL / constraint name); SQLite gives no detail
"""

import re
from dataclasses import dataclass

UNIQUE = "unique"
FOREIGN_KEY = "foreign_key"

_UNIQUE_MARKERS = ("duplicate key", "unique constraint", "uniqueviolation")
_FOREIGN_KEY_MARKERS = ("foreign key", "foreignkeyviolation")

_TABLE_LABELS = {
    "donors": "Donor",
    "categories": "Category",
    "beneficiaries": "Beneficiary",
    "programs": "Program",
    "users": "User",
    "receipts": "Receipt",
    "distributions": "Distribution",
}
_COLUMN_LABELS = {
    "donor_id": "Donor",
    "category_id": "Category",
    "beneficiary_id": "Beneficiary",
    "program_id": "Program",
    "created_by_user_id": "User",
    "receipt_id": "Receipt",
    "distribution_id": "Distribution",
}

_KEY_DETAIL = re.compile(r"Key \((?P<column>\w+)\)=\((?P<value>[^)]*)\)")
_REFERENCED_TABLE = re.compile(r'present in table "(?P<table>\w+)"')
_CONSTRAINT_NAME = re.compile(
    r"_(?P<column>" + "|".join(_COLUMN_LABELS) + r")_fkey\b",
)


@dataclass(frozen=True)
class ForeignKeyReference:
    label: str | None
    value: str | None


def classify_integrity_error(message: str) -> str | None:
    lowered = message.lower()
    if any(marker in lowered for marker in _UNIQUE_MARKERS):
        return UNIQUE
    if any(marker in lowered for marker in _FOREIGN_KEY_MARKERS):
        return FOREIGN_KEY
    return None


def foreign_key_reference(message: str) -> ForeignKeyReference:
    """Which entity (and id) a foreign-key violation points at, as far as the message says."""
    label = None
    value = None
    table = _REFERENCED_TABLE.search(message)
    if table:
        label = _TABLE_LABELS.get(table["table"])
    key = _KEY_DETAIL.search(message)
    if key:
        value = key["value"]
        label = label or _COLUMN_LABELS.get(key["column"])
    constraint = _CONSTRAINT_NAME.search(message)
    if label is None and constraint:
        label = _COLUMN_LABELS[constraint["column"]]
    return ForeignKeyReference(label, value)
