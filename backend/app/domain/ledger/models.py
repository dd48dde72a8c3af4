"""Ledger data models: stored entries and user-supplied drafts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

__all__ = [
    "Entry",
    "EntryDraft",
    "EntryType",
    "as_utc",
    "utcnow",
]


def utcnow() -> datetime:
    """Return timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive store timestamps as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class EntryType(str, Enum):
    """Direction of a ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class EntryDraft:
    """Normalized field set for creating or replacing an entry.

    Instances are only produced by :func:`normalize_draft`, so every draft
    that reaches a gateway has already passed validation.
    """

    type: EntryType
    amount: Decimal
    description: str
    category: str

    def as_values(self) -> dict[str, Any]:
        """Column values for insert/update statements."""

        return {
            "type": self.type.value,
            "amount": self.amount,
            "description": self.description,
            "category": self.category,
        }


@dataclass(frozen=True)
class Entry:
    """A stored income or expense row."""

    id: int
    type: EntryType
    amount: Decimal
    description: str
    category: str
    date_created: datetime

    @property
    def is_income(self) -> bool:
        return self.type is EntryType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is EntryType.EXPENSE

    def to_draft_fields(self) -> dict[str, Any]:
        """Field mapping suitable for pre-filling an edit form."""

        return {
            "type": self.type.value,
            "amount": str(self.amount),
            "description": self.description,
            "category": self.category,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Entry":
        return cls(
            id=int(row["id"]),
            type=EntryType(row["type"]),
            amount=Decimal(str(row["amount"])),
            description=row["description"],
            category=row["category"],
            date_created=as_utc(row["date_created"]),
        )
