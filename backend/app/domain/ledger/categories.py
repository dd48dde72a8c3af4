"""Suggested categories per entry type (form hints, never enforced)."""

from __future__ import annotations

from .models import EntryType

INCOME_CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Business",
    "Investment",
    "Gift",
    "Other",
)
EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Housing",
    "Food",
    "Transportation",
    "Utilities",
    "Entertainment",
    "Healthcare",
    "Shopping",
    "Other",
)

_CATEGORIES_BY_TYPE: dict[EntryType, tuple[str, ...]] = {
    EntryType.INCOME: INCOME_CATEGORIES,
    EntryType.EXPENSE: EXPENSE_CATEGORIES,
}


def suggested_categories(entry_type: EntryType | str) -> tuple[str, ...]:
    return _CATEGORIES_BY_TYPE[EntryType(entry_type)]


def is_suggested_category(entry_type: EntryType | str, category: str) -> bool:
    return category in suggested_categories(entry_type)
