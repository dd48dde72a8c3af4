"""Derived totals over an entry collection.

Everything here is a pure function of the collection it is given; callers
recompute on every read instead of caching results.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence

from .gateway import sort_newest_first
from .models import Entry, EntryType

__all__ = [
    "LedgerTotals",
    "balance",
    "entries_of_type",
    "expense_entries",
    "income_entries",
    "summarize",
    "total_expense",
    "total_income",
]

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class LedgerTotals:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    income_count: int
    expense_count: int

    @property
    def entry_count(self) -> int:
        return self.income_count + self.expense_count


def _sum_amounts(entries: Iterable[Entry], entry_type: EntryType) -> Decimal:
    return sum(
        (entry.amount for entry in entries if entry.type is entry_type), ZERO
    )


def total_income(entries: Iterable[Entry]) -> Decimal:
    return _sum_amounts(entries, EntryType.INCOME)


def total_expense(entries: Iterable[Entry]) -> Decimal:
    return _sum_amounts(entries, EntryType.EXPENSE)


def balance(entries: Sequence[Entry]) -> Decimal:
    return total_income(entries) - total_expense(entries)


def entries_of_type(entries: Iterable[Entry], entry_type: EntryType) -> List[Entry]:
    """Filter to one type, newest first."""

    return sort_newest_first(entry for entry in entries if entry.type is entry_type)


def income_entries(entries: Iterable[Entry]) -> List[Entry]:
    return entries_of_type(entries, EntryType.INCOME)


def expense_entries(entries: Iterable[Entry]) -> List[Entry]:
    return entries_of_type(entries, EntryType.EXPENSE)


def summarize(entries: Sequence[Entry]) -> LedgerTotals:
    income = total_income(entries)
    expense = total_expense(entries)
    return LedgerTotals(
        total_income=income,
        total_expense=expense,
        balance=income - expense,
        income_count=sum(1 for entry in entries if entry.is_income),
        expense_count=sum(1 for entry in entries if entry.is_expense),
    )
