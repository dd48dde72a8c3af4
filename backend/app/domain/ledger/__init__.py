"""Budget ledger domain package."""

from .aggregates import LedgerTotals, summarize
from .categories import EXPENSE_CATEGORIES, INCOME_CATEGORIES, suggested_categories
from .client import EntryStoreClient
from .gateway import (
    EntryTableGateway,
    InMemoryEntryTableGateway,
    PostgresEntryTableGateway,
    build_entry_table_gateway,
)
from .models import Entry, EntryDraft, EntryType
from .state import DEMO_ENTRIES, LedgerMode, LedgerState
from .validation import normalize_draft

__all__ = [
    "DEMO_ENTRIES",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "Entry",
    "EntryDraft",
    "EntryStoreClient",
    "EntryTableGateway",
    "EntryType",
    "InMemoryEntryTableGateway",
    "LedgerMode",
    "LedgerState",
    "LedgerTotals",
    "PostgresEntryTableGateway",
    "build_entry_table_gateway",
    "normalize_draft",
    "suggested_categories",
    "summarize",
]
