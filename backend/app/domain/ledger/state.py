"""Owned ledger state: the snapshot presentation code reads from."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence

from ...infra.logging import get_logger
from ..errors import StoreError
from . import aggregates
from .client import EntryStoreClient
from .models import Entry, EntryType

__all__ = ["DEMO_ENTRIES", "LedgerMode", "LedgerState"]

logger = get_logger(__name__)

DEMO_ENTRIES: tuple[Entry, ...] = (
    Entry(
        id=1,
        type=EntryType.INCOME,
        amount=Decimal("5000.00"),
        description="Monthly Salary",
        category="Salary",
        date_created=datetime(2025, 11, 28, 10, 0, tzinfo=timezone.utc),
    ),
    Entry(
        id=2,
        type=EntryType.EXPENSE,
        amount=Decimal("1200.00"),
        description="Rent Payment",
        category="Housing",
        date_created=datetime(2025, 11, 27, 14, 30, tzinfo=timezone.utc),
    ),
)
DEMO_NOTICE = (
    "Showing demo data: the entry store could not be reached. "
    "Changes cannot be saved until the connection is restored."
)
OFFLINE_NOTICE = "Failed to load entries. Please check the store connection."


class LedgerMode(str, Enum):
    UNLOADED = "unloaded"
    LIVE = "live"
    DEMO = "demo"
    OFFLINE = "offline"


class LedgerState:
    """Snapshot of the entry collection plus the refresh protocol.

    The snapshot only changes through :meth:`refresh`, and every successful
    mutation is followed by a refresh before control returns to the caller.
    Nothing is patched locally, so totals always describe the store's last
    known state. Overlapping calls are not serialized; whichever fetch
    completes last determines the snapshot.
    """

    def __init__(
        self,
        client: EntryStoreClient,
        *,
        demo_fallback: bool = False,
        demo_entries: Sequence[Entry] = DEMO_ENTRIES,
    ) -> None:
        self._client = client
        self._demo_fallback = demo_fallback
        self._demo_entries = tuple(demo_entries)
        self._entries: tuple[Entry, ...] = tuple()
        self._mode = LedgerMode.UNLOADED
        self._last_error: Optional[StoreError] = None

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    @property
    def mode(self) -> LedgerMode:
        return self._mode

    @property
    def last_error(self) -> Optional[StoreError]:
        return self._last_error

    @property
    def notice(self) -> Optional[str]:
        if self._mode is LedgerMode.DEMO:
            return DEMO_NOTICE
        if self._mode is LedgerMode.OFFLINE:
            return OFFLINE_NOTICE
        return None

    @property
    def totals(self) -> aggregates.LedgerTotals:
        return aggregates.summarize(self._entries)

    @property
    def income_entries(self) -> List[Entry]:
        return aggregates.income_entries(self._entries)

    @property
    def expense_entries(self) -> List[Entry]:
        return aggregates.expense_entries(self._entries)

    def entries_of_type(self, entry_type: EntryType | None) -> List[Entry]:
        if entry_type is None:
            return list(self._entries)
        return aggregates.entries_of_type(self._entries, entry_type)

    async def refresh(self) -> tuple[Entry, ...]:
        """Replace the snapshot with a fresh fetch.

        Fetch failures do not raise: the error is kept on
        :attr:`last_error` and the state switches to demo or offline mode.
        """

        try:
            fetched = await self._client.fetch_all()
        except StoreError as exc:
            self._last_error = exc
            if self._demo_fallback:
                self._entries = self._demo_entries
                self._mode = LedgerMode.DEMO
                logger.warning(
                    "ledger_demo_mode_enabled",
                    extra={"error_code": exc.error_code},
                )
            else:
                self._entries = tuple()
                self._mode = LedgerMode.OFFLINE
                logger.warning(
                    "ledger_offline",
                    extra={"error_code": exc.error_code},
                )
            return self._entries
        self._entries = tuple(fetched)
        self._mode = LedgerMode.LIVE
        self._last_error = None
        return self._entries

    async def add(self, draft: Mapping[str, Any]) -> Entry:
        entry = await self._client.create(draft)
        await self.refresh()
        return entry

    async def edit(self, entry_id: int, draft: Mapping[str, Any]) -> Entry:
        entry = await self._client.update(entry_id, draft)
        await self.refresh()
        return entry

    async def remove(self, entry_id: int) -> None:
        await self._client.delete(entry_id)
        await self.refresh()
