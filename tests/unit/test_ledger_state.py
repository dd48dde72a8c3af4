"""Refresh-after-mutation protocol and fetch-failure fallbacks."""

from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from backend.app.domain.errors import (
    EntryNotFoundError,
    EntryValidationError,
    StoreUnavailableError,
)
from backend.app.domain.ledger import (
    DEMO_ENTRIES,
    EntryStoreClient,
    InMemoryEntryTableGateway,
    LedgerMode,
    LedgerState,
)
from backend.app.domain.ledger import state as state_module
from backend.app.infra.metrics import InMemoryMetricsClient
from tests.helpers.ledger_tables import make_entry
from tests.helpers.logging import RecordingLogger, assert_extra_contains

pytestmark = [pytest.mark.ledger]


class FlakyGateway(InMemoryEntryTableGateway):
    """In-memory table whose reads can be switched off."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.reads_fail = False
        self.selects = 0

    def select_all_ordered(self):
        self.selects += 1
        if self.reads_fail:
            raise OperationalError("SELECT", {}, Exception("timeout"))
        return super().select_all_ordered()


def _state(gateway, **kwargs):
    client = EntryStoreClient(gateway, metrics=InMemoryMetricsClient())
    return LedgerState(client, **kwargs)


def test_new_state_is_unloaded_and_empty():
    state = _state(InMemoryEntryTableGateway())

    assert state.mode is LedgerMode.UNLOADED
    assert state.entries == ()
    assert state.totals.balance == Decimal("0")
    assert state.notice is None


def test_refresh_replaces_snapshot():
    gateway = FlakyGateway(seed=[make_entry(1, "income", "5000.00")])
    state = _state(gateway)

    asyncio.run(state.refresh())

    assert state.mode is LedgerMode.LIVE
    assert [entry.id for entry in state.entries] == [1]
    assert state.last_error is None


def test_add_refreshes_before_returning():
    gateway = FlakyGateway(seed=[make_entry(1, "income", "5000.00")])
    state = _state(gateway)
    asyncio.run(state.refresh())

    created = asyncio.run(
        state.add({"type": "expense", "amount": "1200", "description": "Rent", "category": "Housing"})
    )

    assert gateway.selects == 2
    assert state.entries[0] == created
    assert state.totals.balance == Decimal("3800.00")


def test_edit_and_remove_refresh_snapshot():
    gateway = FlakyGateway(
        seed=[make_entry(1, "income", "5000.00"), make_entry(2, "expense", "1200.00")]
    )
    state = _state(gateway)

    asyncio.run(
        state.edit(2, {"type": "expense", "amount": "1000", "description": "Rent", "category": "Housing"})
    )
    assert state.totals.balance == Decimal("4000.00")

    asyncio.run(state.remove(1))
    assert [entry.id for entry in state.entries] == [2]
    assert state.totals.total_income == Decimal("0")
    assert gateway.selects == 2


def test_failed_mutation_leaves_snapshot_untouched():
    gateway = FlakyGateway(seed=[make_entry(1, "income", "5000.00")])
    state = _state(gateway)
    asyncio.run(state.refresh())
    before = state.entries

    with pytest.raises(EntryNotFoundError):
        asyncio.run(state.remove(999))
    with pytest.raises(EntryValidationError):
        asyncio.run(state.add({"type": "income", "amount": "-1"}))

    assert state.entries is before
    assert gateway.selects == 1


def test_fetch_failure_without_demo_goes_offline(monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr(state_module, "logger", recorder)
    gateway = FlakyGateway(seed=[make_entry(1, "income", "5000.00")])
    state = _state(gateway)
    asyncio.run(state.refresh())

    gateway.reads_fail = True
    result = asyncio.run(state.refresh())

    assert result == ()
    assert state.mode is LedgerMode.OFFLINE
    assert state.entries == ()
    assert isinstance(state.last_error, StoreUnavailableError)
    assert state.notice == state_module.OFFLINE_NOTICE
    assert_extra_contains(
        recorder.find("ledger_offline", level="warning"),
        error_code="LEDGER-STORE-UNAVAILABLE",
    )


def test_fetch_failure_with_demo_serves_demo_entries():
    gateway = FlakyGateway()
    gateway.reads_fail = True
    state = _state(gateway, demo_fallback=True)

    asyncio.run(state.refresh())

    assert state.mode is LedgerMode.DEMO
    assert state.entries == DEMO_ENTRIES
    assert state.notice == state_module.DEMO_NOTICE
    assert state.totals.balance == Decimal("3800.00")


def test_recovery_after_outage_returns_to_live():
    gateway = FlakyGateway(seed=[make_entry(3, "expense", "10.00")])
    gateway.reads_fail = True
    state = _state(gateway, demo_fallback=True)
    asyncio.run(state.refresh())

    gateway.reads_fail = False
    asyncio.run(state.refresh())

    assert state.mode is LedgerMode.LIVE
    assert [entry.id for entry in state.entries] == [3]
    assert state.last_error is None
    assert state.notice is None


def test_filtered_views_follow_snapshot():
    gateway = FlakyGateway(
        seed=[
            make_entry(1, "income", "100.00"),
            make_entry(2, "expense", "30.00"),
            make_entry(3, "income", "20.00"),
        ]
    )
    state = _state(gateway)
    asyncio.run(state.refresh())

    assert [entry.id for entry in state.income_entries] == [3, 1]
    assert [entry.id for entry in state.expense_entries] == [2]
    assert len(state.entries_of_type(None)) == 3


def test_draft_without_category_never_reaches_store():
    gateway = FlakyGateway(seed=[make_entry(1, "income", "5000.00")])
    state = _state(gateway)
    asyncio.run(state.refresh())

    with pytest.raises(EntryValidationError) as excinfo:
        asyncio.run(
            state.add({"type": "expense", "amount": "45.5", "description": "Groceries"})
        )

    assert excinfo.value.fields == {"category": "is required"}
    assert len(gateway.select_all_ordered()) == 1
    assert [entry.id for entry in state.entries] == [1]
