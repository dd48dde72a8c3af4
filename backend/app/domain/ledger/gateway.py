"""Entry table gateway implementations."""

from __future__ import annotations

from dataclasses import replace
from itertools import count
from threading import RLock
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from sqlalchemy import MetaData, Table, delete, insert, select, update
from sqlalchemy.engine import Engine

from ...infra.db import get_engine
from ...infra.logging import get_logger
from .models import Entry, EntryDraft, utcnow

__all__ = [
    "EntryTableGateway",
    "InMemoryEntryTableGateway",
    "PostgresEntryTableGateway",
    "build_entry_table_gateway",
    "sort_newest_first",
]

logger = get_logger(__name__)


class EntryTableGateway(Protocol):  # pragma: no cover
    """The four raw operations the hosted `entries` table supports.

    Implementations are synchronous and raise ``KeyError`` when an id is
    unknown; the async client owns error mapping.
    """

    def select_all_ordered(self) -> List[Entry]: ...

    def insert(self, draft: EntryDraft) -> Entry: ...

    def update_by_id(self, entry_id: int, draft: EntryDraft) -> Entry: ...

    def delete_by_id(self, entry_id: int) -> None: ...


def sort_newest_first(entries: Iterable[Entry]) -> List[Entry]:
    """Order by `date_created` descending, ties broken by `id` descending."""

    return sorted(
        entries, key=lambda entry: (entry.date_created, entry.id), reverse=True
    )


class InMemoryEntryTableGateway(EntryTableGateway):
    """Simple in-memory entries table used for local development and tests."""

    def __init__(self, seed: Optional[Iterable[Entry]] = None) -> None:
        self._lock = RLock()
        self._entries: Dict[int, Entry] = {}
        for entry in seed or ():
            self._entries[entry.id] = entry
        self._ids = count(max(self._entries, default=0) + 1)

    def select_all_ordered(self) -> List[Entry]:
        with self._lock:
            return sort_newest_first(self._entries.values())

    def insert(self, draft: EntryDraft) -> Entry:
        with self._lock:
            record = Entry(
                id=next(self._ids),
                type=draft.type,
                amount=draft.amount,
                description=draft.description,
                category=draft.category,
                date_created=utcnow(),
            )
            self._entries[record.id] = record
            return record

    def update_by_id(self, entry_id: int, draft: EntryDraft) -> Entry:
        with self._lock:
            record = self._entries.get(entry_id)
            if record is None:
                raise KeyError(f"Entry {entry_id} not found")
            updated = replace(
                record,
                type=draft.type,
                amount=draft.amount,
                description=draft.description,
                category=draft.category,
            )
            self._entries[entry_id] = updated
            return updated

    def delete_by_id(self, entry_id: int) -> None:
        with self._lock:
            if self._entries.pop(entry_id, None) is None:
                raise KeyError(f"Entry {entry_id} not found")


class PostgresEntryTableGateway(EntryTableGateway):
    """SQLAlchemy-backed adapter for the hosted `entries` table.

    `id` and `date_created` are left to the table's server-side defaults and
    read back through ``RETURNING``.
    """

    def __init__(
        self,
        engine: Optional[Engine] = None,
        *,
        table: Optional[Table] = None,
        table_name: str = "entries",
    ) -> None:
        self._engine = engine or get_engine()
        if table is not None:
            self._entries = table
        else:
            self._entries = Table(table_name, MetaData(), autoload_with=self._engine)

    def select_all_ordered(self) -> List[Entry]:
        table = self._entries
        stmt = select(table).order_by(table.c.date_created.desc(), table.c.id.desc())
        with self._engine.begin() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_row_to_entry(row) for row in rows]

    def insert(self, draft: EntryDraft) -> Entry:
        stmt = insert(self._entries).values(**draft.as_values()).returning(self._entries)
        with self._engine.begin() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:  # pragma: no cover
            raise RuntimeError("failed to insert entry")
        return _row_to_entry(row)

    def update_by_id(self, entry_id: int, draft: EntryDraft) -> Entry:
        stmt = (
            update(self._entries)
            .where(self._entries.c.id == entry_id)
            .values(**draft.as_values())
            .returning(self._entries)
        )
        with self._engine.begin() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise KeyError(f"Entry {entry_id} not found")
        return _row_to_entry(row)

    def delete_by_id(self, entry_id: int) -> None:
        stmt = (
            delete(self._entries)
            .where(self._entries.c.id == entry_id)
            .returning(self._entries.c.id)
        )
        with self._engine.begin() as conn:
            deleted = conn.execute(stmt).first()
        if deleted is None:
            raise KeyError(f"Entry {entry_id} not found")


def build_entry_table_gateway(
    *,
    table_name: str = "entries",
    prefer_postgres: bool = True,
    fallback_to_memory: bool = False,
) -> EntryTableGateway:
    """Factory that returns the desired entries table implementation."""

    if prefer_postgres:
        try:
            return PostgresEntryTableGateway(table_name=table_name)
        except Exception:
            if not fallback_to_memory:
                raise
            logger.warning(
                "postgres_entry_table_unavailable_falling_back",
                exc_info=True,
                extra={"table": table_name},
            )
    return InMemoryEntryTableGateway()


def _row_to_entry(row: Mapping[str, Any]) -> Entry:
    return Entry.from_row(row)
