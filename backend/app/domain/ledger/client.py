"""Async Entry Store client wrapping the hosted `entries` table."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Mapping, TypeVar

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from ...infra.logging import get_logger
from ...infra.metrics import MetricsClient, get_metrics_client, store_metric
from ..errors import (
    EntryNotFoundError,
    EntryValidationError,
    StoreUnavailableError,
)
from .gateway import EntryTableGateway
from .models import Entry
from .validation import normalize_draft

__all__ = ["EntryStoreClient"]

logger = get_logger(__name__)

T = TypeVar("T")

# Rows the store refused on content (overflow, constraint violation).
REJECTED_ERRORS: tuple[type[BaseException], ...] = (DataError, IntegrityError)
# Failures that mean the store could not serve the request at all.
UNAVAILABLE_ERRORS: tuple[type[BaseException], ...] = (SQLAlchemyError, OSError)


class EntryStoreClient:
    """Typed async facade over the four entries-table operations.

    Drafts are normalized here, before any request leaves the process. Every
    store failure is surfaced to the caller as a :class:`StoreError`; nothing
    is retried.
    """

    def __init__(
        self,
        gateway: EntryTableGateway,
        *,
        metrics: MetricsClient | None = None,
    ) -> None:
        self._gateway = gateway
        self._metrics = metrics or get_metrics_client()

    async def fetch_all(self) -> List[Entry]:
        entries = await self._call("fetch_all", self._gateway.select_all_ordered)
        self._metrics.gauge("entry_store_last_fetch_size", len(entries))
        return entries

    async def create(self, draft: Mapping[str, Any]) -> Entry:
        normalized = normalize_draft(draft)
        entry = await self._call("create", self._gateway.insert, normalized)
        logger.info(
            "entry_created",
            extra={
                "entry_id": entry.id,
                "entry_type": entry.type.value,
                "category": entry.category,
            },
        )
        return entry

    async def update(self, entry_id: int, draft: Mapping[str, Any]) -> Entry:
        normalized = normalize_draft(draft)
        entry = await self._call(
            "update",
            self._gateway.update_by_id,
            entry_id,
            normalized,
            entry_id=entry_id,
        )
        logger.info(
            "entry_updated",
            extra={"entry_id": entry.id, "entry_type": entry.type.value},
        )
        return entry

    async def delete(self, entry_id: int) -> None:
        await self._call(
            "delete", self._gateway.delete_by_id, entry_id, entry_id=entry_id
        )
        logger.info("entry_deleted", extra={"entry_id": entry_id})

    async def _call(
        self,
        operation: str,
        func: Callable[..., T],
        *args: Any,
        entry_id: int | None = None,
    ) -> T:
        self._metrics.increment(store_metric("entry", operation))
        try:
            return await asyncio.to_thread(func, *args)
        except KeyError as exc:
            if entry_id is None:
                raise
            self._metrics.increment(store_metric("entry", operation, failed=True))
            logger.warning(
                "entry_store_not_found",
                extra={"operation": operation, "entry_id": entry_id},
            )
            raise EntryNotFoundError(entry_id) from exc
        except REJECTED_ERRORS as exc:
            self._metrics.increment(store_metric("entry", operation, failed=True))
            logger.warning(
                "entry_store_rejected_row",
                extra={"operation": operation, "error": str(exc)},
            )
            raise EntryValidationError({"entry": "rejected by the store"}) from exc
        except UNAVAILABLE_ERRORS as exc:
            self._metrics.increment(store_metric("entry", operation, failed=True))
            logger.error(
                f"entry_store_{operation}_failed",
                extra={"operation": operation, "error": str(exc)},
            )
            raise StoreUnavailableError(
                f"Entry store request '{operation}' failed",
                details={"operation": operation},
            ) from exc
