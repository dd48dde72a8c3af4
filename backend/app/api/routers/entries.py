"""Ledger entry endpoints: list, create, replace, delete."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from ...config import Settings
from ...domain.errors import StoreError
from ...domain.ledger import EntryType, LedgerState
from ...infra.logging import get_logger
from ...infra.metrics import get_metrics_client
from ..dependencies import get_ledger_state, get_settings
from ..schemas import (
    EntryDraftPayload,
    EntryMutationResponse,
    LedgerSnapshotResponse,
    build_mutation_response,
    serialize_entry,
    serialize_totals,
    store_error_to_http,
)

router = APIRouter(prefix="/api/entries", tags=["entries"])
logger = get_logger(__name__)
metrics = get_metrics_client()

EntryId = Annotated[int, Path(..., ge=1)]


@router.get(
    "",
    response_model=LedgerSnapshotResponse,
    summary="Refresh and list entries, optionally one type only",
)
async def list_entries(
    entry_type: Annotated[Optional[EntryType], Query(alias="type")] = None,
    state: LedgerState = Depends(get_ledger_state),
    settings: Settings = Depends(get_settings),
) -> LedgerSnapshotResponse:
    metrics.increment("entries_list_http_total")
    await state.refresh()
    symbol = settings.ledger.currency_symbol
    return LedgerSnapshotResponse(
        items=[serialize_entry(entry, symbol) for entry in state.entries_of_type(entry_type)],
        totals=serialize_totals(state.totals, symbol),
        mode=state.mode.value,
        notice=state.notice,
        type_filter=entry_type.value if entry_type else None,
    )


@router.post(
    "",
    response_model=EntryMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an entry and return the refreshed totals",
)
async def create_entry(
    payload: EntryDraftPayload,
    state: LedgerState = Depends(get_ledger_state),
    settings: Settings = Depends(get_settings),
) -> EntryMutationResponse:
    metrics.increment("entries_create_http_total")
    try:
        entry = await state.add(payload.as_fields())
    except StoreError as exc:
        logger.info(
            "entry_create_rejected",
            extra={"error_code": exc.error_code, "details": exc.details},
        )
        raise store_error_to_http(exc) from exc
    return build_mutation_response(entry, state, settings.ledger.currency_symbol)


@router.put(
    "/{entry_id}",
    response_model=EntryMutationResponse,
    summary="Replace type, amount, description and category of an entry",
)
async def replace_entry(
    entry_id: EntryId,
    payload: EntryDraftPayload,
    state: LedgerState = Depends(get_ledger_state),
    settings: Settings = Depends(get_settings),
) -> EntryMutationResponse:
    metrics.increment("entries_update_http_total")
    try:
        entry = await state.edit(entry_id, payload.as_fields())
    except StoreError as exc:
        logger.info(
            "entry_update_rejected",
            extra={"entry_id": entry_id, "error_code": exc.error_code},
        )
        raise store_error_to_http(exc) from exc
    return build_mutation_response(entry, state, settings.ledger.currency_symbol)


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an entry",
)
async def delete_entry(
    entry_id: EntryId,
    state: LedgerState = Depends(get_ledger_state),
) -> Response:
    metrics.increment("entries_delete_http_total")
    try:
        await state.remove(entry_id)
    except StoreError as exc:
        logger.info(
            "entry_delete_rejected",
            extra={"entry_id": entry_id, "error_code": exc.error_code},
        )
        raise store_error_to_http(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
