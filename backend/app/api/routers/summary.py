"""Ledger summary endpoint backing the balance / income / expense cards."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...config import Settings
from ...domain.ledger import LedgerState
from ...domain.ledger.models import utcnow
from ...infra.logging import get_logger
from ...infra.metrics import get_metrics_client
from ..dependencies import get_ledger_state, get_settings
from ..schemas import TotalsRecord, serialize_totals

router = APIRouter(prefix="/api/summary", tags=["summary"])
logger = get_logger(__name__)
metrics = get_metrics_client()


class SummaryMeta(BaseModel):
    generated_at: datetime
    entry_count: int
    currency_symbol: str


class LedgerSummaryResponse(BaseModel):
    totals: TotalsRecord
    mode: str
    notice: Optional[str] = None
    meta: SummaryMeta


@router.get(
    "",
    response_model=LedgerSummaryResponse,
    summary="Totals derived from a fresh fetch of the entries table",
)
async def get_ledger_summary(
    state: LedgerState = Depends(get_ledger_state),
    settings: Settings = Depends(get_settings),
) -> LedgerSummaryResponse:
    """Return the summary payload."""

    metrics.increment("ledger_summary_http_total")
    await state.refresh()
    totals = state.totals
    logger.debug(
        "ledger_summary_payload",
        extra={"entry_count": totals.entry_count, "mode": state.mode.value},
    )
    return LedgerSummaryResponse(
        totals=serialize_totals(totals, settings.ledger.currency_symbol),
        mode=state.mode.value,
        notice=state.notice,
        meta=SummaryMeta(
            generated_at=utcnow(),
            entry_count=totals.entry_count,
            currency_symbol=settings.ledger.currency_symbol,
        ),
    )
