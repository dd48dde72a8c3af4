"""Pydantic payloads shared by the ledger routers."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field

from ..domain.errors import StoreError
from ..domain.ledger import Entry, LedgerState, LedgerTotals
from ..domain.ledger.formatting import (
    format_money,
    format_signed_amount,
    format_timestamp,
)


class EntryDraftPayload(BaseModel):
    """Raw form fields; validation happens in the Entry Store client."""

    type: Any = None
    amount: Any = None
    description: Any = None
    category: Any = None

    def as_fields(self) -> dict[str, Any]:
        return self.model_dump()


class EntryRecord(BaseModel):
    id: int
    type: str
    amount: Decimal
    description: str
    category: str
    date_created: datetime
    display_amount: str
    display_date: str


class TotalsRecord(BaseModel):
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    income_count: int
    expense_count: int
    display: dict[str, str] = Field(default_factory=dict)


class LedgerSnapshotResponse(BaseModel):
    items: list[EntryRecord] = Field(default_factory=list)
    totals: TotalsRecord
    mode: str
    notice: Optional[str] = None
    type_filter: Optional[str] = None


class EntryMutationResponse(BaseModel):
    entry: EntryRecord
    totals: TotalsRecord
    mode: str
    notice: Optional[str] = None


def serialize_entry(entry: Entry, symbol: str) -> EntryRecord:
    return EntryRecord(
        id=entry.id,
        type=entry.type.value,
        amount=entry.amount,
        description=entry.description,
        category=entry.category,
        date_created=entry.date_created,
        display_amount=format_signed_amount(entry, symbol),
        display_date=format_timestamp(entry.date_created),
    )


def serialize_totals(totals: LedgerTotals, symbol: str) -> TotalsRecord:
    return TotalsRecord(
        total_income=totals.total_income,
        total_expense=totals.total_expense,
        balance=totals.balance,
        income_count=totals.income_count,
        expense_count=totals.expense_count,
        display={
            "total_income": format_money(totals.total_income, symbol),
            "total_expense": format_money(totals.total_expense, symbol),
            "balance": format_money(totals.balance, symbol),
        },
    )


def build_mutation_response(
    entry: Entry, state: LedgerState, symbol: str
) -> EntryMutationResponse:
    return EntryMutationResponse(
        entry=serialize_entry(entry, symbol),
        totals=serialize_totals(state.totals, symbol),
        mode=state.mode.value,
        notice=state.notice,
    )


def store_error_to_http(exc: StoreError) -> HTTPException:
    return HTTPException(status_code=int(exc.status_code), detail=exc.to_detail())
