"""Suggested category lists for the entry form."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from ...domain.ledger import EntryType, suggested_categories

router = APIRouter(prefix="/api/categories", tags=["categories"])


class CategoryGroup(BaseModel):
    type: str
    categories: list[str] = Field(default_factory=list)


class CategoriesResponse(BaseModel):
    items: list[CategoryGroup] = Field(default_factory=list)


@router.get("", response_model=CategoriesResponse, summary="Suggested categories")
def list_categories(
    entry_type: Annotated[Optional[EntryType], Query(alias="type")] = None,
) -> CategoriesResponse:
    """Return both groups unless a single entry type is requested."""

    types = [entry_type] if entry_type else list(EntryType)
    return CategoriesResponse(
        items=[
            CategoryGroup(type=kind.value, categories=list(suggested_categories(kind)))
            for kind in types
        ]
    )
