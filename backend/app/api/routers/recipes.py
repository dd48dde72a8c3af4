"""Read-only recipe list endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...domain.errors import StoreError
from ...domain.ledger.formatting import format_timestamp
from ...domain.recipes import Recipe, RecipeCatalog
from ...infra.logging import get_logger
from ...infra.metrics import get_metrics_client
from ..dependencies import get_recipe_catalog
from ..schemas import store_error_to_http

router = APIRouter(prefix="/api/recipes", tags=["recipes"])
logger = get_logger(__name__)
metrics = get_metrics_client()


class RecipeRecord(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    date_created: Optional[datetime] = None
    display_date: Optional[str] = None


class RecipeListResponse(BaseModel):
    items: List[RecipeRecord] = Field(default_factory=list)
    total: int = 0


@router.get("", response_model=RecipeListResponse, summary="List recipes, newest first")
async def list_recipes(
    catalog: RecipeCatalog = Depends(get_recipe_catalog),
) -> RecipeListResponse:
    metrics.increment("recipes_list_http_total")
    try:
        recipes = await catalog.fetch_all()
    except StoreError as exc:
        raise store_error_to_http(exc) from exc
    return RecipeListResponse(
        items=[_serialize_recipe(recipe) for recipe in recipes],
        total=len(recipes),
    )


def _serialize_recipe(recipe: Recipe) -> RecipeRecord:
    return RecipeRecord(
        id=recipe.id,
        name=recipe.name,
        description=recipe.description,
        date_created=recipe.date_created,
        display_date=(
            format_timestamp(recipe.date_created) if recipe.date_created else None
        ),
    )
