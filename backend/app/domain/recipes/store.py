"""Read-only access to the hosted `recipes` table."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Protocol

from sqlalchemy import MetaData, Table, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ...infra.db import get_engine
from ...infra.logging import get_logger
from ...infra.metrics import MetricsClient, get_metrics_client, store_metric
from ..errors import StoreUnavailableError
from .models import Recipe

__all__ = [
    "InMemoryRecipeTableGateway",
    "PostgresRecipeTableGateway",
    "RecipeCatalog",
    "RecipeTableGateway",
    "build_recipe_table_gateway",
]

logger = get_logger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class RecipeTableGateway(Protocol):  # pragma: no cover
    def select_all_ordered(self) -> List[Recipe]: ...


def _newest_first(recipes: Iterable[Recipe]) -> List[Recipe]:
    # Undated recipes sort last.
    return sorted(
        recipes,
        key=lambda recipe: (recipe.date_created or _EPOCH, recipe.id),
        reverse=True,
    )


class InMemoryRecipeTableGateway(RecipeTableGateway):
    def __init__(self, recipes: Optional[Iterable[Recipe]] = None) -> None:
        self._recipes = list(recipes or ())

    def select_all_ordered(self) -> List[Recipe]:
        return _newest_first(self._recipes)


class PostgresRecipeTableGateway(RecipeTableGateway):
    """SQLAlchemy-backed adapter for the `recipes` table."""

    def __init__(
        self,
        engine: Optional[Engine] = None,
        *,
        table: Optional[Table] = None,
        table_name: str = "recipes",
    ) -> None:
        self._engine = engine or get_engine()
        if table is not None:
            self._recipes = table
        else:
            self._recipes = Table(table_name, MetaData(), autoload_with=self._engine)

    def select_all_ordered(self) -> List[Recipe]:
        table = self._recipes
        stmt = select(table).order_by(
            table.c.date_created.desc().nulls_last(), table.c.id.desc()
        )
        with self._engine.begin() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [Recipe.from_row(row) for row in rows]


def build_recipe_table_gateway(
    *,
    table_name: str = "recipes",
    prefer_postgres: bool = True,
    fallback_to_memory: bool = False,
) -> RecipeTableGateway:
    if prefer_postgres:
        try:
            return PostgresRecipeTableGateway(table_name=table_name)
        except Exception:
            if not fallback_to_memory:
                raise
            logger.warning(
                "postgres_recipe_table_unavailable_falling_back",
                exc_info=True,
                extra={"table": table_name},
            )
    return InMemoryRecipeTableGateway()


class RecipeCatalog:
    """Async list view over the recipes table.

    Unlike the ledger, a failed fetch is never replaced with sample data;
    the error goes straight to the caller.
    """

    def __init__(
        self,
        gateway: RecipeTableGateway,
        *,
        metrics: MetricsClient | None = None,
    ) -> None:
        self._gateway = gateway
        self._metrics = metrics or get_metrics_client()

    async def fetch_all(self) -> List[Recipe]:
        self._metrics.increment(store_metric("recipe", "fetch_all"))
        try:
            recipes = await asyncio.to_thread(self._gateway.select_all_ordered)
        except (SQLAlchemyError, OSError) as exc:
            self._metrics.increment(store_metric("recipe", "fetch_all", failed=True))
            logger.error("recipe_store_fetch_failed", extra={"error": str(exc)})
            raise StoreUnavailableError(
                "Recipe store request 'fetch_all' failed",
                details={"operation": "fetch_all"},
            ) from exc
        logger.debug("recipes_fetched", extra={"count": len(recipes)})
        return recipes
