"""Recipe catalog: gateways, async fetch and the list endpoint."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest
import sqlalchemy as sa
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.app.api.dependencies import get_recipe_catalog
from backend.app.api.routers import recipes as recipes_router
from backend.app.domain.errors import StoreUnavailableError
from backend.app.domain.recipes import (
    InMemoryRecipeTableGateway,
    PostgresRecipeTableGateway,
    Recipe,
    RecipeCatalog,
)
from backend.app.infra.metrics import InMemoryMetricsClient
from tests.helpers.ledger_tables import build_sqlite_engine, create_recipes_table

pytestmark = [pytest.mark.recipes]

RECIPES = [
    Recipe(1, "Pancakes", "Fluffy", datetime(2025, 11, 1, 8, 0, tzinfo=timezone.utc)),
    Recipe(2, "Soup", None, None),
    Recipe(3, "Curry", "Spicy", datetime(2025, 11, 20, 18, 45, tzinfo=timezone.utc)),
]


class BrokenRecipeGateway:
    def select_all_ordered(self):
        raise sa.exc.OperationalError("SELECT", {}, Exception("down"))


def _catalog(gateway, metrics=None):
    return RecipeCatalog(gateway, metrics=metrics or InMemoryMetricsClient())


def _build_client(catalog: RecipeCatalog) -> TestClient:
    app = FastAPI()
    app.include_router(recipes_router.router)
    app.dependency_overrides[get_recipe_catalog] = lambda: catalog
    return TestClient(app)


def test_in_memory_gateway_orders_newest_first_undated_last():
    ordered = InMemoryRecipeTableGateway(RECIPES).select_all_ordered()

    assert [recipe.name for recipe in ordered] == ["Curry", "Pancakes", "Soup"]


def test_sqlite_gateway_reads_rows():
    engine = build_sqlite_engine()
    table = create_recipes_table(engine)
    with engine.begin() as conn:
        conn.execute(
            sa.insert(table),
            [
                {"name": "Pancakes", "description": "", "date_created": datetime(2025, 11, 1, 8, 0)},
                {"name": "Soup", "description": None, "date_created": None},
                {"name": "Curry", "description": "Spicy", "date_created": datetime(2025, 11, 20, 18, 45)},
            ],
        )

    recipes = PostgresRecipeTableGateway(engine, table=table).select_all_ordered()

    assert [recipe.name for recipe in recipes] == ["Curry", "Pancakes", "Soup"]
    assert recipes[0].date_created == datetime(2025, 11, 20, 18, 45, tzinfo=timezone.utc)
    assert recipes[1].description is None
    assert recipes[2].date_created is None


def test_catalog_fetch_all_counts_requests():
    metrics = InMemoryMetricsClient()

    recipes = asyncio.run(_catalog(InMemoryRecipeTableGateway(RECIPES), metrics).fetch_all())

    assert len(recipes) == 3
    assert metrics.counters["recipe_store_fetch_all_total"] == 1


def test_catalog_failure_raises_unavailable():
    metrics = InMemoryMetricsClient()

    with pytest.raises(StoreUnavailableError):
        asyncio.run(_catalog(BrokenRecipeGateway(), metrics).fetch_all())

    assert metrics.counters["recipe_store_fetch_all_failed_total"] == 1


def test_list_recipes_endpoint():
    client = _build_client(_catalog(InMemoryRecipeTableGateway(RECIPES)))

    response = client.get("/api/recipes")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["items"][0]["name"] == "Curry"
    assert body["items"][0]["display_date"] == "Nov 20, 2025, 6:45 PM"
    assert body["items"][2]["display_date"] is None


def test_list_recipes_empty_store():
    body = _build_client(_catalog(InMemoryRecipeTableGateway())).get("/api/recipes").json()

    assert body == {"items": [], "total": 0}


def test_list_recipes_failure_returns_503_without_sample_data():
    client = _build_client(_catalog(BrokenRecipeGateway()))

    response = client.get("/api/recipes")

    assert response.status_code == 503
    body = response.json()
    assert "items" not in body
    assert body["detail"]["error_code"] == "LEDGER-STORE-UNAVAILABLE"
