"""Shared API dependencies."""

from __future__ import annotations

from functools import lru_cache

from ..config import Settings, load_settings
from ..domain.ledger import (
    EntryStoreClient,
    LedgerState,
    build_entry_table_gateway,
)
from ..domain.recipes import RecipeCatalog, build_recipe_table_gateway

__all__ = [
    "get_entry_store_client",
    "get_ledger_state",
    "get_recipe_catalog",
    "get_settings",
]


@lru_cache()
def get_settings() -> Settings:
    """Settings loaded once per process."""

    return load_settings()


@lru_cache()
def _entry_store_client_singleton() -> EntryStoreClient:
    settings = get_settings()
    gateway = build_entry_table_gateway(
        table_name=settings.store.entries_table,
        prefer_postgres=settings.store.prefer_postgres,
        fallback_to_memory=settings.store.fallback_to_memory,
    )
    return EntryStoreClient(gateway)


def get_entry_store_client() -> EntryStoreClient:
    """Return the process-wide Entry Store client."""

    return _entry_store_client_singleton()


@lru_cache()
def _ledger_state_singleton() -> LedgerState:
    settings = get_settings()
    return LedgerState(
        get_entry_store_client(),
        demo_fallback=settings.ledger.demo_fallback,
    )


def get_ledger_state() -> LedgerState:
    """Return the ledger state container shared by the entry routes."""

    return _ledger_state_singleton()


@lru_cache()
def _recipe_catalog_singleton() -> RecipeCatalog:
    settings = get_settings()
    gateway = build_recipe_table_gateway(
        table_name=settings.store.recipes_table,
        prefer_postgres=settings.store.prefer_postgres,
        fallback_to_memory=settings.store.fallback_to_memory,
    )
    return RecipeCatalog(gateway)


def get_recipe_catalog() -> RecipeCatalog:
    return _recipe_catalog_singleton()
