"""Router exports for FastAPI composition."""

from . import categories, entries, health, recipes, summary

__all__ = ["categories", "entries", "health", "recipes", "summary"]
