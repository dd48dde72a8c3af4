"""Recipe catalog domain package."""

from .models import Recipe
from .store import (
    InMemoryRecipeTableGateway,
    PostgresRecipeTableGateway,
    RecipeCatalog,
    RecipeTableGateway,
    build_recipe_table_gateway,
)

__all__ = [
    "InMemoryRecipeTableGateway",
    "PostgresRecipeTableGateway",
    "Recipe",
    "RecipeCatalog",
    "RecipeTableGateway",
    "build_recipe_table_gateway",
]
