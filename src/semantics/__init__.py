# semantics package
# src/semantics/__init__.py

"""
Data-tree semantics: typed access to what the mod scripts produced.

- Value / first_present  -> tolerant view over the raw tree
- extract_recipes(tree)  -> List[Recipe]
- RecipeDB               -> recipe lookups by name / item
"""

from __future__ import annotations

from .schema import Recipe
from .value import Kind, Value, first_present
from .recipes import (
    InvalidItemShape,
    MissingName,
    RecipeShapeError,
    extract_recipes,
    normalize_recipe,
    parse_items,
)
from .db import RecipeDB


__all__ = [
    "Recipe",
    "Kind",
    "Value",
    "first_present",
    "InvalidItemShape",
    "MissingName",
    "RecipeShapeError",
    "extract_recipes",
    "normalize_recipe",
    "parse_items",
    "RecipeDB",
]
