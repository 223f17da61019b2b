# src/semantics/db.py
"""
In-memory recipe index built from a loaded data tree.

Responsibility:
  - Run the normalizer over data.raw.recipe once
  - Provide simple lookups:
      * recipe by name
      * recipes producing an item/fluid
      * recipes consuming an item/fluid
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from runtime.report import RunReport

from .recipes import extract_recipes
from .schema import Recipe
from .value import Value

if TYPE_CHECKING:
    from scripting.base import ScriptContext


RECIPE_PATH = ("data", "raw", "recipe")


class RecipeDB:
    """
    Recipes keyed by name.

    If two entries normalize to the same recipe name the later one wins,
    same as data.raw itself.
    """

    def __init__(self, recipes: Iterable[Recipe]) -> None:
        self._by_name: Dict[str, Recipe] = {}
        for recipe in recipes:
            self._by_name[recipe.name] = recipe

    @classmethod
    def from_tree(cls, recipes: Value, report: Optional[RunReport] = None) -> "RecipeDB":
        return cls(extract_recipes(recipes, report))

    @classmethod
    def from_context(cls, context: ScriptContext, report: Optional[RunReport] = None) -> "RecipeDB":
        """Read data.raw.recipe from a loaded context and normalize it."""
        return cls.from_tree(context.read_tree(*RECIPE_PATH), report)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Optional[Recipe]:
        return self._by_name.get(name)

    @property
    def recipes(self) -> List[Recipe]:
        """All recipes sorted by name."""
        return [self._by_name[n] for n in sorted(self._by_name)]

    def producers_of(self, item: str) -> List[Recipe]:
        return [r for r in self.recipes if item in r.results]

    def consumers_of(self, item: str) -> List[Recipe]:
        return [r for r in self.recipes if item in r.ingredients]


__all__ = [
    "RECIPE_PATH",
    "RecipeDB",
]
