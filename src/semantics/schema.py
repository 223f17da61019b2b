# Recipe record and related types
# src/semantics/schema.py

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple


# ---------------------------------------------------------------------------
# Recipe / crafting types
# ---------------------------------------------------------------------------

@dataclass
class Recipe:
    """
    Canonical recipe extracted from data.raw.recipe.

    - name: internal recipe name ("iron-gear-wheel")
    - ingredients: item/fluid name -> consumed quantity
    - results: item/fluid name -> produced quantity

    Quantities are stored exactly as the mod declared them (as floats);
    no difficulty scaling, probability or rounding is applied.
    """
    name: str
    ingredients: Dict[str, float] = field(default_factory=dict)
    results: Dict[str, float] = field(default_factory=dict)

    def io_names(self) -> Iterator[str]:
        """Every ingredient and result name, ingredients first."""
        yield from self.ingredients
        yield from self.results

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "ingredients": dict(self.ingredients),
            "results": dict(self.results),
        }


def format_quantity(amount: float) -> str:
    """Render 2.0 as "2" and 0.5 as "0.5" (like %g)."""
    return f"{amount:g}"


def sorted_io(io: Dict[str, float]) -> Iterator[Tuple[str, float]]:
    """Stable, name-sorted view of an ingredients/results mapping."""
    return iter(sorted(io.items()))
