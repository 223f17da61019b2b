# recipe extraction from the data tree
# src/semantics/recipes.py
"""
Normalize data.raw.recipe into Recipe records.

Mods describe recipes in several shapes, all of which must be accepted:

  ingredients / results placement:
    - top-level "ingredients"
    - "normal" difficulty sub-table when top-level ingredients are absent
    - "results" (list) or "result" (single) at top level, then in "normal"

  list entry encodings:
    - named:       { name = "iron-plate", amount = 2 }
    - positional:  { "iron-plate", 2 }
    - ranged:      { name = "x", amount_min = 1, amount_max = 3 }

  whole-field shortcuts:
    - bare string:            result = "iron-gear-wheel"   (quantity 1)
    - single named product:   result = { name = "x", amount = 3 }

A recipe whose name is missing or whose IO cannot be read is skipped and
recorded in the RunReport; extraction always continues with the rest.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from runtime.report import RunReport, SkipReason

from .schema import Recipe
from .value import Value, first_present

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class RecipeShapeError(ValueError):
    """A recipe entry could not be normalized."""

    reason: SkipReason = SkipReason.INVALID_ITEM_SHAPE


class MissingName(RecipeShapeError):
    reason = SkipReason.MISSING_NAME


class InvalidItemShape(RecipeShapeError):
    reason = SkipReason.INVALID_ITEM_SHAPE


# ---------------------------------------------------------------------------
# Item lists
# ---------------------------------------------------------------------------

def _item_amount(item: Value) -> Optional[float]:
    """
    Resolve the quantity of one IO entry.

    Named "amount" first, then positional index 2, then the midpoint of
    "amount_min"/"amount_max" for ranged products.
    """
    amount = first_present(item.get("amount"), item.at(2)).as_number()
    if amount is not None:
        return amount

    low = item.get("amount_min").as_number()
    high = item.get("amount_max").as_number()
    if low is not None and high is not None:
        return (low + high) / 2.0
    return None


def _parse_item(item: Value, field_name: str) -> tuple[str, float]:
    if not (item.is_mapping or item.is_sequence):
        raise InvalidItemShape(
            f"{field_name} entry must be a table, got {item.kind.value}: {item.raw!r}"
        )

    name = first_present(item.get("name"), item.at(1)).as_str()
    if name is None:
        raise InvalidItemShape(f"{field_name} entry has no name: {item.raw!r}")

    amount = _item_amount(item)
    if amount is None:
        raise InvalidItemShape(f"{field_name} entry {name!r} has no numeric amount")
    if amount < 0:
        raise InvalidItemShape(f"{field_name} entry {name!r} has negative amount {amount:g}")

    return name, amount


def parse_items(value: Value, field_name: str = "items") -> Dict[str, float]:
    """
    Convert an ingredients/results field into {name: amount}.

    Later entries with the same name overwrite earlier ones.

    Raises InvalidItemShape if the field is missing, is neither a string nor
    a table, or contains an entry that cannot be read.
    """
    if value.is_string:
        return {value.as_str(): 1.0}

    if value.is_mapping and value.get("name").is_string:
        # single product table in place of a list
        name, amount = _parse_item(value, field_name)
        return {name: amount}

    if not (value.is_mapping or value.is_sequence):
        raise InvalidItemShape(
            f"{field_name} must be a string or a table, got {value.kind.value}"
        )

    items: Dict[str, float] = {}
    for entry in value.elements():
        name, amount = _parse_item(entry, field_name)
        items[name] = amount
    return items


# ---------------------------------------------------------------------------
# Recipe entries
# ---------------------------------------------------------------------------

def normalize_recipe(entry: Value) -> Recipe:
    """
    Build a Recipe from one data.raw.recipe entry.

    Raises MissingName or InvalidItemShape.
    """
    name = entry.get("name").as_str()
    if name is None:
        raise MissingName("recipe entry has no string 'name'")

    variant = Value.MISSING
    ingredients = entry.get("ingredients")
    if ingredients.is_missing:
        variant = entry.get("normal")
        ingredients = variant.get("ingredients")

    results = first_present(entry.get("results"), entry.get("result"))
    if results.is_missing and variant.is_present:
        results = first_present(variant.get("results"), variant.get("result"))

    try:
        return Recipe(
            name=name,
            ingredients=parse_items(ingredients, "ingredients"),
            results=parse_items(results, "results"),
        )
    except InvalidItemShape as exc:
        raise InvalidItemShape(f"recipe {name!r}: {exc}") from exc


def extract_recipes(recipes: Value, report: Optional[RunReport] = None) -> List[Recipe]:
    """
    Normalize every entry of the recipe category (data.raw.recipe).

    Malformed entries are skipped and recorded in `report` (if given).
    Output order follows the tree's iteration order and carries no meaning.
    """
    out: List[Recipe] = []
    if recipes.is_sequence and not len(recipes):
        # an empty table converts as a sequence
        recipes = Value({})
    if not recipes.is_mapping:
        logger.warning("No recipe table found in data tree (got %s)", recipes.kind.value)
        return out

    for key, entry in recipes.items():
        try:
            out.append(normalize_recipe(entry))
        except RecipeShapeError as exc:
            if report is not None:
                report.record(exc.reason, str(key), str(exc))
            else:
                logger.warning("Skipping recipe %s: %s", key, exc)

    if report is not None:
        report.recipe_count = len(out)
    logger.info("Extracted %d recipes", len(out))
    return out


__all__ = [
    "RecipeShapeError",
    "MissingName",
    "InvalidItemShape",
    "parse_items",
    "normalize_recipe",
    "extract_recipes",
]
