# tests/test_semantics_recipes.py

import pytest

from runtime.report import RunReport, SkipReason
from semantics.recipes import (
    InvalidItemShape,
    MissingName,
    extract_recipes,
    normalize_recipe,
    parse_items,
)
from semantics.schema import Recipe
from semantics.value import Value


def _normalize(entry) -> Recipe:
    return normalize_recipe(Value(entry))


def test_named_ingredients_and_string_result() -> None:
    recipe = _normalize(
        {
            "name": "gear",
            "ingredients": [{"name": "plate", "amount": 2}],
            "results": "gear",
        }
    )
    assert recipe == Recipe("gear", {"plate": 2}, {"gear": 1})


def test_positional_entries() -> None:
    recipe = _normalize(
        {
            "name": "copper-cable",
            "ingredients": [["copper-plate", 4]],
            "result": "copper-cable",
        }
    )
    assert recipe.ingredients == {"copper-plate": 4}
    assert recipe.results == {"copper-cable": 1}


def test_normal_variant_used_when_top_level_ingredients_absent() -> None:
    recipe = _normalize(
        {
            "name": "engine-unit",
            "normal": {
                "ingredients": [["steel-plate", 1], ["iron-gear-wheel", 1], ["pipe", 2]],
                "result": "engine-unit",
            },
            "expensive": {
                "ingredients": [["steel-plate", 2]],
                "result": "engine-unit",
            },
        }
    )
    assert recipe.ingredients == {"steel-plate": 1, "iron-gear-wheel": 1, "pipe": 2}
    assert recipe.results == {"engine-unit": 1}


def test_top_level_results_win_over_normal_variant() -> None:
    recipe = _normalize(
        {
            "name": "x",
            "normal": {"ingredients": [["a", 1]], "result": "from-normal"},
            "results": [{"name": "from-top", "amount": 2}],
        }
    )
    assert recipe.results == {"from-top": 2}


def test_fluid_results_with_type_field() -> None:
    recipe = _normalize(
        {
            "name": "basic-oil-processing",
            "ingredients": [{"type": "fluid", "name": "crude-oil", "amount": 100}],
            "results": [{"type": "fluid", "name": "petroleum-gas", "amount": 45}],
        }
    )
    assert recipe.ingredients == {"crude-oil": 100}
    assert recipe.results == {"petroleum-gas": 45}


def test_single_named_product_and_ranged_amount() -> None:
    single = _normalize(
        {"name": "s", "ingredients": [], "result": {"name": "x", "amount": 3}}
    )
    ranged = _normalize(
        {
            "name": "r",
            "ingredients": [],
            "results": [{"name": "stone", "amount_min": 1, "amount_max": 4}],
        }
    )
    assert single.results == {"x": 3}
    assert ranged.results == {"stone": 2.5}


def test_mixed_table_entries() -> None:
    # Lua table with both positional and named fields
    items = parse_items(Value([{1: "iron-ore", 2: 5, "probability": 0.5}]))
    assert items == {"iron-ore": 5}


def test_fractional_amounts_kept_exact() -> None:
    assert parse_items(Value([{"name": "x", "amount": 0.5}])) == {"x": 0.5}


def test_missing_name_raises() -> None:
    with pytest.raises(MissingName):
        _normalize({"ingredients": [], "result": "x"})
    with pytest.raises(MissingName):
        _normalize({"name": 7, "ingredients": [], "result": "x"})


@pytest.mark.parametrize(
    "ingredients",
    [
        [5],
        ["iron-plate"],
        [{"amount": 2}],
        [{"name": "x"}],
        [{"name": "x", "amount": -1}],
        [{"name": "x", "amount": True}],
        [{"name": "x", "amount": "2"}],
        42,
    ],
)
def test_invalid_item_shapes_raise(ingredients) -> None:
    with pytest.raises(InvalidItemShape):
        _normalize({"name": "bad", "ingredients": ingredients, "result": "bad"})


def test_missing_results_raise_invalid_shape() -> None:
    with pytest.raises(InvalidItemShape, match="'nothing'"):
        _normalize({"name": "nothing", "ingredients": []})


def test_extract_recipes_skips_and_reports() -> None:
    tree = Value(
        {
            "gear": {"name": "gear", "ingredients": [["plate", 2]], "result": "gear"},
            "noname": {"ingredients": [], "result": "x"},
            "broken": {"name": "broken", "ingredients": [7], "result": "broken"},
        }
    )
    report = RunReport()

    recipes = extract_recipes(tree, report)

    assert [r.name for r in recipes] == ["gear"]
    assert report.recipe_count == 1
    assert [r.subject for r in report.by_reason(SkipReason.MISSING_NAME)] == ["noname"]
    assert [r.subject for r in report.by_reason(SkipReason.INVALID_ITEM_SHAPE)] == ["broken"]
    assert report.reason_counts() == {"invalid_item_shape": 1, "missing_name": 1}


def test_extract_recipes_without_recipe_table() -> None:
    assert extract_recipes(Value.MISSING) == []


def test_empty_recipe_table_is_not_a_warning(caplog) -> None:
    report = RunReport()
    # empty Lua tables read back as empty sequences
    assert extract_recipes(Value([]), report) == []
    assert report.recipe_count == 0
    assert "No recipe table" not in caplog.text
