# src/app/pipeline.py
"""
End-to-end extraction: config -> load order -> data tree -> recipes + locale.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from env.schema import ExtractorConfig
from localization.overlay import LocaleTable, build_locale_table
from mods.schema import ModInfo
from runtime.bootstrap import EngineSetup
from runtime.coordinator import ModLoader
from runtime.report import RunReport
from scripting.base import ContextFactory
from semantics.db import RecipeDB
from semantics.schema import Recipe, format_quantity, sorted_io

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    load_order: List[ModInfo]
    recipes: RecipeDB
    locale: LocaleTable
    report: RunReport
    settings: Mapping[str, Any]
    elapsed: float

    def describe(self, recipe: Recipe) -> Dict[str, Any]:
        """Recipe as a JSON-ready dict with display names attached."""
        def _io(io: Dict[str, float]) -> List[Dict[str, Any]]:
            return [
                {"name": name, "display": self.locale.display_item(name), "amount": amount}
                for name, amount in sorted_io(io)
            ]

        return {
            "name": recipe.name,
            "display": self.locale.display("recipe", recipe.name),
            "ingredients": _io(recipe.ingredients),
            "results": _io(recipe.results),
        }

    def to_dict(self, limit: Optional[int] = None) -> Dict[str, Any]:
        recipes = self.recipes.recipes
        if limit is not None:
            recipes = recipes[:limit]
        return {
            "load_order": [m.name for m in self.load_order],
            "recipe_count": len(self.recipes),
            "elapsed_seconds": round(self.elapsed, 3),
            "recipes": [self.describe(r) for r in recipes],
            "report": self.report.to_dict(),
        }


def engine_setup(config: ExtractorConfig) -> EngineSetup:
    return EngineSetup(lualib_dirs=list(config.lualib_dirs), dataloader=config.dataloader)


def run_extraction(
    config: ExtractorConfig,
    context_factory: Optional[ContextFactory] = None,
) -> ExtractionResult:
    """
    Run a full extraction with `config`.

    `context_factory` defaults to the lupa-backed Lua context.

    Raises:
        DependencyError: a required dependency is missing or mods form a cycle
        ValueError: duplicate mod names
    """
    if context_factory is None:
        from scripting.lua import new_lua_context
        context_factory = new_lua_context

    started = time.perf_counter()
    report = RunReport()

    loader = ModLoader(
        game_data_dir=config.game_data_dir,
        mods_dir=config.mods_dir,
        context_factory=context_factory,
        setup=engine_setup(config),
        patch_script=config.patch_script,
        report=report,
    )
    loaded = loader.load()

    recipes = RecipeDB.from_context(loaded.context, report)
    locale = build_locale_table(loaded.load_order, config.language, report)

    elapsed = time.perf_counter() - started
    logger.info("found %d recipes in %.2fs", len(recipes), elapsed)
    return ExtractionResult(
        load_order=loaded.load_order,
        recipes=recipes,
        locale=locale,
        report=report,
        settings=loaded.settings,
        elapsed=elapsed,
    )


def format_recipe_line(result: ExtractionResult, recipe: Recipe) -> str:
    """Single-line "a + 2 b -> c" rendering with display names."""
    def _side(io: Dict[str, float]) -> str:
        parts = []
        for name, amount in sorted_io(io):
            label = result.locale.display_item(name)
            parts.append(label if amount == 1 else f"{format_quantity(amount)} {label}")
        return " + ".join(parts) or "(nothing)"

    return f"{_side(recipe.ingredients)} -> {_side(recipe.results)}"


__all__ = [
    "ExtractionResult",
    "engine_setup",
    "format_recipe_line",
    "run_extraction",
]
