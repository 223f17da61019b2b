# path: src/runtime/coordinator.py
"""
Two-phase mod loading.

    discover -> resolve -> settings pass (isolated context)
             -> primary context: bootstrap + settings
             -> core, base data.lua
             -> optional patch script
             -> every mod's data.lua in load order

Fatal: unresolvable dependencies, dependency cycles, a broken data loader.
Everything else (a failing data.lua, settings.lua or patch script) is
recorded in the RunReport and loading carries on with the next package.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

from mods.discovery import DATA_SCRIPT, discover_mods
from mods.resolver import resolve_load_order
from mods.schema import ModInfo, base_packages
from scripting.base import ContextFactory, ScriptContext, ScriptError

from .bootstrap import EngineSetup, bootstrap_context, extended_search_path, package_directories
from .report import RunReport, SkipReason
from .settings_pass import run_settings_pass, settings_global

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """
    Outcome of a full load.

    - load_order: every package in execution order, base packages first
    - settings: read-only settings snapshot fed to data scripts
    - context: primary context holding the populated data tree
    - loaded: names of packages whose data.lua ran successfully
    """
    load_order: List[ModInfo]
    settings: Mapping[str, Any]
    context: ScriptContext
    loaded: List[str] = field(default_factory=list)


class ModLoader:
    """
    Drives the settings pass and the data pass over one set of packages.
    """

    def __init__(
        self,
        game_data_dir: Path,
        mods_dir: Path,
        context_factory: ContextFactory,
        setup: Optional[EngineSetup] = None,
        patch_script: Optional[Path] = None,
        report: Optional[RunReport] = None,
    ) -> None:
        self.game_data_dir = Path(game_data_dir)
        self.mods_dir = Path(mods_dir)
        self.context_factory = context_factory
        self.setup = setup or EngineSetup()
        self.patch_script = patch_script
        self.report = report if report is not None else RunReport()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def load(self) -> LoadResult:
        """Discover, resolve and run every package."""
        base = base_packages(self.game_data_dir)
        discovered = discover_mods(self.mods_dir, self.report)
        ordered = resolve_load_order(discovered, base=base)
        return self.run(base, ordered)

    def run(self, base: List[ModInfo], ordered: List[ModInfo]) -> LoadResult:
        """
        Run both passes over already-resolved packages.

        `base` runs first and unconditionally; `ordered` must already be
        in dependency order.
        """
        visible = [m.name for m in base] + [m.name for m in ordered]

        settings = run_settings_pass(
            ordered,
            self.context_factory,
            self.setup,
            visible,
            report=self.report,
        )

        context = bootstrap_context(self.context_factory(), self.setup, visible)
        context.set_global("settings", settings_global(settings))

        loaded: List[str] = []
        for package in base:
            if self.load_package(context, package):
                loaded.append(package.name)

        self._run_patch(context)

        for mod in ordered:
            if self.load_package(context, mod):
                loaded.append(mod.name)

        logger.info("Loaded %d of %d packages", len(loaded), len(base) + len(ordered))
        return LoadResult(
            load_order=list(base) + list(ordered),
            settings=settings,
            context=context,
            loaded=loaded,
        )

    # ------------------------------------------------------------------
    # Per-package steps
    # ------------------------------------------------------------------

    def load_package(self, context: ScriptContext, mod: ModInfo) -> bool:
        """
        Run one package's data.lua with its directories on package.path.

        Returns False (and records the failure) if the script fails.
        """
        with extended_search_path(context, package_directories(mod.path)):
            try:
                context.run_file(mod.resource(DATA_SCRIPT))
            except ScriptError as exc:
                self.report.record(SkipReason.DATA_EXECUTION_FAILED, mod.name, str(exc))
                return False
        logger.info("Loaded mod %s from %s", mod.name, mod.path)
        return True

    def _run_patch(self, context: ScriptContext) -> None:
        if self.patch_script is None:
            return
        if not Path(self.patch_script).is_file():
            logger.warning("Patch script %s not found, skipping", self.patch_script)
            return
        try:
            context.run_file(self.patch_script)
        except ScriptError as exc:
            self.report.record(SkipReason.PATCH_EXECUTION_FAILED, str(self.patch_script), str(exc))
            return
        logger.info("Applied patch script %s", self.patch_script)


__all__ = [
    "LoadResult",
    "ModLoader",
]
