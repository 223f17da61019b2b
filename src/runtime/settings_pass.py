# path: src/runtime/settings_pass.py
"""
Settings pass: collect default mod settings before any data script runs.

Runs every mod's settings.lua in an isolated context, then flattens the
four setting prototype categories into one {setting_name: default_value}
snapshot. The snapshot is what data scripts see as
settings.startup[name].value.

Category identity is dropped by the flattening; a name declared in two
categories keeps the default of the category scanned last (string, bool,
int, double) and a warning is logged.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

from mods.schema import ModInfo
from scripting.base import ContextFactory, ScriptError
from semantics.value import Value, first_present

from .bootstrap import EngineSetup, append_search_path, bootstrap_context
from .report import RunReport, SkipReason

logger = logging.getLogger(__name__)


SETTINGS_SCRIPT = "settings.lua"

SETTING_CATEGORIES = (
    "string-setting",
    "bool-setting",
    "int-setting",
    "double-setting",
)


def flatten_settings(raw: Value) -> Dict[str, Any]:
    """
    Flatten data.raw's setting categories into {name: default_value}.

    The setting's own "name" field is used, falling back to its table key.
    Settings without a scalar default_value are left out.
    """
    values: Dict[str, Any] = {}
    origin: Dict[str, str] = {}

    for category in SETTING_CATEGORIES:
        for key, entry in raw.get(category).items():
            name = first_present(entry.get("name"), Value(key)).as_str()
            if name is None:
                continue

            default = entry.get("default_value").as_scalar()
            if default is None:
                logger.debug("Setting %s (%s) has no default_value", name, category)
                continue

            previous = origin.get(name)
            if previous is not None and previous != category:
                logger.warning(
                    "Setting %r declared as %s and %s; keeping the %s default",
                    name, previous, category, category,
                )
            values[name] = default
            origin[name] = category

    return values


def settings_global(snapshot: Mapping[str, Any]) -> Dict[str, Any]:
    """Shape a snapshot as the `settings` global: startup[name].value."""
    return {"startup": {name: {"value": value} for name, value in snapshot.items()}}


def run_settings_pass(
    mods: Iterable[ModInfo],
    context_factory: ContextFactory,
    setup: EngineSetup,
    visible_mods: Iterable[str],
    report: Optional[RunReport] = None,
) -> Mapping[str, Any]:
    """
    Execute every mod's settings.lua and return the read-only snapshot.

    Each mod's directory is appended to package.path before its script runs
    and stays there for the rest of the pass. A missing settings.lua is
    normal; a failing one is reported and the pass continues.
    """
    context = bootstrap_context(context_factory(), setup, visible_mods)

    for mod in mods:
        append_search_path(context, mod.path)

        script = mod.resource(SETTINGS_SCRIPT)
        if not script.is_file():
            continue

        try:
            context.run_file(script)
        except ScriptError as exc:
            if report is not None:
                report.record(SkipReason.SETTINGS_EXECUTION_FAILED, mod.name, str(exc))
            else:
                logger.warning("Settings for %s failed: %s", mod.name, exc)
            continue
        logger.debug("Ran settings for %s", mod.name)

    snapshot = flatten_settings(context.read_tree("data", "raw"))
    logger.info("Collected %d setting defaults", len(snapshot))
    return MappingProxyType(snapshot)


__all__ = [
    "SETTINGS_SCRIPT",
    "SETTING_CATEGORIES",
    "flatten_settings",
    "settings_global",
    "run_settings_pass",
]
