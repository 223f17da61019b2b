# mods package
# src/mods/__init__.py

"""
Mod discovery and load-order resolution.

- discover_mods(mods_dir)      -> List[ModInfo]
- base_packages(game_data_dir) -> [core, base]
- resolve_load_order(mods)     -> List[ModInfo] in dependency order
"""

from __future__ import annotations

from .schema import BASE_PACKAGE_NAMES, ModInfo, base_packages
from .manifest import ManifestError, parse_dependency, read_manifest
from .discovery import discover_mods
from .resolver import (
    DependencyCycle,
    DependencyError,
    UnresolvedRequiredDependency,
    resolve_load_order,
)

__all__ = [
    "BASE_PACKAGE_NAMES",
    "ModInfo",
    "base_packages",
    "ManifestError",
    "parse_dependency",
    "read_manifest",
    "discover_mods",
    "DependencyCycle",
    "DependencyError",
    "UnresolvedRequiredDependency",
    "resolve_load_order",
]
