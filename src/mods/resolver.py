# src/mods/resolver.py
"""
Dependency resolution for discovered mods.

Strategy:
  1. Known names = base packages (core, base) + discovered mods.
  2. Validate each mod's declared dependencies against the known names:
       - required and unknown  -> UnresolvedRequiredDependency (fatal)
       - optional and unknown  -> the dependency is dropped from the mod
  3. Build a DAG (dependency -> dependent). Base packages are treated as
     already loaded, so edges to them are left out.
  4. Kahn's algorithm with a name-ordered ready set
     (networkx.lexicographical_topological_sort): every dependency comes
     before its dependents and ties are broken by ascending name, so the
     same input always yields the same order.
  5. If no order exists the remaining mods form a cycle -> DependencyCycle.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

import networkx as nx

from .schema import BASE_PACKAGE_NAMES, ModInfo

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class DependencyError(Exception):
    """Base class for fatal load-order problems."""


class UnresolvedRequiredDependency(DependencyError):
    """A mod requires a package that is not installed."""

    def __init__(self, mod_name: str, dependency: str) -> None:
        self.mod_name = mod_name
        self.dependency = dependency
        super().__init__(
            f"Mod '{mod_name}' requires missing dependency '{dependency}'"
        )


class DependencyCycle(DependencyError):
    """Mods depend on each other in a loop; no load order exists."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = list(cycle)
        loop = " -> ".join(self.cycle + self.cycle[:1])
        super().__init__(f"Dependency cycle between mods: {loop}")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _check_unique(mods: Iterable[ModInfo], base_names: Iterable[str]) -> Dict[str, ModInfo]:
    by_name: Dict[str, ModInfo] = {}
    reserved = set(base_names)
    for mod in mods:
        if mod.name in reserved:
            raise ValueError(f"Mod '{mod.name}' at {mod.path} shadows a base package.")
        if mod.name in by_name:
            raise ValueError(
                f"Duplicate mod name '{mod.name}' in '{mod.path}' "
                f"(already found in '{by_name[mod.name].path}')."
            )
        by_name[mod.name] = mod
    return by_name


def validate_dependencies(
    mods: Iterable[ModInfo],
    known_names: Iterable[str],
) -> None:
    """
    Check every declared dependency against `known_names`.

    Optional dependencies on unknown packages are removed from the mod's
    dependency map in place. A required dependency on an unknown package
    raises UnresolvedRequiredDependency.
    """
    known = set(known_names)
    for mod in sorted(mods, key=lambda m: m.name):
        for dep, required in sorted(mod.dependencies.items()):
            if dep in known:
                continue
            if required:
                raise UnresolvedRequiredDependency(mod.name, dep)
            logger.debug("Dropping optional dependency %s -> %s (not installed)", mod.name, dep)
            del mod.dependencies[dep]


# ---------------------------------------------------------------------------
# Graph + ordering
# ---------------------------------------------------------------------------

def build_dependency_graph(
    mods: Iterable[ModInfo],
    preloaded: Iterable[str] = BASE_PACKAGE_NAMES,
) -> nx.DiGraph:
    """
    Build a dependency DAG with an edge dependency -> dependent.

    Every mod is a node, even without edges. Dependencies on `preloaded`
    packages are omitted since those are loaded before anything else.
    """
    skip = set(preloaded)
    graph = nx.DiGraph()
    mods = list(mods)
    for mod in mods:
        graph.add_node(mod.name)
    for mod in mods:
        for dep in mod.dependencies:
            if dep in skip:
                continue
            graph.add_edge(dep, mod.name)
    return graph


def resolve_load_order(
    mods: Iterable[ModInfo],
    base: Optional[Iterable[ModInfo]] = None,
) -> List[ModInfo]:
    """
    Return the discovered mods in a valid load order.

    Args:
        mods: discovered mods (base packages excluded)
        base: base packages; defaults to the names in BASE_PACKAGE_NAMES

    Raises:
        ValueError: duplicate mod names, or a mod named like a base package
        UnresolvedRequiredDependency: required dependency not installed
        DependencyCycle: mods depend on each other in a loop
    """
    base_names = [b.name for b in base] if base is not None else list(BASE_PACKAGE_NAMES)

    by_name = _check_unique(mods, base_names)
    ordered_input = sorted(by_name.values(), key=lambda m: m.name)

    validate_dependencies(ordered_input, known_names=list(base_names) + list(by_name))

    graph = build_dependency_graph(ordered_input, preloaded=base_names)
    try:
        names = list(nx.lexicographical_topological_sort(graph))
    except nx.NetworkXUnfeasible:
        cycle_edges = nx.find_cycle(graph)
        raise DependencyCycle([u for u, _ in cycle_edges]) from None

    order = [by_name[name] for name in names]
    logger.info("Resolved load order: %s", ", ".join(names) or "(no mods)")
    return order


__all__ = [
    "DependencyError",
    "UnresolvedRequiredDependency",
    "DependencyCycle",
    "validate_dependencies",
    "build_dependency_graph",
    "resolve_load_order",
]
