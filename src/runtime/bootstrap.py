# path: src/runtime/bootstrap.py
"""
Fresh-context setup shared by the settings pass and the data pass.

Every new ScriptContext gets, in order:
  1. package.path extended with the configured lualib directories
  2. `defines`  - the handful of engine constants mods read at load time
  3. `mods`     - visibility table, package name -> true
  4. the data loader, which creates `data.raw` and `data:extend`

Also home to the package.path helpers used while loading each mod.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

from scripting.base import ScriptContext, lua_string_literal

logger = logging.getLogger(__name__)


DEFINES: Dict[str, Any] = {
    "difficulty_settings": {
        "recipe_difficulty": {"normal": True},
        "technology_difficulty": {"normal": True},
    },
    "direction": {
        "north": 0,
        "east": 2,
        "south": 4,
        "west": 6,
    },
}

# Used when the game's own dataloader.lua is not available.
BUILTIN_DATALOADER = """
data = data or {}
data.raw = data.raw or {}

function data:extend(otherdata)
  if type(otherdata) ~= "table" then
    error("Invalid prototype array: " .. tostring(otherdata))
  end
  for _, e in ipairs(otherdata) do
    if not e.type or not e.name then
      error("Missing name or type in prototype definition")
    end
    local t = self.raw[e.type]
    if t == nil then
      t = {}
      self.raw[e.type] = t
    end
    t[e.name] = e
  end
end
"""


@dataclass
class EngineSetup:
    """
    Engine-level inputs for bootstrapping a context.

    - lualib_dirs: directories appended to package.path up front
    - dataloader: path to the game's dataloader.lua (None = built-in loader)
    """
    lualib_dirs: List[Path] = field(default_factory=list)
    dataloader: Optional[Path] = None


# ---------------------------------------------------------------------------
# package.path helpers
# ---------------------------------------------------------------------------

def search_path_entry(directory: Path) -> str:
    """Lua require() template for modules directly inside `directory`."""
    return f"{Path(directory).as_posix()}/?.lua"


def append_search_path(context: ScriptContext, directory: Path) -> None:
    fragment = lua_string_literal(";" + search_path_entry(directory))
    context.run_string(f"package.path = package.path .. {fragment}")


def package_directories(root: Path) -> List[Path]:
    """`root` followed by every subdirectory below it, sorted."""
    root = Path(root)
    if not root.is_dir():
        return [root]
    return [root] + sorted(p for p in root.rglob("*") if p.is_dir())


@contextmanager
def extended_search_path(context: ScriptContext, directories: Iterable[Path]) -> Iterator[None]:
    """
    Append `directories` to package.path for the duration of the block.

    The previous package.path is put back on exit, including when the
    block raises.
    """
    saved = context.read_tree("package", "path").as_str()
    for directory in directories:
        append_search_path(context, directory)
    try:
        yield
    finally:
        if saved is not None:
            context.run_string(f"package.path = {lua_string_literal(saved)}")


# ---------------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------------

def bootstrap_context(
    context: ScriptContext,
    setup: EngineSetup,
    visible_mods: Iterable[str],
) -> ScriptContext:
    """
    Prepare a fresh context for running mod scripts.

    `visible_mods` populates the `mods` global; mods use it to check
    whether another package is installed.

    A failing data loader raises ScriptError; without `data` no mod can
    load, so that is fatal for the run.
    """
    for directory in setup.lualib_dirs:
        append_search_path(context, directory)

    context.set_global("defines", DEFINES)
    context.set_global("mods", {name: True for name in visible_mods})

    if setup.dataloader is not None and Path(setup.dataloader).is_file():
        context.run_file(setup.dataloader)
    else:
        if setup.dataloader is not None:
            logger.warning("Data loader %s not found, using built-in loader", setup.dataloader)
        context.run_string(BUILTIN_DATALOADER)
    return context


__all__ = [
    "DEFINES",
    "BUILTIN_DATALOADER",
    "EngineSetup",
    "search_path_entry",
    "append_search_path",
    "package_directories",
    "extended_search_path",
    "bootstrap_context",
]
