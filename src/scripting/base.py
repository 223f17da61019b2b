# src/scripting/base.py
"""
Engine-neutral interface for executing mod scripts.

Everything above this layer (bootstrap, settings pass, data pass,
normalizer) talks to a ScriptContext only. Concrete engines:

- scripting.lua.LuaScriptContext            (lupa / Lua 5.4)
- scripting.testing.fakes.FakeScriptContext (in-memory, for tests)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Protocol

from semantics.value import Value


class ScriptError(RuntimeError):
    """A script or inline fragment failed to load or raised at runtime."""


class ScriptContext(Protocol):
    """One scripting-engine state; globals persist across calls."""

    def set_global(self, name: str, value: Any) -> None:
        """
        Bind a global. Mappings and sequences are converted recursively
        into engine tables; scalars are passed through.
        """
        ...

    def run_file(self, path: Path) -> None:
        """Execute a script file. Raises ScriptError on failure."""
        ...

    def run_string(self, source: str) -> None:
        """Execute an inline fragment. Raises ScriptError on failure."""
        ...

    def read_tree(self, *path: str) -> Value:
        """
        Read a global (or a nested field of one) as a Value.

        read_tree("data", "raw", "recipe") returns data.raw.recipe converted
        to Python natives, or Value.MISSING if any step is absent.
        """
        ...


ContextFactory = Callable[[], ScriptContext]


def lua_string_literal(text: str) -> str:
    """Quote `text` as a double-quoted Lua string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


__all__ = [
    "ScriptError",
    "ScriptContext",
    "ContextFactory",
    "lua_string_literal",
]
