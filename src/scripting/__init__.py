# scripting package
# src/scripting/__init__.py

"""
Script execution layer.

- ScriptContext protocol + ScriptError (scripting.base)
- LuaScriptContext (scripting.lua), not imported here; import it
  directly when a real Lua runtime is wanted.
"""

from __future__ import annotations

from .base import ContextFactory, ScriptContext, ScriptError, lua_string_literal

__all__ = [
    "ContextFactory",
    "ScriptContext",
    "ScriptError",
    "lua_string_literal",
]
