# src/scripting/lua.py
"""
ScriptContext backed by a real Lua 5.4 runtime (lupa).

The runtime is created without a string encoding: Lua strings come back
as bytes and are decoded here as UTF-8 with replacement, so a mod shipping
a malformed string cannot abort the read. Everything sent into Lua is
encoded to UTF-8 on the way in.

Lua tables are converted to Python natives when read back:
  - keys exactly 1..n (integers)  -> list
  - empty table                   -> list
  - anything else                 -> dict (string and integer keys kept)
Functions, userdata and coroutines are dropped (None in lists, omitted in
dicts), as are entries whose key is itself a table. Shared sub-tables are
converted once per occurrence; a table that contains itself is cut off at
the repeated reference.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from pathlib import Path
from typing import Any, Optional, Set

import lupa

from semantics.value import Value

from .base import ScriptError

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def _encode(text: str) -> bytes:
    return text.encode(ENCODING)


def _decode(raw: bytes) -> str:
    return raw.decode(ENCODING, errors="replace")


class LuaScriptContext:
    """One LuaRuntime; globals persist across run_file/run_string calls."""

    def __init__(self, runtime: Optional["lupa.LuaRuntime"] = None) -> None:
        self._lua = runtime or lupa.LuaRuntime(encoding=None, unpack_returned_tuples=True)
        self._globals = self._lua.globals()
        # identity without __tostring metamethods
        self._table_id = self._lua.eval(b"function(t) return string.format('%p', t) end")

    # ------------------------------------------------------------------
    # ScriptContext protocol
    # ------------------------------------------------------------------

    def set_global(self, name: str, value: Any) -> None:
        self._globals[_encode(name)] = self._to_lua(value)

    def run_file(self, path: Path) -> None:
        chunk = Path(path).as_posix()
        logger.debug("dofile %s", chunk)
        try:
            self._globals[b"dofile"](_encode(chunk))
        except lupa.LuaError as exc:
            raise ScriptError(f"{chunk}: {exc}") from exc

    def run_string(self, source: str) -> None:
        try:
            self._lua.execute(_encode(source))
        except lupa.LuaError as exc:
            raise ScriptError(f"inline chunk failed: {exc}") from exc

    def read_tree(self, *path: str) -> Value:
        node: Any = self._globals
        for key in path:
            if lupa.lua_type(node) != "table":
                return Value.MISSING
            node = node[_encode(key)]
            if node is None:
                return Value.MISSING
        return Value(self.to_python(node))

    # ------------------------------------------------------------------
    # Conversion helpers
    # ------------------------------------------------------------------

    def _to_lua(self, value: Any) -> Any:
        if isinstance(value, str):
            return _encode(value)
        if isinstance(value, Mapping):
            return self._lua.table_from(
                {self._to_lua(k): self._to_lua(v) for k, v in value.items()}
            )
        if isinstance(value, (list, tuple)):
            return self._lua.table_from([self._to_lua(v) for v in value])
        return value

    def to_python(self, obj: Any, _active: Optional[Set[str]] = None) -> Any:
        """Recursively convert a Lua value into Python natives."""
        kind = lupa.lua_type(obj)
        if kind is None:
            if isinstance(obj, bytes):
                return _decode(obj)
            return obj
        if kind != "table":
            return None

        active = _active if _active is not None else set()
        ident = self._table_id(obj)
        if ident in active:
            logger.debug("Self-referencing Lua table cut off at %s", ident)
            return None
        active.add(ident)
        try:
            pairs = [(self.to_python(k, active), v) for k, v in obj.items()]
            keys = [k for k, _ in pairs]
            if all(isinstance(k, int) and not isinstance(k, bool) for k in keys) and \
                    sorted(keys) == list(range(1, len(keys) + 1)):
                ordered = sorted(pairs, key=lambda kv: kv[0])
                return [self.to_python(v, active) for _, v in ordered]

            out = {}
            for key, raw in pairs:
                if key is None:
                    continue
                if not isinstance(key, Hashable):
                    logger.debug("Dropping entry with table key %r", key)
                    continue
                converted = self.to_python(raw, active)
                if converted is None:
                    continue
                out[key] = converted
            return out
        finally:
            active.discard(ident)


def new_lua_context() -> LuaScriptContext:
    """ContextFactory for the real engine."""
    return LuaScriptContext()


__all__ = [
    "LuaScriptContext",
    "new_lua_context",
]
