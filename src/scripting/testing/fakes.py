# src/scripting/testing/fakes.py
"""
Test helpers for the scripting layer.

Provides:
- FakeScriptContext: in-memory ScriptContext for unit tests.
- FakeContextFactory: hands out FakeScriptContexts and remembers them.

Script files are Python callables registered by path; "running" a file
calls the handler with the context. The handler can read globals
(settings, mods) and add prototypes via `extend()`, which mimics
`data:extend{...}`.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from semantics.value import Value

from ..base import ScriptError


ScriptHandler = Callable[["FakeScriptContext"], None]
PathLike = Union[str, Path]

DEFAULT_PACKAGE_PATH = "./?.lua"

_LUA_STRING = r'"((?:[^"\\]|\\.)*)"'
_APPEND_PATH = re.compile(r"^\s*package\.path\s*=\s*package\.path\s*\.\.\s*" + _LUA_STRING + r"\s*$")
_SET_PATH = re.compile(r"^\s*package\.path\s*=\s*" + _LUA_STRING + r"\s*$")


def _unquote(body: str) -> str:
    return re.sub(r"\\(.)", lambda m: {"n": "\n", "r": "\r"}.get(m.group(1), m.group(1)), body)


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def _key(path: PathLike) -> str:
    return Path(path).as_posix()


class FakeScriptContext:
    """
    In-memory ScriptContext.

    Features:
    - Records every file and inline fragment executed.
    - Understands the two package.path fragments the loaders emit
      (append and assign); other fragments are recorded only.
    - Snapshots package.path at the time each file runs.
    """

    def __init__(self, files: Optional[Mapping[PathLike, ScriptHandler]] = None) -> None:
        self.globals: Dict[str, Any] = {"package": {"path": DEFAULT_PACKAGE_PATH}}
        self._files: Dict[str, ScriptHandler] = {_key(p): h for p, h in (files or {}).items()}
        self.executed_files: List[str] = []
        self.executed_strings: List[str] = []
        self.search_path_at_run: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # ScriptContext protocol
    # ------------------------------------------------------------------

    def set_global(self, name: str, value: Any) -> None:
        self.globals[name] = _plain(value)

    def run_file(self, path: PathLike) -> None:
        key = _key(path)
        self.executed_files.append(key)
        self.search_path_at_run[key] = self.package_path
        handler = self._files.get(key)
        if handler is None:
            raise ScriptError(f"cannot open {key}")
        try:
            handler(self)
        except ScriptError:
            raise
        except Exception as exc:
            raise ScriptError(f"{key}: {exc}") from exc

    def run_string(self, source: str) -> None:
        self.executed_strings.append(source)
        match = _APPEND_PATH.match(source)
        if match:
            self.package_path = self.package_path + _unquote(match.group(1))
            return
        match = _SET_PATH.match(source)
        if match:
            self.package_path = _unquote(match.group(1))

    def read_tree(self, *path: str) -> Value:
        node: Any = self.globals
        for key in path:
            if not isinstance(node, dict) or key not in node:
                return Value.MISSING
            node = node[key]
        return Value(copy.deepcopy(node))

    # ------------------------------------------------------------------
    # Helpers for handlers and assertions
    # ------------------------------------------------------------------

    def register(self, path: PathLike, handler: ScriptHandler) -> None:
        self._files[_key(path)] = handler

    @property
    def package_path(self) -> str:
        return self.globals.setdefault("package", {}).get("path", "")

    @package_path.setter
    def package_path(self, value: str) -> None:
        self.globals.setdefault("package", {})["path"] = value

    def extend(self, *prototypes: Mapping[str, Any]) -> None:
        """Equivalent of data:extend{...}: file prototypes under data.raw[type][name]."""
        raw = self.globals.setdefault("data", {}).setdefault("raw", {})
        for proto in prototypes:
            raw.setdefault(proto["type"], {})[proto["name"]] = _plain(proto)

    def setting(self, name: str) -> Any:
        """Value of settings.startup[name].value, or None."""
        startup = self.globals.get("settings", {}).get("startup", {})
        entry = startup.get(name)
        return entry.get("value") if isinstance(entry, dict) else None


@dataclass
class FakeContextFactory:
    """
    ContextFactory that builds FakeScriptContexts sharing one handler table.

    `created` keeps every context handed out, in order, so tests can
    inspect the isolated settings context as well as the primary one.
    """
    files: Dict[PathLike, ScriptHandler] = field(default_factory=dict)
    created: List[FakeScriptContext] = field(default_factory=list)

    def __call__(self) -> FakeScriptContext:
        ctx = FakeScriptContext(self.files)
        self.created.append(ctx)
        return ctx


__all__ = [
    "DEFAULT_PACKAGE_PATH",
    "FakeScriptContext",
    "FakeContextFactory",
]
