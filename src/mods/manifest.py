# src/mods/manifest.py
"""
Package manifest (info.json) reader.

Expected shape:

    {
      "name": "bobplates",
      "version": "1.1.6",
      "dependencies": ["base >= 1.1.0", "? angelsrefining", "?boblibrary"]
    }

Only the name and the dependency declarations are used. A declaration
starting with "?" is optional; the dependency name is the first token after
the marker. Version constraints are ignored.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from .schema import ModInfo


MANIFEST_FILENAME = "info.json"
OPTIONAL_MARKER = "?"


class ManifestError(ValueError):
    """info.json is missing, unparsable, or lacks required fields."""


def parse_dependency(raw: str) -> Optional[Tuple[str, bool]]:
    """
    Parse one dependency declaration into (name, required).

    Returns None for blank declarations.
    """
    text = raw.strip()
    required = True
    if text.startswith(OPTIONAL_MARKER):
        required = False
        text = text[len(OPTIONAL_MARKER):].strip()

    tokens = text.split()
    if not tokens:
        return None
    return tokens[0], required


def parse_dependencies(declarations: Iterable[Any]) -> Dict[str, bool]:
    """
    Parse a manifest's dependency list into {name: required}.

    Non-string declarations are ignored. If a name is declared twice the
    later declaration wins.
    """
    deps: Dict[str, bool] = {}
    for decl in declarations:
        if not isinstance(decl, str):
            continue
        parsed = parse_dependency(decl)
        if parsed is None:
            continue
        name, required = parsed
        deps[name] = required
    return deps


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must be a JSON object at top level.")
    return data


def read_manifest(mod_dir: Path) -> ModInfo:
    """
    Read <mod_dir>/info.json into a ModInfo.

    Raises ManifestError on any problem with the file.
    """
    path = Path(mod_dir) / MANIFEST_FILENAME
    info = _load_json(path)

    name = info.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ManifestError(f"Manifest {path} has no 'name'.")

    raw_deps = info.get("dependencies") or []
    if not isinstance(raw_deps, list):
        raise ManifestError(f"Manifest {path}: 'dependencies' must be a list.")

    return ModInfo(
        name=name.strip(),
        path=Path(mod_dir),
        dependencies=parse_dependencies(raw_deps),
    )


__all__ = [
    "MANIFEST_FILENAME",
    "ManifestError",
    "parse_dependency",
    "parse_dependencies",
    "read_manifest",
]
