# tests/conftest.py

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

import pytest

# Ensure src/ is on sys.path for test imports like `import mods`, `import runtime`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


def _write_mod(
    root: Path,
    name: str,
    dependencies: Iterable[str] = (),
    *,
    dirname: Optional[str] = None,
    data: Optional[str] = "",
    settings: Optional[str] = None,
    locale: Optional[Dict[str, Dict[str, str]]] = None,
    files: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Create <root>/<dirname or name>/ with info.json and the given scripts.

    data=None leaves out data.lua. locale is {language: {filename: text}};
    files is {relative path: text} for extra modules.
    """
    mod_dir = root / (dirname or name)
    mod_dir.mkdir(parents=True, exist_ok=True)
    (mod_dir / "info.json").write_text(
        json.dumps({"name": name, "version": "1.0.0", "dependencies": list(dependencies)}),
        encoding="utf-8",
    )
    if data is not None:
        (mod_dir / "data.lua").write_text(data, encoding="utf-8")
    if settings is not None:
        (mod_dir / "settings.lua").write_text(settings, encoding="utf-8")
    for language, cfgs in (locale or {}).items():
        lang_dir = mod_dir / "locale" / language
        lang_dir.mkdir(parents=True, exist_ok=True)
        for filename, text in cfgs.items():
            (lang_dir / filename).write_text(text, encoding="utf-8")
    for rel, text in (files or {}).items():
        target = mod_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return mod_dir


@pytest.fixture
def write_mod() -> Callable[..., Path]:
    return _write_mod


@pytest.fixture
def game_data_dir(tmp_path: Path) -> Path:
    """Game data directory with empty core/ and base/ packages."""
    root = tmp_path.resolve() / "game"
    for name in ("core", "base"):
        (root / name).mkdir(parents=True)
        (root / name / "data.lua").write_text("", encoding="utf-8")
    return root


@pytest.fixture
def mods_dir(tmp_path: Path) -> Path:
    root = tmp_path.resolve() / "mods"
    root.mkdir()
    return root
