# src/env/loader.py
"""
YAML config loader.

config/extractor.yaml:

    game_data_dir: ../factorio-data-master
    mods_dir: ../mods
    language: en
    lualib_dirs: [core/lualib]               # relative to game_data_dir
    dataloader: core/lualib/dataloader.lua   # relative to game_data_dir
    patch_script: null                       # relative to the config file

Relative game_data_dir / mods_dir / patch_script paths resolve against the
config file's directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .schema import ExtractorConfig


PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG = CONFIG_ROOT / "extractor.yaml"

DEFAULT_LUALIB_DIRS = ["core/lualib"]
DEFAULT_DATALOADER = "core/lualib/dataloader.lua"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping; empty files load as {}."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _resolve(base: Path, value: Any, key: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config key '{key}' must be a non-empty path string.")
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve()


def _resolve_optional(base: Path, value: Any, key: str) -> Optional[Path]:
    if value is None:
        return None
    return _resolve(base, value, key)


def _resolve_list(base: Path, values: Any, key: str) -> List[Path]:
    if not isinstance(values, list):
        raise ValueError(f"Config key '{key}' must be a list of paths.")
    return [_resolve(base, v, key) for v in values]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def config_from_mapping(raw: Dict[str, Any], base_dir: Path) -> ExtractorConfig:
    """Build an ExtractorConfig from an already-parsed mapping."""
    if "game_data_dir" not in raw:
        raise ValueError("Config must define 'game_data_dir'.")

    game_data_dir = _resolve(base_dir, raw["game_data_dir"], "game_data_dir")
    mods_dir = _resolve(base_dir, raw.get("mods_dir", "mods"), "mods_dir")

    language = raw.get("language", "en")
    if not isinstance(language, str) or not language.strip():
        raise ValueError("Config key 'language' must be a non-empty string.")

    lualib_dirs = _resolve_list(
        game_data_dir, raw.get("lualib_dirs", DEFAULT_LUALIB_DIRS), "lualib_dirs"
    )
    dataloader = _resolve_optional(
        game_data_dir, raw.get("dataloader", DEFAULT_DATALOADER), "dataloader"
    )
    patch_script = _resolve_optional(base_dir, raw.get("patch_script"), "patch_script")

    return ExtractorConfig(
        game_data_dir=game_data_dir,
        mods_dir=mods_dir,
        language=language.strip(),
        lualib_dirs=lualib_dirs,
        dataloader=dataloader,
        patch_script=patch_script,
    )


def load_config(path: Optional[Path] = None) -> ExtractorConfig:
    """Main entry point: returns a fully resolved ExtractorConfig."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG
    raw = _load_yaml(config_path)
    return config_from_mapping(raw, base_dir=config_path.resolve().parent)


__all__ = [
    "DEFAULT_CONFIG",
    "config_from_mapping",
    "load_config",
]
