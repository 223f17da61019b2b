# src/localization/reader.py
"""
Reader for mod locale files (locale/<language>/*.cfg).

The format is INI-like:

    [item-name]
    iron-gear-wheel=Iron gear wheel

    [recipe-name]
    iron-gear-wheel=Iron gear wheel

Keys are case-sensitive, values are taken literally (no interpolation of
"%" or "__1__" placeholders), and keys appearing before the first section
header are collected under ROOT_SECTION.
"""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Dict


ROOT_SECTION = "__root__"
_DEFAULTS_SECTION = "__defaults__"


class LocaleReadError(ValueError):
    """A locale file could not be read or parsed."""


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        allow_no_value=True,
        delimiters=("=",),
        comment_prefixes=("#", ";"),
        empty_lines_in_values=False,
        default_section=_DEFAULTS_SECTION,
    )
    parser.optionxform = str  # type: ignore[assignment]
    return parser


def parse_locale(text: str, source: str = "<string>") -> Dict[str, Dict[str, str]]:
    """Parse locale text into {section: {key: value}}."""
    parser = _new_parser()
    try:
        parser.read_string(f"[{ROOT_SECTION}]\n{text}", source=source)
    except configparser.Error as exc:
        raise LocaleReadError(f"Cannot parse {source}: {exc}") from exc

    sections: Dict[str, Dict[str, str]] = {}
    for name in parser.sections():
        entries = {
            key: value
            for key, value in parser.items(name, raw=True)
            if value is not None
        }
        if entries:
            sections[name] = entries
    return sections


def read_locale_file(path: Path) -> Dict[str, Dict[str, str]]:
    """Read and parse one .cfg file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise LocaleReadError(f"Cannot read {path}: {exc}") from exc
    return parse_locale(text, source=str(path))


__all__ = [
    "ROOT_SECTION",
    "LocaleReadError",
    "parse_locale",
    "read_locale_file",
]
