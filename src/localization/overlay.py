# src/localization/overlay.py
"""
Locale overlay: internal names -> display names.

Built by scanning every package's locale/<language>/*.cfg in load order;
for each category the "<category>-name" section is merged in, later
packages overwriting earlier ones. Lookups never fail: an unknown name
displays as itself.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from mods.schema import ModInfo
from runtime.report import RunReport, SkipReason

from .reader import LocaleReadError, read_locale_file

logger = logging.getLogger(__name__)


LOCALE_CATEGORIES = ("entity", "item", "fluid", "recipe")
LOCALE_DIR = "locale"


def section_for(category: str) -> str:
    return f"{category}-name"


class LocaleTable:
    """category -> internal name -> display string."""

    def __init__(self, categories: Sequence[str] = LOCALE_CATEGORIES) -> None:
        self._entries: Dict[str, Dict[str, str]] = {c: {} for c in categories}

    def set(self, category: str, name: str, display: str) -> None:
        if category not in self._entries:
            raise KeyError(f"Unknown locale category '{category}'")
        self._entries[category][name] = display

    def merge_sections(self, sections: Dict[str, Dict[str, str]]) -> int:
        """Overlay parsed locale sections; returns number of entries applied."""
        applied = 0
        for category in self._entries:
            for name, display in sections.get(section_for(category), {}).items():
                self._entries[category][name] = display
                applied += 1
        return applied

    def lookup(self, category: str, name: str) -> Optional[str]:
        return self._entries.get(category, {}).get(name)

    def display(self, category: str, name: str) -> str:
        """Display string for `name`, or `name` itself when untranslated."""
        found = self.lookup(category, name)
        return found if found is not None else name

    def display_item(self, name: str) -> str:
        """Display name for a recipe ingredient/result (item, then fluid)."""
        for category in ("item", "fluid"):
            found = self.lookup(category, name)
            if found is not None:
                return found
        return name

    def __len__(self) -> int:
        return sum(len(v) for v in self._entries.values())


def locale_files(mod_path: Path, language: str) -> Iterable[Path]:
    locale_dir = Path(mod_path) / LOCALE_DIR / language
    if not locale_dir.is_dir():
        return []
    return sorted(locale_dir.glob("*.cfg"))


def build_locale_table(
    mods: Iterable[ModInfo],
    language: str = "en",
    report: Optional[RunReport] = None,
) -> LocaleTable:
    """
    Build the overlay from `mods`, which must be in load order.

    Missing locale directories and sections contribute nothing; unreadable
    files are reported and skipped.
    """
    table = LocaleTable()
    for mod in mods:
        for path in locale_files(mod.path, language):
            try:
                sections = read_locale_file(path)
            except LocaleReadError as exc:
                if report is not None:
                    report.record(SkipReason.LOCALE_UNREADABLE, str(path), str(exc))
                else:
                    logger.warning("Skipping locale file %s: %s", path, exc)
                continue
            applied = table.merge_sections(sections)
            logger.debug("Locale %s from %s: %d names", path.name, mod.name, applied)

    logger.info("Locale table (%s): %d names", language, len(table))
    return table


__all__ = [
    "LOCALE_CATEGORIES",
    "LocaleTable",
    "build_locale_table",
    "locale_files",
    "section_for",
]
