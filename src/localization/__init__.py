# localization package
# src/localization/__init__.py

"""
Display names from mod locale files.

- build_locale_table(mods, language) -> LocaleTable
- LocaleTable.display(category, name) never fails
"""

from __future__ import annotations

from .reader import LocaleReadError, parse_locale, read_locale_file
from .overlay import LOCALE_CATEGORIES, LocaleTable, build_locale_table

__all__ = [
    "LocaleReadError",
    "parse_locale",
    "read_locale_file",
    "LOCALE_CATEGORIES",
    "LocaleTable",
    "build_locale_table",
]
