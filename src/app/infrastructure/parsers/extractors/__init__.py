# 🧾 app/infrastructure/parsers/extractors/__init__.py
"""
🧾 Таблиця селекторів та first-match резолвер, спільні для сайт- і generic-екстракторів.

🔹 `FieldSelectors`, `first_match` — примітиви резолвера.
🔹 `SITE_SELECTORS`, `SITE_PROFILES`, `GENERIC_SELECTORS`, `build_selector_table` — декларативна таблиця.
"""

from __future__ import annotations

from .base import FIELD_NAMES, FieldSelectors, first_match, parse_selector, read_candidate		# 🧱 Резолвер
from .site_rules import (																		# 🗂️ Таблиця селекторів
    GENERIC_SELECTORS,
    SITE_PROFILES,
    SITE_SELECTORS,
    SiteProfile,
    build_selector_table,
)

__all__ = [
    "FIELD_NAMES",
    "FieldSelectors",
    "first_match",
    "parse_selector",
    "read_candidate",
    "GENERIC_SELECTORS",
    "SITE_PROFILES",
    "SITE_SELECTORS",
    "SiteProfile",
    "build_selector_table",
]
