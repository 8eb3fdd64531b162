# 🧠 app/infrastructure/parsers/__init__.py
"""
🧠 Пакет інфраструктурних парсерів сторінок товару.

🔹 `SiteExtractor` — профіль конкретного маркетплейсу поверх таблиці селекторів.
🔹 `GenericExtractor` — фолбек з універсальних пулів.
🔹 `build_site_extractors` — збирає екстрактори для всіх відомих профілів.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from app.infrastructure.currency.price_normalizer import PriceNormalizer
from .extractors import SITE_PROFILES, build_selector_table
from .generic_extractor import GenericExtractor
from .site_extractor import SiteExtractor


def build_site_extractors(
    normalizer: PriceNormalizer,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, SiteExtractor]:
    """id маркетплейсу → `SiteExtractor` (із накладеними перевизначеннями селекторів)."""
    table = build_selector_table(overrides)
    return {
        marketplace_id: SiteExtractor(marketplace_id, SITE_PROFILES[marketplace_id], selectors, normalizer)
        for marketplace_id, selectors in table.items()
    }


__all__ = [
    "GenericExtractor",
    "SiteExtractor",
    "build_site_extractors",
]
