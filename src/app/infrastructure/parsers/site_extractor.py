# 🏪 app/infrastructure/parsers/site_extractor.py
"""
🏪 SiteExtractor — екстракція товару за профілем конкретного маркетплейсу.

🔹 Кожне поле резолвиться незалежно: перший селектор із непорожнім значенням перемагає.
🔹 Обовʼязкові поля — назва та ціна; решта деградує до None.
🔹 Ціна проходить через `PriceNormalizer` з id маркетплейсу як джерелом.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup	# 🥣 DOM-дерево сторінки

# 🔠 Системні імпорти
import logging	# 🧾 Логування сценаріїв
from typing import List, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from app.domain.products.entities import ExtractedProduct	# 🧾 Результат екстракції
from app.infrastructure.currency.price_normalizer import PriceNormalizer	# 💱 Нормалізація ціни
from app.shared.result import Err, ExtractionError, ExtractionErrorKind, Ok, Result
from app.shared.utils.logger import LOG_NAME	# 🏷️ Імʼя базового логера
from .extractors.base import FieldSelectors, _normalize_image_url, first_match	# 🎯 Резолвер
from .extractors.site_rules import SiteProfile	# 🏷️ Метадані маркетплейсу

logger = logging.getLogger(f"{LOG_NAME}.parser.site")	# 🧾 Модульний логер


# ================================
# 🏪 ЕКСТРАКТОР МАРКЕТПЛЕЙСУ
# ================================
class SiteExtractor:
    """🏪 Один екземпляр на профіль маркетплейсу."""

    def __init__(
        self,
        marketplace_id: str,
        profile: SiteProfile,
        selectors: FieldSelectors,
        normalizer: PriceNormalizer,
    ) -> None:
        self.marketplace_id = marketplace_id	# 🏷️ id з allow-list (джерело для конверсії)
        self.profile = profile	# 🏷️ Назва та політика підпису
        self.selectors = selectors	# 📋 Ланцюжки кандидатів
        self._normalizer = normalizer	# 💱 Нормалізатор цін

    @property
    def name(self) -> str:
        return self.profile.name

    def store_label(self, domain: Optional[str]) -> str:
        """Фіксований підпис профілю або хост без `www.`."""
        return self.profile.store_label or domain or self.marketplace_id

    def extract(self, soup: BeautifulSoup, *, domain: Optional[str] = None) -> Result[ExtractedProduct]:
        """
        Витягує товар зі сторінки.

        Returns:
            Ok(ExtractedProduct) або Err(MISSING_REQUIRED_FIELDS).
        """
        sel = self.selectors
        label = self.profile.name.lower()

        title = first_match(soup, sel.title, label=f"{label}.title")
        raw_price = first_match(soup, sel.price, label=f"{label}.price")
        price = self._normalizer.normalize(raw_price, source=self.marketplace_id) if raw_price else ""

        missing: List[str] = []
        if not title:
            missing.append("title")
        if not price:
            missing.append("price")
        if missing:
            logger.info(
                "🕳️ %s: не знайдено %s (title=%s, price=%r)",
                self.profile.name,
                ", ".join(missing),
                bool(title),
                raw_price,
            )
            return Err(
                ExtractionError(
                    ExtractionErrorKind.MISSING_REQUIRED_FIELDS,
                    (
                        f"Could not extract required product information from {self.profile.name} page. "
                        "The page structure may have changed."
                    ),
                    missing_fields=tuple(missing),
                )
            )

        product = ExtractedProduct(
            title=str(title),
            price=price,
            store_domain=self.store_label(domain),
            image_url=_normalize_image_url(first_match(soup, sel.image, default_attr="src", label=f"{label}.image")),
            color=first_match(soup, sel.color, label=f"{label}.color"),
            size=first_match(soup, sel.size, label=f"{label}.size"),
            availability=first_match(soup, sel.availability, label=f"{label}.availability"),
        )
        logger.debug("✅ %s: %s | %s", self.profile.name, product.title[:60], product.price)
        return Ok(product)


__all__ = ["SiteExtractor"]
