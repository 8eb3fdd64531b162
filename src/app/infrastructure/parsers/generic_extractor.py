# 🧭 app/infrastructure/parsers/generic_extractor.py
"""
🧭 GenericExtractor — фолбек-екстракція з універсальних пулів селекторів.

🔹 Назва: перший текст довший за 5 символів.
🔹 Ціна: перший текст, що містить `₹`, цифру, кому або крапку.
🔹 Зображення: перше значення, що починається з `http` або `//`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup	# 🥣 DOM-дерево сторінки

# 🔠 Системні імпорти
import logging	# 🧾 Логування сценаріїв
import re	# 🧪 Пошук числових патернів
from typing import Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from app.domain.products.entities import ExtractedProduct	# 🧾 Результат екстракції
from app.infrastructure.currency.price_normalizer import PriceNormalizer	# 💱 Нормалізація ціни
from app.shared.result import Err, ExtractionError, ExtractionErrorKind, Ok, Result
from app.shared.utils.logger import LOG_NAME	# 🏷️ Імʼя базового логера
from .extractors.base import FieldSelectors, _normalize_image_url, first_match	# 🎯 Резолвер
from .extractors.site_rules import GENERIC_SELECTORS	# 🧭 Універсальні пули

logger = logging.getLogger(f"{LOG_NAME}.parser.generic")	# 🧾 Модульний логер

MIN_TITLE_LEN = 5	# 🏷️ Коротші тексти не вважаються назвою
_PRICE_HINT = re.compile(r"[₹\d,.]")	# 💰 Хоча б один «ціновий» символ


def _is_title(text: str) -> bool:
    return len(text) > MIN_TITLE_LEN


def _is_price(text: str) -> bool:
    return bool(_PRICE_HINT.search(text))


def _is_image(src: str) -> bool:
    return src.startswith("http") or src.startswith("//")


# ================================
# 🧭 УНІВЕРСАЛЬНИЙ ЕКСТРАКТОР
# ================================
class GenericExtractor:
    """🧭 Працює для будь-якого домену; ціну не конвертує."""

    def __init__(self, normalizer: PriceNormalizer, selectors: Optional[FieldSelectors] = None) -> None:
        self._normalizer = normalizer	# 💱 Нормалізатор цін
        self.selectors = selectors or GENERIC_SELECTORS	# 📋 Пули кандидатів

    def extract(self, soup: BeautifulSoup, domain: str) -> Result[ExtractedProduct]:
        sel = self.selectors
        title = first_match(soup, sel.title, accept=_is_title, label="generic.title")
        raw_price = first_match(soup, sel.price, accept=_is_price, label="generic.price")
        price = self._normalizer.normalize(raw_price) if raw_price else ""
        image = first_match(soup, sel.image, default_attr="src", accept=_is_image, label="generic.image")

        logger.debug(
            "🧭 Generic для %s: title=%s price=%s image=%s",
            domain,
            "found" if title else "missing",
            "found" if price else "missing",
            "found" if image else "missing",
        )

        if not title or not price:
            missing = tuple(name for name, value in (("title", title), ("price", price)) if not value)
            return Err(
                ExtractionError(
                    ExtractionErrorKind.MISSING_REQUIRED_FIELDS,
                    f"Generic extraction failed - Could not find {' and '.join(missing)} on the page",
                    missing_fields=missing,
                )
            )

        return Ok(
            ExtractedProduct(
                title=str(title),
                price=price,
                store_domain=domain,
                image_url=_normalize_image_url(image),
            )
        )


__all__ = ["GenericExtractor"]
