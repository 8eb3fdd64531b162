# 📦 app/config/setup/container.py
"""
📦 Контейнер залежностей cart aggregator.

🔹 Створює сервіси в правильному порядку DI
🔹 Інкапсулює конфігурацію мережевого клієнта, парсерів та валют
🔹 Дає єдину точку доступу до екстракції, сховища та обробки помилок
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from decimal import Decimal, InvalidOperation                            # 🪙 Конвертація курсу
from typing import TYPE_CHECKING, Any, Mapping, Optional                 # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту

# 🚨 Обробка помилок
from app.errors.exception_handler_service import ExceptionHandlerService  # 🛡️ Менеджер винятків
from app.errors.strategies import HttpxErrorStrategy, WerkzeugErrorStrategy  # 🧱 Набір стратегій помилок

# 📦 Інфраструктура
from app.infrastructure.currency.price_normalizer import (               # 💱 Нормалізація цін
    DEFAULT_USD_TO_INR,
    PriceNormalizer,
)
from app.infrastructure.data_storage.cart_store import InMemoryCartStore  # 🛒 Сховище кошика
from app.infrastructure.parsers import GenericExtractor, build_site_extractors  # 🧠 Екстрактори
from app.infrastructure.services.product_extraction_service import ProductExtractionService  # 🧠 Оркестратор
from app.infrastructure.url.marketplace_classifier import MarketplaceClassifier  # 🔗 Allow-list
from app.infrastructure.web.page_fetcher import PageFetcher              # 🌍 HTTP-клієнт
from app.shared.utils.logger import LOG_NAME, init_logging_from_config   # 🧾 Конфіг логування

if TYPE_CHECKING:
    from app.config.config_service import ConfigService                  # 🗂️ Тип під час перевірки
    from app.domain.products.interfaces import ICartStore                 # 📋 Контракт сховища

logger = logging.getLogger(LOG_NAME)                                     # 🧾 Модульний логер контейнера


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _float_or_default(value: Any, default: float) -> float:
    """
    Повертає додатне float-значення або запасне, якщо каст неможливий.
    """
    if value is None:                                                    # 🚫 Значення відсутнє
        return default
    try:
        coerced = float(value)
    except (TypeError, ValueError):                                      # ⚠️ Неможливо привести до float
        return default
    return coerced if coerced > 0 else default


def _int_or_default(value: Any, default: int) -> int:
    """
    Повертає ціле число або запасне значення, якщо каст неможливий.
    """
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _safe_rate(value: Any) -> Decimal:
    """Курс USD→INR як Decimal; невалідне або недодатне значення → дефолт."""
    try:
        rate = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        logger.warning("⚠️ Невалідний курс USD→INR %r, беремо %s", value, DEFAULT_USD_TO_INR)
        return DEFAULT_USD_TO_INR
    if not rate.is_finite() or rate <= 0:
        logger.warning("⚠️ Курс USD→INR має бути додатним (%r), беремо %s", value, DEFAULT_USD_TO_INR)
        return DEFAULT_USD_TO_INR
    return rate


def bootstrap_logging(config: Optional["ConfigService"] = None) -> logging.Logger:
    """
    Зчитує конфіг логування і запускає кореневий логер.
    """
    if config is None:
        from app.config.config_service import ConfigService              # 🧭 Локальний імпорт для уникнення циклів

        config = ConfigService()
    node = config.get("logging", {}) or {}                               # 📄 Вузол логування
    return init_logging_from_config(node)                                # 🧾 Стартуємо логер за конфігом


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """
    Координує ініціалізацію інфраструктурних та доменних сервісів.
    """

    def __init__(
        self,
        config: "ConfigService",
        *,
        store: Optional["ICartStore"] = None,
        fetcher: Optional[PageFetcher] = None,
    ) -> None:
        self.config = config                                              # ⚙️ Джерело конфігурацій DI
        logger.info("🚀 Стартуємо побудову контейнера залежностей")
        self._setup_error_handlers()                                      # 🛡️ Стратегії помилок
        self._setup_utility_services(fetcher)                             # 🧰 Класифікатор, HTTP, валюта
        self._setup_extraction()                                          # 🧠 Екстрактори та оркестратор
        self.cart_store: "ICartStore" = store or InMemoryCartStore()      # 🛒 Сховище кошика
        logger.info("✅ Контейнер ініціалізовано успішно")

    # ================================
    # 🛡️ ОБРОБКА ПОМИЛОК
    # ================================
    def _setup_error_handlers(self) -> None:
        """
        Конфігурує ExceptionHandlerService для HTTP-шару.
        """
        strategies = [
            HttpxErrorStrategy(),                                        # 🌐 HTTP-рівень
            WerkzeugErrorStrategy(),                                     # 🧪 Flask/Werkzeug HTTPException
        ]
        self.exception_handler_service = ExceptionHandlerService(strategies=strategies)
        logger.debug("🛡️ ExceptionHandlerService активовано (%d стратегій)", len(strategies))

    # ================================
    # 🧰 УТИЛІТАРНІ СЕРВІСИ
    # ================================
    def _setup_utility_services(self, fetcher: Optional[PageFetcher]) -> None:
        """
        Ініціалізує класифікатор URL, HTTP-клієнт та нормалізатор цін.
        """
        supported = self.config.get("marketplaces.supported", []) or []
        self.classifier = MarketplaceClassifier(supported)               # 🔗 Allow-list маркетплейсів

        self.page_fetcher = fetcher or PageFetcher(
            timeout_s=_float_or_default(self.config.get("fetcher.timeout_sec"), 10.0),
            max_redirects=_int_or_default(self.config.get("fetcher.max_redirects"), 5),
            user_agent=self.config.get("fetcher.user_agent"),
        )                                                                # 🌍 httpx-клієнт

        usd_sources: Mapping[str, str] = self.config.get("currency.usd_sources", {}) or {}
        self.price_normalizer = PriceNormalizer(
            usd_to_inr_rate=_safe_rate(self.config.get("currency.usd_to_inr_rate", DEFAULT_USD_TO_INR)),
            usd_sources=usd_sources,
        )                                                                # 💱 Нормалізація цін
        logger.debug("🧰 Утилітарні сервіси готові (%d маркетплейсів)", len(self.classifier.supported))

    # ================================
    # 🧠 ЕКСТРАКЦІЯ
    # ================================
    def _setup_extraction(self) -> None:
        """
        Збирає сайт-екстрактори, generic-фолбек та оркестратор.
        """
        overrides = self.config.get("parser.selectors.marketplaces", {}) or {}
        self.site_extractors = build_site_extractors(self.price_normalizer, overrides)
        self.generic_extractor = GenericExtractor(self.price_normalizer)
        self.extraction_service = ProductExtractionService(
            classifier=self.classifier,
            fetcher=self.page_fetcher,
            site_extractors=self.site_extractors,
            generic_extractor=self.generic_extractor,
            html_parser=self.config.get("parser.html_parser", "html.parser", str) or "html.parser",
        )
        logger.debug("🧠 Екстракція готова (%d сайт-екстракторів)", len(self.site_extractors))


__all__ = ["Container", "bootstrap_logging"]
