# 🧠 app/infrastructure/services/product_extraction_service.py
"""
🧠 `ProductExtractionService` — оркестратор конвеєра екстракції товару.

🔹 Класифікує URL (без мережевого запиту для невідомих доменів).
🔹 Завантажує сторінку з однією повторною спробою на блокування.
🔹 Парсить HTML один раз і віддає його сайт-екстрактору, а за невдачі — generic.
🔹 Повертає `ExtractionResult`; жоден виняток не виходить назовні.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup										# 🥣 DOM-дерево сторінки

# 🔠 Системні імпорти
import asyncio														# ⏳ CancelledError
import logging														# 🧾 Логування подій сервісу
from typing import Mapping, Optional								# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from app.domain.products.entities import ExtractedProduct, ExtractionResult	# 📦 Результат конвеєра
from app.domain.products.interfaces import IProductExtractor		# 📋 Контракт
from app.infrastructure.parsers.generic_extractor import GenericExtractor	# 🧭 Фолбек
from app.infrastructure.parsers.site_extractor import SiteExtractor	# 🏪 Сайт-екстрактори
from app.infrastructure.url.marketplace_classifier import MarketplaceClassifier	# 🔗 Класифікатор
from app.infrastructure.web.page_fetcher import PageFetcher			# 🌍 Завантаження HTML
from app.shared.result import Err, ExtractionError, ExtractionErrorKind, Result
from app.shared.utils.logger import LOG_NAME						# 🏷️ Базове ім'я логера

logger = logging.getLogger(f"{LOG_NAME}.extraction")				# 🧾 Іменований логер


# ================================
# 🏛️ ОСНОВНИЙ СЕРВІС ОРКЕСТРАЦІЇ
# ================================
class ProductExtractionService(IProductExtractor):
    """
    🏛️ Оркеструє повний цикл екстракції:
        1) класифікація URL,
        2) завантаження сторінки,
        3) сайт-екстрактор (якщо є для маркетплейсу),
        4) generic-фолбек на тому ж DOM,
        5) перший успіх або відмова сайт-екстрактора.
    """

    def __init__(
        self,
        classifier: MarketplaceClassifier,
        fetcher: PageFetcher,
        site_extractors: Mapping[str, SiteExtractor],
        generic_extractor: GenericExtractor,
        *,
        html_parser: str = "html.parser",
    ) -> None:
        self.classifier = classifier										# 🔗 Allow-list маркетплейсів
        self.fetcher = fetcher												# 🌍 HTTP
        self.site_extractors = dict(site_extractors)						# 🏪 id маркетплейсу → екстрактор
        self.generic_extractor = generic_extractor							# 🧭 Фолбек
        self.html_parser = html_parser										# 🥣 Бекенд BeautifulSoup
        logger.debug(
            "🧠 ProductExtractionService ready (sites=%d, parser=%s)",
            len(self.site_extractors),
            self.html_parser,
        )

    # ================================
    # 🔗 ПУБЛІЧНЕ API
    # ================================
    async def extract_from_url(self, url: str) -> ExtractionResult:
        """🔗 Головний сценарій: URL → ExtractionResult."""
        logger.info("⚙️ Старт екстракції: %s", url)
        try:
            return await self._run(url)
        except asyncio.CancelledError:										# 🛑 Скасування корутини
            logger.info("🛑 Відміна extract_from_url для %s", url)
            raise
        except Exception as exc:											# 🔥 Будь-що непередбачене
            logger.exception("🔥 Непередбачена помилка екстракції: %s", url)
            return ExtractionResult.fail(
                ExtractionError(
                    ExtractionErrorKind.UNKNOWN,
                    f"Extraction failed: {str(exc) or type(exc).__name__}",
                    details=type(exc).__name__,
                )
            )

    # ================================
    # 🧩 КРОКИ КОНВЕЄРА
    # ================================
    async def _run(self, url: str) -> ExtractionResult:
        # 1) Класифікація
        classified = self.classifier.classify(url)
        if isinstance(classified, Err):
            logger.info("🚫 %s: %s", classified.error.kind.value, classified.error.message)
            return ExtractionResult.fail(classified.error)
        marketplace = classified.value

        # 2) Завантаження
        fetched = await self.fetcher.fetch(url, domain=marketplace.domain)
        if isinstance(fetched, Err):
            logger.warning("🌐 Fetch %s: %s", fetched.error.kind.value, marketplace.domain)
            return ExtractionResult.fail(fetched.error)

        # 3) Розбір і диспетчеризація
        soup = BeautifulSoup(fetched.value, self.html_parser)
        outcome = self._extract(soup, marketplace.id, marketplace.domain)
        if isinstance(outcome, Err):
            logger.info("🕳️ Екстракція не вдалася для %s: %s", marketplace.domain, outcome.error.message)
            return ExtractionResult.fail(outcome.error)

        logger.info("📦 Отримано товар: '%s' (%s)", outcome.value.title[:80], outcome.value.price)
        return ExtractionResult.ok(outcome.value)

    def _extract(self, soup: BeautifulSoup, marketplace_id: str, domain: str) -> Result[ExtractedProduct]:
        """Сайт-екстрактор → generic; при подвійній невдачі повертає помилку сайту."""
        site: Optional[SiteExtractor] = self.site_extractors.get(marketplace_id)
        if site is None:
            logger.debug("🧭 Немає сайт-екстрактора для %s, одразу generic", marketplace_id)
            return self.generic_extractor.extract(soup, domain)

        site_result = site.extract(soup, domain=domain)
        if not isinstance(site_result, Err):
            return site_result

        logger.info("🔁 %s: сайт-екстрактор не впорався, пробуємо generic", domain)
        generic_result = self.generic_extractor.extract(soup, domain)
        if not isinstance(generic_result, Err):
            return generic_result

        site_error = site_result.error
        details = generic_result.error.message
        if site_error.details:
            details = f"{site_error.details}; {details}"
        return Err(
            ExtractionError(
                site_error.kind,
                site_error.message,
                status_code=site_error.status_code,
                missing_fields=site_error.missing_fields,
                details=details,
            )
        )


__all__ = ["ProductExtractionService"]
