# 🔗 app/infrastructure/url/marketplace_classifier.py
"""
🔗 `MarketplaceClassifier` — перевіряє URL та визначає маркетплейс за хостом.

🔹 Невалідний, не-http(s) або безхостовий URL → `INVALID_URL`.
🔹 Хост у нижньому регістрі без `www.` порівнюється з allow-list підрядками.
🔹 Перший елемент allow-list, що міститься в домені, стає id маркетплейсу.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                        # 🧾 Логування
from dataclasses import dataclass                     # 🧱 Результат класифікації
from typing import Iterable, List, Optional, Tuple    # 🧰 Анотації типів
from urllib.parse import urlsplit                     # 🌐 Розбір URL

# 🧩 Внутрішні модулі проєкту
from app.shared.result import Err, ExtractionError, ExtractionErrorKind, Ok, Result
from app.shared.utils.logger import LOG_NAME          # 🏷️ Єдине імʼя логера

__all__ = ["Marketplace", "MarketplaceClassifier", "normalize_host"]

logger = logging.getLogger(f"{LOG_NAME}.url")


# ================================
# 🧾 РЕЗУЛЬТАТ
# ================================
@dataclass(frozen=True)
class Marketplace:
    """Маркетплейс, до якого належить URL."""

    id: str                                           # 🏷️ Елемент allow-list, що збігся
    domain: str                                       # 🌐 Хост без `www.`


def normalize_host(host: Optional[str]) -> str:
    """Хост у нижньому регістрі без порту та провідного `www.`."""
    value = (host or "").strip().lower()
    if value.startswith("www."):
        value = value[4:]
    return value


# ================================
# 🔗 КЛАСИФІКАТОР
# ================================
class MarketplaceClassifier:
    """Перетворює сирий URL на `Marketplace` або типізовану відмову."""

    def __init__(self, supported: Iterable[str]) -> None:
        self._supported: Tuple[str, ...] = tuple(
            entry.strip().lower() for entry in supported if str(entry or "").strip()
        )                                                                        # 🛍️ Allow-list у порядку пріоритету

    @property
    def supported(self) -> List[str]:
        return list(self._supported)

    def classify(self, url: str) -> Result[Marketplace]:
        """
        Визначає маркетплейс для URL.

        Returns:
            Ok(Marketplace) або Err(INVALID_URL | UNSUPPORTED_DOMAIN).
        """
        raw = (url or "").strip()
        try:
            parts = urlsplit(raw)
            host = parts.hostname                                                # 🧮 urlsplit сам знижує регістр
        except ValueError as exc:
            logger.debug("🚫 Невалідний URL %r: %s", raw, exc)
            return Err(ExtractionError(ExtractionErrorKind.INVALID_URL, f"Invalid URL: {exc}"))

        if parts.scheme.lower() not in ("http", "https") or not host:
            logger.debug("🚫 URL без http(s)-схеми або хоста: %r", raw)
            return Err(
                ExtractionError(ExtractionErrorKind.INVALID_URL, f"Invalid URL: {raw or '<empty>'}")
            )

        domain = normalize_host(host)
        for entry in self._supported:                                            # 🔁 Перший збіг перемагає
            if entry in domain:
                logger.debug("🛍️ %s → %s", domain, entry)
                return Ok(Marketplace(id=entry, domain=domain))

        logger.info("🚫 Непідтримуваний домен: %s", domain)
        return Err(
            ExtractionError(
                ExtractionErrorKind.UNSUPPORTED_DOMAIN,
                f"Unsupported domain: {domain}. Supported sites: {', '.join(self._supported)}",
            )
        )
