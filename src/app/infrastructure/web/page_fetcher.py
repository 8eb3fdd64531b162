# 🌍 app/infrastructure/web/page_fetcher.py
"""
🌍 Асинхронне завантаження HTML сторінки товару через `httpx`.

🔹 Перша спроба — повний набір «браузерних» заголовків.
🔹 На 403/429 — одна повторна спроба зі спрощеними заголовками.
🔹 Статус останньої спроби визначає результат: BLOCKED / RATE_LIMITED / FETCH_FAILED.
🔹 Мережеві збої (таймаут, обрив, забагато редіректів) → NETWORK_ERROR.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging															# 🧾 Логування спроб
from typing import Dict, Mapping, Optional							# 🧰 Допоміжні типи

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт

# 🧩 Внутрішні модулі проєкту
from app.errors.strategies import HttpxErrorStrategy					# 🧱 Текст мережевої помилки
from app.shared.result import Err, ExtractionError, ExtractionErrorKind, Ok, Result
from app.shared.utils.logger import LOG_NAME							# 🏷️ Ім'я базового логера

logger = logging.getLogger(f"{LOG_NAME}.fetcher")						# 🧾 Локальний логер модуля

__all__ = ["PageFetcher", "BROWSER_HEADERS", "FALLBACK_HEADERS", "RETRY_STATUSES"]


# ================================
# 📦 КОНСТАНТИ
# ================================
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

BROWSER_HEADERS: Dict[str, str] = {									# 🧭 Спроба 1: «справжній» браузер
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9,hi;q=0.8",
    "Accept-Encoding": "gzip, deflate",								# ⚠️ Без br
    "Cache-Control": "max-age=0",
    "Sec-Ch-Ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"Windows"',
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
    "Connection": "keep-alive",
}

FALLBACK_HEADERS: Dict[str, str] = {									# 🪶 Спроба 2: мінімальний набір
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

RETRY_STATUSES = frozenset({403, 429})									# 🔁 Статуси, що варті другої спроби


# ================================
# 🌍 ФЕТЧЕР
# ================================
class PageFetcher:
    """🌍 Завантажує HTML з однією повторною спробою на блокування."""

    def __init__(
        self,
        *,
        timeout_s: float = 10.0,
        max_redirects: int = 5,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_s = float(timeout_s)								# ⏳ Таймаут кожної спроби
        self.max_redirects = max(0, int(max_redirects))					# 🔀 Ліміт редіректів
        self.user_agent = user_agent or DEFAULT_USER_AGENT				# 🕵️ UA для обох спроб
        self._transport = transport										# 🧪 Підміна транспорту (тести)
        self._errors = HttpxErrorStrategy()								# 🧱 Людський текст мережевих помилок
        logger.debug(
            "⚙️ PageFetcher init timeout=%.1fs max_redirects=%d custom_transport=%s",
            self.timeout_s,
            self.max_redirects,
            transport is not None,
        )

    # ================================
    # 🔄 ПУБЛІЧНИЙ API
    # ================================
    async def fetch(self, url: str, *, domain: str) -> Result[str]:
        """
        Завантажує сторінку.

        Args:
            url: Абсолютний URL сторінки.
            domain: Хост без `www.` (для текстів помилок).

        Returns:
            Ok(html) або Err(NETWORK_ERROR | BLOCKED | RATE_LIMITED | FETCH_FAILED).
        """
        async with self._client() as client:
            try:
                response = await client.get(url, headers=self._headers(BROWSER_HEADERS))
            except httpx.HTTPError as exc:
                logger.warning("🌐 Спроба 1 для %s впала: %s", url, exc)
                return self._network_error("Network error", exc)

            if response.status_code in RETRY_STATUSES:
                logger.info(
                    "🚧 Спроба 1 заблокована (%s) для %s, пробуємо спрощені заголовки",
                    response.status_code,
                    domain,
                )
                try:
                    response = await client.get(url, headers=self._headers(FALLBACK_HEADERS))
                except httpx.HTTPError as exc:
                    logger.warning("🌐 Спроба 2 для %s впала: %s", url, exc)
                    return self._network_error("Alternative fetch failed", exc)

            return self._outcome(response, domain)

    # ================================
    # 🧰 ВНУТРІШНІ ХЕЛПЕРИ
    # ================================
    def _client(self) -> httpx.AsyncClient:
        """Окремий клієнт на кожен виклик `fetch`."""
        kwargs = {
            "timeout": httpx.Timeout(self.timeout_s),
            "follow_redirects": True,
            "max_redirects": self.max_redirects,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    def _headers(self, base: Mapping[str, str]) -> Dict[str, str]:
        return {"User-Agent": self.user_agent, **base}

    def _network_error(self, prefix: str, exc: httpx.HTTPError) -> Err:
        return Err(
            ExtractionError(
                ExtractionErrorKind.NETWORK_ERROR,
                f"{prefix}: {self._errors.describe(exc)}",
                details=type(exc).__name__,
            )
        )

    @staticmethod
    def _outcome(response: httpx.Response, domain: str) -> Result[str]:
        status = response.status_code
        if response.is_success:
            logger.debug("✅ %s → %s (%d bytes)", domain, status, len(response.content))
            return Ok(response.text)

        if status == 403:
            logger.warning("⛔ %s блокує запити (403)", domain)
            return Err(
                ExtractionError(
                    ExtractionErrorKind.BLOCKED,
                    (
                        f"Access blocked by {domain}. This site has anti-bot protection. Please try:\n"
                        "1. Copy the product title and price manually\n"
                        "2. Use the manual entry option\n"
                        "3. Try a different product URL from the same site"
                    ),
                    status_code=status,
                )
            )
        if status == 429:
            logger.warning("🐢 %s обмежує частоту запитів (429)", domain)
            return Err(
                ExtractionError(
                    ExtractionErrorKind.RATE_LIMITED,
                    f"Rate limited by {domain}. Please wait a few minutes and try again.",
                    status_code=status,
                )
            )

        logger.warning("❌ %s відповів %s %s", domain, status, response.reason_phrase)
        return Err(
            ExtractionError(
                ExtractionErrorKind.FETCH_FAILED,
                f"Failed to fetch page: {status} {response.reason_phrase}".rstrip(),
                status_code=status,
            )
        )
