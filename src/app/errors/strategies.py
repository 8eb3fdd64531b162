# 📜 app/errors/strategies.py
"""
📜 Стратегії конвертації сторонніх винятків у доменні `AppError`.

🔹 Виносять логіку із `ExceptionHandlerService`, щоб сервіс залишався простим DI-клієнтом.
🔹 Можна додавати нові стратегії, не змінюючи ядро.
🔹 Покривають httpx (мережа фетчера) та werkzeug (HTTP-винятки Flask).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт (винятки)
from werkzeug.exceptions import HTTPException							# 🧪 HTTP-винятки Flask

# 🔠 Системні імпорти
import logging															# 🧾 Логування стратегій
from typing import Optional, Protocol									# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from app.shared.errors import AppError, NotFoundError, UnauthorizedError, UserVisibleError
from .custom_errors import NetworkRequestError							# 🌐 Мережевий виняток


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("cart_aggregator.errors.strategies")		# 🧾 Локальний логер


# ================================
# 🧠 КОНТРАКТ СТРАТЕГІЙ
# ================================
class IErrorHandlingStrategy(Protocol):
    """🧠 Контракт, що визначає єдиний метод `handle`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        """Вертає `AppError`, якщо виняток розпізнано, або None."""	# 🔁 Реалізації можуть повертати None


# ================================
# 🌐 HTTPX-СТРАТЕГІЯ
# ================================
class HttpxErrorStrategy(IErrorHandlingStrategy):
    """🌐 Перетворює httpx-помилки на `NetworkRequestError`."""

    def describe(self, error: httpx.HTTPError) -> str:
        """Короткий людський опис мережевої помилки (для повідомлень фетчера)."""
        if isinstance(error, httpx.TimeoutException):					# ⏱️ Будь-який таймаут
            return f"request timed out ({type(error).__name__})"
        if isinstance(error, httpx.TooManyRedirects):					# 🔀 Ліміт редіректів
            return "too many redirects"
        if isinstance(error, httpx.ConnectError):						# 🌐 Не вдалося підʼєднатися
            return f"could not connect: {error}" if str(error) else "could not connect"
        return str(error) or type(error).__name__

    def handle(self, error: Exception) -> Optional[AppError]:
        if not isinstance(error, httpx.HTTPError):
            return None

        url = "N/A"
        try:
            url = str(error.request.url)								# 🔗 request може бути відсутнім
        except RuntimeError:
            pass

        if isinstance(error, httpx.HTTPStatusError):					# 🔢 Неочікуваний статус
            status = error.response.status_code
            logger.debug("🔢 httpx status error", extra={"url": url, "status": status})
            return NetworkRequestError(
                f"Failed to fetch page: {status} {error.response.reason_phrase}".rstrip(),
                url=url,
                status_code=status,
                details=str(error),
            )

        logger.debug("🌐 httpx transport error", extra={"url": url})
        return NetworkRequestError(f"Network error: {self.describe(error)}", url=url, details=str(error))


# ================================
# 🧪 WERKZEUG-СТРАТЕГІЯ
# ================================
class WerkzeugErrorStrategy(IErrorHandlingStrategy):
    """🧪 Конвертує HTTP-винятки Flask/werkzeug (404, 405, 400 ...) в `AppError`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        if not isinstance(error, HTTPException):
            return None
        status = int(error.code or 500)
        message = error.description or error.name
        logger.debug("🧪 werkzeug HTTPException", extra={"status": status})
        if status == 404:
            return NotFoundError("Not found", details=message)
        if status == 401:
            return UnauthorizedError("Unauthorized", details=message)
        if status < 500:
            converted = UserVisibleError(error.name, details=message)
        else:
            converted = AppError(error.name, details=message)
        converted.status_code = status									# 🔢 Зберігаємо оригінальний статус
        return converted


__all__ = [
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
    "WerkzeugErrorStrategy",
]																		# 📤 Публічний API
