# 🛡️ app/errors/exception_handler_service.py
"""
🛡️ Центральний сервіс обробки помилок для HTTP API.

🔹 Конвертує будь-які винятки в доменні `AppError`, використовуючи передані стратегії.
🔹 Визначає, що показати клієнту (`UserVisibleError` як є або уніфікований 500).
🔹 Логує повний контекст (user_id, код помилки, payload) і завжди повертає відповідь.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування кроків
from typing import Any, Dict, List, Mapping, Optional, Tuple		# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from app.shared.errors import AppError, UserVisibleError			# ⚠️ Доменні винятки
from app.shared.utils.logger import LOG_NAME						# 🏷️ Спільний неймспейс логів
from .strategies import IErrorHandlingStrategy						# 🧠 Конвертери винятків


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")					# 🧾 Іменований логер модуля

INTERNAL_ERROR_MESSAGE = "Internal server error"					# 🛟 Текст для непередбачених збоїв


# ================================
# 🧠 СЕРВІС ОБРОБКИ ПОМИЛОК
# ================================
class ExceptionHandlerService:
    """🧠 Глобальний диспетчер помилок: виняток → (JSON-пейлоад, HTTP-статус)."""

    # ================================
    # 🧱 ІНІЦІАЛІЗАЦІЯ
    # ================================
    def __init__(self, strategies: List[IErrorHandlingStrategy]) -> None:
        self._strategies = list(strategies)							# 📦 Копія списку, щоб уникнути мутацій
        logger.debug("🛡️ ExceptionHandlerService init", extra={"strategies": len(self._strategies)})

    # ================================
    # 🔑 ПУБЛІЧНИЙ API
    # ================================
    def handle(self, error: Exception, user_id: Optional[str] = None) -> Tuple[Dict[str, Any], int]:
        """
        Головна точка входу. Нічого не піднімає.

        Returns:
            (payload, status): тіло JSON-відповіді та HTTP-статус.
        """
        domain_error = self._convert_error(error)					# 🔄 Прагнемо отримати AppError
        who = user_id or "N/A"

        if isinstance(domain_error, UserVisibleError):				# 👀 Показуємо повідомлення як є
            logger.warning(
                "⚠️ UserVisibleError for user=%s: %s",
                who,
                domain_error.message,
                extra=self._extract_extra(domain_error),
            )
            return domain_error.to_payload(), domain_error.status_code

        if domain_error is not None and domain_error.status_code < 500:
            logger.warning("⚠️ AppError for user=%s: %s", who, domain_error.message)
            return domain_error.to_payload(), domain_error.status_code

        logger.error("🔥 Unhandled exception for user=%s", who, exc_info=error)
        status = domain_error.status_code if domain_error is not None else 500
        return {"message": INTERNAL_ERROR_MESSAGE}, status

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    def _convert_error(self, error: Exception) -> Optional[AppError]:
        """🔄 Пропускає виняток через стратегії й повертає `AppError`, якщо можливо."""
        if isinstance(error, AppError):								# 🧾 Уже доменний виняток
            return error
        for strategy in self._strategies:							# 🔁 Перебираємо всі стратегії
            try:
                converted = strategy.handle(error)					# 🧠 Спроба конвертації
            except Exception as exc:									# noqa: BLE001
                logger.exception("🔥 Strategy failed: %r", strategy, exc_info=exc)  # 🚫 Стратегія впала — лог і далі
                continue
            if converted is not None:
                logger.debug("🔁 Strategy converted error via %r", strategy)
                return converted
        return None

    @staticmethod
    def _extract_extra(error: AppError) -> Optional[Mapping[str, Any]]:
        """📦 Викликає `to_log_extra` і не дає йому зламати обробку."""
        try:
            return dict(error.to_log_extra())
        except Exception:											# noqa: BLE001
            logger.debug("⚠️ to_log_extra failed", exc_info=True)
            return None


__all__ = ["ExceptionHandlerService", "INTERNAL_ERROR_MESSAGE"]		# 📤 Публічний API
