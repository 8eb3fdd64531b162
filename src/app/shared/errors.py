# 🚨 app/shared/errors.py
"""
🚨 Єдина ієрархія прикладних винятків.

🔹 `AppError` — базовий виняток із кодом, повідомленням і HTTP-статусом.
🔹 `UserVisibleError` — текст безпечно показувати клієнту як є.
🔹 `ValidationError` / `NotFoundError` / `UnauthorizedError` — типові відмови API та сховища.

Помилки конвеєра екстракції сюди не входять: вони повертаються як значення
(`app.shared.result.Err`), а не піднімаються.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Any, Dict, List, Optional						# 📐 Типізація


# ================================
# 🧠 БАЗОВІ ВИНЯТКИ
# ================================
class AppError(Exception):
    """🧠 Базова доменна помилка застосунку."""

    code: str = "internal_error"								# 🏷️ Машинний код помилки
    status_code: int = 500									# 🔢 HTTP-статус за замовчуванням

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message									# 💬 Людський текст
        self.details = details									# 🔍 Технічні подробиці для логів

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Поля для `logger.extra`."""
        extra: Dict[str, object] = {"error_code": self.code, "status_code": self.status_code}
        if self.details:
            extra["details"] = self.details
        return extra

    def to_payload(self) -> Dict[str, Any]:
        """📤 Тіло JSON-відповіді."""
        return {"message": self.message}


class UserVisibleError(AppError):
    """👀 Помилка, текст якої показується клієнту без змін."""

    code = "user_visible"
    status_code = 400


# ================================
# 🧾 КОНКРЕТНІ ВІДМОВИ
# ================================
class ValidationError(UserVisibleError):
    """🧾 Невалідні вхідні дані (payload, id, поля сутності)."""

    code = "validation_error"
    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        errors: Optional[List[Dict[str, str]]] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.errors: List[Dict[str, str]] = list(errors or [])		# 📋 [{field, message}, ...]

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.errors:
            payload["errors"] = list(self.errors)
        return payload


class NotFoundError(UserVisibleError):
    """🔍 Сутність відсутня або належить іншому користувачу."""

    code = "not_found"
    status_code = 404


class UnauthorizedError(UserVisibleError):
    """🔐 Запит без ідентифікованого користувача."""

    code = "unauthorized"
    status_code = 401


__all__ = [
    "AppError",
    "UserVisibleError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
]
