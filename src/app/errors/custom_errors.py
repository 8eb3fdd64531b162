# 🚨 app/errors/custom_errors.py
"""
🚨 Винятки інфраструктурного рівня поверх ієрархії `app.shared.errors`.

🔹 `NetworkRequestError` — мережевий збій з URL та HTTP-статусом.
🔹 `ExtractionFailedError` — невдала екстракція, піднята на межі HTTP API.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення винятків
from typing import Dict, Optional									# 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from app.shared.errors import UserVisibleError						# 👀 Базовий «видимий» виняток
from app.shared.result import ExtractionError, ExtractionErrorKind	# ❌ Відмова конвеєра


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("cart_aggregator.errors.custom_errors")	# 🧾 Локальний логер


# ================================
# 🌐 МЕРЕЖА
# ================================
class NetworkRequestError(UserVisibleError):
    """🌐 Помилка мережевого запиту."""

    code = "network_error"
    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, details=details)					# 🧠 Виклик базового конструктора
        self.url = url												# 🔗 URL, що викликав помилку
        self.upstream_status = status_code							# 🔢 HTTP-код сторінки
        logger.debug("🌐 NetworkRequestError created", extra={"url": url, "upstream_status": status_code})

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:													# 🔗 Може додаватися URL
            extra["url"] = self.url
        if self.upstream_status is not None:							# 🔢 HTTP-код, якщо є
            extra["upstream_status"] = self.upstream_status
        return extra


# ================================
# 🧾 ЕКСТРАКЦІЯ
# ================================
class ExtractionFailedError(UserVisibleError):
    """🧾 Екстракція не вдалася; текст відмови показується клієнту як є."""

    code = "extraction_failed"
    status_code = 400

    def __init__(self, error: ExtractionError) -> None:
        super().__init__(error.message, details=error.details)
        self.error = error											# ❌ Оригінальна відмова конвеєра
        if error.kind is ExtractionErrorKind.UNKNOWN:
            self.status_code = 500									# 🔥 Непередбачений збій

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["kind"] = self.error.kind.value
        if self.error.status_code is not None:
            extra["upstream_status"] = self.error.status_code
        if self.error.missing_fields:
            extra["missing_fields"] = list(self.error.missing_fields)
        return extra


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "NetworkRequestError",
    "ExtractionFailedError",
]
