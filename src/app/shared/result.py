# 🏷️ app/shared/result.py
"""
🏷️ Тегований результат етапу конвеєра: `Ok(value) | Err(error)`.

🔹 Кожен етап (класифікатор, фетчер, екстрактори) повертає `Result`, а не кидає винятки.
🔹 `ExtractionError` несе тип відмови, текст для користувача та діагностику.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field							# 🧱 Незмінні контейнери
from enum import Enum										# 🔖 Таксономія відмов
from typing import Generic, Optional, Tuple, TypeVar, Union				# 📐 Типізація

T = TypeVar("T")


# ================================
# 🔖 ТАКСОНОМІЯ ВІДМОВ
# ================================
class ExtractionErrorKind(str, Enum):
    """Типи відмов конвеєра екстракції."""

    INVALID_URL = "invalid_url"
    UNSUPPORTED_DOMAIN = "unsupported_domain"
    NETWORK_ERROR = "network_error"
    BLOCKED = "blocked"
    RATE_LIMITED = "rate_limited"
    FETCH_FAILED = "fetch_failed"
    MISSING_REQUIRED_FIELDS = "missing_required_fields"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ExtractionError:
    """❌ Опис відмови одного етапу."""

    kind: ExtractionErrorKind								# 🔖 Тип відмови
    message: str										# 💬 Текст для користувача
    status_code: Optional[int] = None							# 🔢 HTTP-статус сторінки (для fetch-відмов)
    missing_fields: Tuple[str, ...] = field(default_factory=tuple)			# 📋 Відсутні обовʼязкові поля
    details: Optional[str] = None								# 🔍 Додатковий контекст

    def __post_init__(self) -> None:
        if not (self.message or "").strip():
            raise ValueError("ExtractionError.message must be non-empty")


# ================================
# ✅ / ❌ ВАРІАНТИ РЕЗУЛЬТАТУ
# ================================
@dataclass(frozen=True)
class Ok(Generic[T]):
    """✅ Успіх етапу."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """❌ Відмова етапу."""

    error: ExtractionError

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


__all__ = ["ExtractionErrorKind", "ExtractionError", "Ok", "Err", "Result"]
