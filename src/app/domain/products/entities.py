# 📦 app/domain/products/entities.py
"""
📦 Доменні сутності кошика: результат екстракції, товар, правило та звʼязок правило↔товар.

🔹 `ExtractedProduct` / `ExtractionResult` — ефемерний вихід конвеєра екстракції.
🔹 `Product`, `Rule`, `RuleProduct` — сутності, що зберігаються у сховищі (frozen dataclass).
🔹 Валідація у `__post_init__` збирає всі проблеми й кидає один `ValidationError`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging												# 🧾 Логування валідації
from dataclasses import dataclass, field							# 🧱 Опис сутностей
from datetime import datetime									# 🕒 Мітки часу
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation				# 💰 Ціна як Decimal
from enum import Enum										# 🔖 Переліки правил
from typing import Any, Dict, List, Optional, Tuple						# 🧰 Типізація
from urllib.parse import urlparse								# 🌐 Перевірка URL

# 🧩 Внутрішні модулі проєкту
from app.shared.errors import ValidationError							# 🧾 Помилка валідації
from app.shared.result import ExtractionError							# ❌ Опис відмови конвеєра
from app.shared.utils.logger import LOG_NAME							# 🏷️ Базове імʼя логера

# ================================
# 🪵 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.domain")

# ================================
# 📏 КОНСТАНТИ ВАЛІДАЦІЇ
# ================================
TITLE_MAX_LEN = 500											# 🏷️ Ліміт назви товару
NAME_MAX_LEN = 200											# 🏷️ Ліміт назви правила
NOTES_MAX_LEN = 2_000										# 📝 Ліміт нотаток
PRICE_QUANTUM = Decimal("0.01")									# 💰 Два знаки після коми
PRICE_MAX = Decimal("99999999.99")								# 💰 decimal(10, 2)


# ================================
# 🔖 ПЕРЕЛІКИ ПРАВИЛ
# ================================
class RuleTrigger(str, Enum):
    """Подія, на яку реагує правило."""

    PRICE_DROP = "price_drop"
    AVAILABILITY = "availability"
    FAST_SHIPPING = "fast_shipping"
    SPECIFIC_DATE = "specific_date"
    LOW_STOCK = "low_stock"


class RuleConditionType(str, Enum):
    """Тип умови правила."""

    PRICE_BELOW = "price_below"
    PRICE_DROP_PERCENTAGE = "price_drop_percentage"
    DELIVERY_DAYS = "delivery_days"
    STOCK_LEVEL = "stock_level"


class RuleAction(str, Enum):
    """Дія, яку правило виконає (поки лише зберігається)."""

    NOTIFY = "notify"
    HIGHLIGHT = "highlight"
    EMAIL = "email"
    MARK_URGENT = "mark_urgent"


# ================================
# 🧽 НОРМАЛІЗАЦІЙНІ ХЕЛПЕРИ
# ================================
def _clean_optional(value: Any) -> Optional[str]:
    """Trim; порожній рядок → None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _to_price(value: Any) -> Optional[Decimal]:
    """Приводить ціну до Decimal(…, 2); None, якщо значення невалідне."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def _raise_if_problems(entity: str, problems: List[Dict[str, str]]) -> None:
    if problems:
        logger.debug("🧾 %s: валідація не пройдена: %s", entity, problems)
        raise ValidationError(f"Invalid {entity.lower()} data", errors=problems)


def _enum_or_problem(enum_cls, raw: Any, field_name: str, problems: List[Dict[str, str]]):
    """Повертає член enum або реєструє проблему."""
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw))
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        problems.append({"field": field_name, "message": f"must be one of: {allowed}"})
        return raw


# ================================
# 🧾 РЕЗУЛЬТАТ ЕКСТРАКЦІЇ
# ================================
@dataclass(frozen=True)
class ExtractedProduct:
    """🧾 Нормалізований запис товару, отриманий зі сторінки."""

    title: str
    price: str
    store_domain: str
    image_url: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    availability: Optional[str] = None

    def __post_init__(self) -> None:
        if not (self.title or "").strip():
            raise ValueError("ExtractedProduct.title must be non-empty")
        if not (self.price or "").strip():
            raise ValueError("ExtractedProduct.price must be non-empty")

    def to_dict(self) -> Dict[str, str]:
        """JSON-форма для клієнта (camelCase, без порожніх опційних полів)."""
        data = {
            "title": self.title,
            "price": self.price,
            "imageUrl": self.image_url,
            "storeDomain": self.store_domain,
            "color": self.color,
            "size": self.size,
            "availability": self.availability,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class ExtractionResult:
    """
    Підсумок `extract_from_url`.

    Або `success=True` і `product`, або `success=False` і `error`; ніколи обидва.
    """

    success: bool
    product: Optional[ExtractedProduct] = None
    error: Optional[ExtractionError] = None

    def __post_init__(self) -> None:
        if self.success and (self.product is None or self.error is not None):
            raise ValueError("successful ExtractionResult needs a product and no error")
        if not self.success and (self.error is None or self.product is not None):
            raise ValueError("failed ExtractionResult needs an error and no product")

    @classmethod
    def ok(cls, product: ExtractedProduct) -> "ExtractionResult":
        return cls(success=True, product=product)

    @classmethod
    def fail(cls, error: ExtractionError) -> "ExtractionResult":
        return cls(success=False, error=error)

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


# ================================
# 🛒 ТОВАР У КОШИКУ
# ================================
@dataclass(frozen=True)
class Product:
    """🛒 Товар, що належить одному користувачу."""

    id: int
    user_id: str
    title: str
    price: Decimal
    original_url: str
    store_domain: str
    created_at: datetime
    updated_at: datetime
    image_url: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    availability: Optional[str] = None
    quantity: int = 1
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        problems: List[Dict[str, str]] = []
        title = (self.title or "").strip() if isinstance(self.title, str) else ""
        if not title:
            problems.append({"field": "title", "message": "is required"})
        elif len(title) > TITLE_MAX_LEN:
            title = title[:TITLE_MAX_LEN]						# ✂️ Обрізаємо надто довгу назву

        price = _to_price(self.price)
        if price is None:
            problems.append({"field": "price", "message": "must be a decimal number"})
        elif price < 0 or price > PRICE_MAX:
            problems.append({"field": "price", "message": f"must be between 0 and {PRICE_MAX}"})

        original_url = str(self.original_url or "").strip()
        if not _is_http_url(original_url):
            problems.append({"field": "originalUrl", "message": "must be an absolute http(s) URL"})

        store_domain = str(self.store_domain or "").strip()
        if not store_domain:
            problems.append({"field": "storeDomain", "message": "is required"})

        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            problems.append({"field": "quantity", "message": "must be an integer >= 1"})

        if not str(self.user_id or "").strip():
            problems.append({"field": "userId", "message": "is required"})

        notes = _clean_optional(self.notes)
        if notes and len(notes) > NOTES_MAX_LEN:
            problems.append({"field": "notes", "message": f"must be at most {NOTES_MAX_LEN} characters"})

        _raise_if_problems("Product", problems)

        object.__setattr__(self, "title", title)					# 🔐 Фіксуємо нормалізовані значення
        object.__setattr__(self, "price", price)
        object.__setattr__(self, "original_url", original_url)
        object.__setattr__(self, "store_domain", store_domain)
        object.__setattr__(self, "notes", notes)
        for name in ("image_url", "color", "size", "availability"):
            object.__setattr__(self, name, _clean_optional(getattr(self, name)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "price": str(self.price),
            "originalUrl": self.original_url,
            "imageUrl": self.image_url,
            "storeDomain": self.store_domain,
            "color": self.color,
            "size": self.size,
            "availability": self.availability,
            "quantity": self.quantity,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


# ================================
# 🔔 ПРАВИЛО
# ================================
@dataclass(frozen=True)
class Rule:
    """🔔 Статична конфігурація сповіщення (тригер → умова → дія)."""

    id: int
    user_id: str
    name: str
    trigger: RuleTrigger
    action: RuleAction
    created_at: datetime
    updated_at: datetime
    condition_type: Optional[RuleConditionType] = None
    condition_value: Optional[str] = None
    is_active: bool = True

    def __post_init__(self) -> None:
        problems: List[Dict[str, str]] = []
        name = (self.name or "").strip() if isinstance(self.name, str) else ""
        if not name:
            problems.append({"field": "name", "message": "is required"})
        elif len(name) > NAME_MAX_LEN:
            problems.append({"field": "name", "message": f"must be at most {NAME_MAX_LEN} characters"})

        trigger = _enum_or_problem(RuleTrigger, self.trigger, "trigger", problems)
        action = _enum_or_problem(RuleAction, self.action, "action", problems)
        condition_type = None
        if self.condition_type not in (None, ""):
            condition_type = _enum_or_problem(RuleConditionType, self.condition_type, "conditionType", problems)

        if not isinstance(self.is_active, bool):
            problems.append({"field": "isActive", "message": "must be a boolean"})
        if not str(self.user_id or "").strip():
            problems.append({"field": "userId", "message": "is required"})

        _raise_if_problems("Rule", problems)

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "trigger", trigger)
        object.__setattr__(self, "action", action)
        object.__setattr__(self, "condition_type", condition_type)
        object.__setattr__(self, "condition_value", _clean_optional(self.condition_value))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "trigger": self.trigger.value,
            "conditionType": self.condition_type.value if self.condition_type else None,
            "conditionValue": self.condition_value,
            "action": self.action.value,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


# ================================
# 🔗 ЗВʼЯЗОК ПРАВИЛО ↔ ТОВАР
# ================================
@dataclass(frozen=True)
class RuleProduct:
    """🔗 Запис many-to-many між правилом і товаром одного користувача."""

    id: int
    rule_id: int
    product_id: int

    def to_dict(self) -> Dict[str, int]:
        return {"id": self.id, "ruleId": self.rule_id, "productId": self.product_id}


# ================================
# 🗺️ МАПИ ПОЛІВ ПАЙЛОАДУ
# ================================
PRODUCT_WRITABLE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("title", "title"),
    ("price", "price"),
    ("originalUrl", "original_url"),
    ("imageUrl", "image_url"),
    ("storeDomain", "store_domain"),
    ("color", "color"),
    ("size", "size"),
    ("availability", "availability"),
    ("quantity", "quantity"),
    ("notes", "notes"),
)												# 🗺️ camelCase ключ → атрибут Product

RULE_WRITABLE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "name"),
    ("trigger", "trigger"),
    ("conditionType", "condition_type"),
    ("conditionValue", "condition_value"),
    ("action", "action"),
    ("isActive", "is_active"),
)												# 🗺️ camelCase ключ → атрибут Rule


__all__ = [
    "RuleTrigger",
    "RuleConditionType",
    "RuleAction",
    "ExtractedProduct",
    "ExtractionResult",
    "Product",
    "Rule",
    "RuleProduct",
    "PRODUCT_WRITABLE_FIELDS",
    "RULE_WRITABLE_FIELDS",
]
