# 🛒 app/infrastructure/data_storage/cart_store.py
"""
🛒 InMemoryCartStore — процесне сховище товарів, правил та звʼязків правило↔товар.

🔹 Реалізує доменний контракт `ICartStore`; кожна операція обмежена `user_id`.
🔹 Сутності незмінні (frozen dataclass); оновлення — через `dataclasses.replace`.
🔹 Багатокрокові операції (видалення з каскадом звʼязків) виконуються під одним `RLock`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import itertools	# 🔢 Лічильники id
import logging	# 🧾 Логування операцій
import re	# 🧵 Формат ціни з ручного введення
import threading	# 🔐 Серіалізація мутацій
from dataclasses import replace	# ♻️ Оновлення frozen-сутностей
from datetime import datetime, timezone	# 🕒 Мітки часу
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple	# 🧰 Типи
from urllib.parse import urlsplit	# 🔗 Хост із URL

# 🧩 Внутрішні модулі проєкту
from app.domain.products.entities import (	# 🧱 Сутності кошика
    PRODUCT_WRITABLE_FIELDS,
    RULE_WRITABLE_FIELDS,
    ExtractedProduct,
    Product,
    Rule,
    RuleProduct,
)
from app.domain.products.interfaces import ICartStore	# 📋 Доменний контракт
from app.infrastructure.currency.price_normalizer import parse_price_decimal	# 💱 Ціна → Decimal
from app.infrastructure.url.marketplace_classifier import normalize_host	# 🌐 Хост без www.
from app.shared.errors import NotFoundError, ValidationError	# 🚨 Відмови сховища
from app.shared.utils.logger import LOG_NAME	# 🏷️ Імʼя базового логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.store")	# 🧾 Логер сховища

Clock = Callable[[], datetime]
PRODUCT_REQUIRED = ("title", "price", "original_url", "store_domain")	# 🧾 Поля без дефолтів у Product
RULE_REQUIRED = ("name", "trigger", "action")	# 🧾 Поля без дефолтів у Rule
_DISPLAY_PRICE = re.compile(r"^\s*(?:₹|\$|rs\.?|inr|usd)?\s*\d[\d,]*(?:\.\d+)?\s*$", re.IGNORECASE)	# 💰 "₹1,999.00", "Rs. 450"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _pick(payload: Mapping[str, Any], mapping: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """camelCase-ключі пайлоаду → атрибути сутності; невідомі ключі ігноруються."""
    return {attr: payload[key] for key, attr in mapping if key in payload}


def _host_of(url: str) -> str:
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def _coerce_quantity(fields: Dict[str, Any]) -> None:
    """`"2"` → 2; інші типи лишаються для валідації сутності."""
    raw = fields.get("quantity")
    if isinstance(raw, str) and raw.strip().isdigit():
        fields["quantity"] = int(raw.strip())


def _coerce_price(fields: Dict[str, Any]) -> None:
    """`"1,999.00"` / `"₹2,074.17"` → Decimal; інші рядки лишаються для валідації сутності."""
    raw = fields.get("price")
    if not isinstance(raw, str) or not _DISPLAY_PRICE.match(raw):
        return
    fields["price"] = parse_price_decimal(raw)


def _coerce_ids(raw: Any, field_name: str) -> List[int]:
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise ValidationError("Invalid rule data", errors=[{"field": field_name, "message": "must be a list of ids"}])
    ids: List[int] = []
    for item in raw:
        if isinstance(item, bool) or not isinstance(item, (int, str)) or not str(item).strip().isdigit():
            raise ValidationError("Invalid rule data", errors=[{"field": field_name, "message": "must be a list of ids"}])
        ids.append(int(item))
    return ids


# ================================
# 🏛️ СХОВИЩЕ
# ================================
class InMemoryCartStore(ICartStore):
    """🛒 Потокобезпечне in-memory сховище з перевіркою власника на кожній операції."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._lock = threading.RLock()	# 🔐 Одна мутація за раз
        self._clock: Clock = clock or _utcnow	# 🕒 Джерело часу (підміняється в тестах)
        self._products: Dict[int, Product] = {}	# 🛒 id → товар
        self._rules: Dict[int, Rule] = {}	# 🔔 id → правило
        self._links: Dict[int, RuleProduct] = {}	# 🔗 id → звʼязок
        self._product_ids = itertools.count(1)
        self._rule_ids = itertools.count(1)
        self._link_ids = itertools.count(1)
        logger.debug("🛒 InMemoryCartStore init")

    # ================================
    # 🛒 ТОВАРИ
    # ================================
    def get_user_products(self, user_id: str) -> List[Product]:
        with self._lock:
            owned = [p for p in self._products.values() if p.user_id == user_id]
        return sorted(owned, key=lambda p: (p.created_at, p.id), reverse=True)	# 🆕 Новіші першими

    def get_product(self, product_id: int, user_id: str) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
        if product is None or product.user_id != user_id:
            return None
        return product

    def create_product(self, user_id: str, payload: Mapping[str, Any]) -> Product:
        fields = _pick(payload, PRODUCT_WRITABLE_FIELDS)
        _coerce_quantity(fields)
        _coerce_price(fields)
        fields.setdefault("quantity", 1)
        if not str(fields.get("store_domain") or "").strip() and fields.get("original_url"):
            fields["store_domain"] = normalize_host(_host_of(str(fields["original_url"])))	# 🌐 Ручне введення без магазину
        return self._insert_product(user_id, fields)

    def create_product_from_extracted(
        self,
        user_id: str,
        extracted: ExtractedProduct,
        original_url: str,
        *,
        quantity: int = 1,
        notes: Optional[str] = None,
    ) -> Product:
        try:
            price = parse_price_decimal(extracted.price)
        except ValueError:
            raise ValidationError(
                "Invalid product data",
                errors=[{"field": "price", "message": f"cannot read a number from {extracted.price!r}"}],
            ) from None
        fields = {
            "title": extracted.title,
            "price": price,
            "original_url": original_url,
            "image_url": extracted.image_url,
            "store_domain": extracted.store_domain,
            "color": extracted.color,
            "size": extracted.size,
            "availability": extracted.availability,
            "quantity": quantity,
            "notes": notes,
        }
        _coerce_quantity(fields)
        return self._insert_product(user_id, fields)

    def update_product(self, product_id: int, user_id: str, changes: Mapping[str, Any]) -> Product:
        fields = _pick(changes, PRODUCT_WRITABLE_FIELDS)
        _coerce_quantity(fields)
        _coerce_price(fields)
        with self._lock:
            current = self._require_product(product_id, user_id)
            updated = replace(current, **fields, updated_at=self._clock())	# ♻️ Повторна валідація в __post_init__
            self._products[product_id] = updated
        logger.info("✏️ Товар #%d оновлено (%s)", product_id, ", ".join(sorted(fields)) or "no fields")
        return updated

    def delete_product(self, product_id: int, user_id: str) -> None:
        with self._lock:
            self._require_product(product_id, user_id)
            removed = self._drop_links(lambda link: link.product_id == product_id)
            del self._products[product_id]
        logger.info("🗑️ Товар #%d видалено (звʼязків: %d)", product_id, removed)

    # ================================
    # 🔔 ПРАВИЛА
    # ================================
    def get_user_rules(self, user_id: str) -> List[Rule]:
        with self._lock:
            owned = [r for r in self._rules.values() if r.user_id == user_id]
        return sorted(owned, key=lambda r: (r.created_at, r.id), reverse=True)

    def get_rule(self, rule_id: int, user_id: str) -> Optional[Rule]:
        with self._lock:
            rule = self._rules.get(rule_id)
        if rule is None or rule.user_id != user_id:
            return None
        return rule

    def create_rule(self, user_id: str, payload: Mapping[str, Any]) -> Rule:
        """Створює правило; необовʼязковий `productIds` одразу привʼязує товари користувача."""
        fields = _pick(payload, RULE_WRITABLE_FIELDS)
        for name in RULE_REQUIRED:	# 🧾 Відсутні поля валідує сама сутність
            fields.setdefault(name, None)
        fields.setdefault("is_active", True)
        product_ids = _coerce_ids(payload.get("productIds"), "productIds")
        with self._lock:
            for product_id in product_ids:	# 🔍 Спочатку перевіряємо всі товари
                self._require_product(product_id, user_id)
            now = self._clock()
            rule = Rule(id=next(self._rule_ids), user_id=user_id, created_at=now, updated_at=now, **fields)
            self._rules[rule.id] = rule
            for product_id in dict.fromkeys(product_ids):	# ♻️ Без дублікатів, порядок збережено
                self._link(rule.id, product_id)
        logger.info("🔔 Правило #%d створено для user=%s (товарів: %d)", rule.id, user_id, len(product_ids))
        return rule

    def update_rule(self, rule_id: int, user_id: str, changes: Mapping[str, Any]) -> Rule:
        fields = _pick(changes, RULE_WRITABLE_FIELDS)
        with self._lock:
            current = self._require_rule(rule_id, user_id)
            updated = replace(current, **fields, updated_at=self._clock())
            self._rules[rule_id] = updated
        logger.info("✏️ Правило #%d оновлено (%s)", rule_id, ", ".join(sorted(fields)) or "no fields")
        return updated

    def delete_rule(self, rule_id: int, user_id: str) -> None:
        with self._lock:
            self._require_rule(rule_id, user_id)
            removed = self._drop_links(lambda link: link.rule_id == rule_id)
            del self._rules[rule_id]
        logger.info("🗑️ Правило #%d видалено (звʼязків: %d)", rule_id, removed)

    # ================================
    # 🔗 ЗВʼЯЗКИ
    # ================================
    def get_rule_products(self, rule_id: int, user_id: str) -> List[Product]:
        with self._lock:
            self._require_rule(rule_id, user_id)
            return [
                self._products[link.product_id]
                for link in sorted(self._links.values(), key=lambda link: link.id)
                if link.rule_id == rule_id and link.product_id in self._products
            ]

    def add_product_to_rule(self, rule_id: int, product_id: int, user_id: str) -> RuleProduct:
        with self._lock:
            self._require_rule(rule_id, user_id)
            self._require_product(product_id, user_id)	# 👤 Той самий власник
            return self._link(rule_id, product_id)

    def remove_product_from_rule(self, rule_id: int, product_id: int, user_id: str) -> None:
        with self._lock:
            self._require_rule(rule_id, user_id)
            removed = self._drop_links(lambda link: link.rule_id == rule_id and link.product_id == product_id)
        if not removed:
            raise NotFoundError("Product is not attached to this rule")
        logger.info("✂️ Товар #%d відвʼязано від правила #%d", product_id, rule_id)

    # ================================
    # 🧠 ВНУТРІШНЯ ЛОГІКА
    # ================================
    def _insert_product(self, user_id: str, fields: Dict[str, Any]) -> Product:
        for name in PRODUCT_REQUIRED:
            fields.setdefault(name, None)
        with self._lock:
            now = self._clock()
            product = Product(id=next(self._product_ids), user_id=user_id, created_at=now, updated_at=now, **fields)
            self._products[product.id] = product
        logger.info("🛒 Товар #%d створено для user=%s: %s", product.id, user_id, product.title[:60])
        return product

    def _require_product(self, product_id: int, user_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None or product.user_id != user_id:	# 👤 Чужий == відсутній
            raise NotFoundError("Product not found")
        return product

    def _require_rule(self, rule_id: int, user_id: str) -> Rule:
        rule = self._rules.get(rule_id)
        if rule is None or rule.user_id != user_id:
            raise NotFoundError("Rule not found")
        return rule

    def _link(self, rule_id: int, product_id: int) -> RuleProduct:
        for link in self._links.values():	# ♻️ Повторне привʼязування — no-op
            if link.rule_id == rule_id and link.product_id == product_id:
                return link
        link = RuleProduct(id=next(self._link_ids), rule_id=rule_id, product_id=product_id)
        self._links[link.id] = link
        return link

    def _drop_links(self, predicate: Callable[[RuleProduct], bool]) -> int:
        doomed = [link_id for link_id, link in self._links.items() if predicate(link)]
        for link_id in doomed:
            del self._links[link_id]
        return len(doomed)


__all__ = ["InMemoryCartStore"]
