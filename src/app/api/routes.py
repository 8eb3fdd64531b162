# 🌐 app/api/routes.py
"""
🌐 HTTP-маршрути кошика: екстракція, товари, правила та їх звʼязки.

🔹 Кожен маршрут `/api/*` вимагає заголовок `X-User-Id` (інакше 401).
🔹 Помилки не обробляються тут: вони піднімаються і перетворюються
   глобальним обробником (`app.errors.error_handler`).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from flask import Blueprint, current_app, g, jsonify, request	# 🌐 Flask API

# 🔠 Системні імпорти
import asyncio	# ⏳ Запуск асинхронної екстракції з sync-view
import logging	# 🧾 Логування запитів
from typing import Any, Dict, Mapping	# 🧰 Типи
from urllib.parse import urlsplit	# 🔗 Хост із URL

# 🧩 Внутрішні модулі проєкту
from app.domain.products.entities import ExtractedProduct	# 🧾 Підтверджений результат екстракції
from app.errors.custom_errors import ExtractionFailedError	# 🧾 Відмова екстракції на межі HTTP
from app.infrastructure.url.marketplace_classifier import normalize_host	# 🌐 Хост без www.
from app.shared.errors import UnauthorizedError, ValidationError	# 🚨 Відмови запиту
from app.shared.utils.logger import LOG_NAME	# 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.api")	# 🧾 Логер HTTP-шару

USER_HEADER = "X-User-Id"	# 🆔 Ідентичність від зовнішньої автентифікації

api = Blueprint("api", __name__, url_prefix="/api")


# ================================
# 🧰 ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _container():
    return current_app.extensions["container"]


def _store():
    return _container().cart_store


def _json_body() -> Dict[str, Any]:
    """Тіло запиту як словник; будь-що інше → 400."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _require_id(body: Mapping[str, Any], key: str) -> int:
    raw = body.get(key)
    if isinstance(raw, bool) or raw is None or not str(raw).strip().isdigit():
        raise ValidationError(f"{key} is required", errors=[{"field": key, "message": "must be a positive integer"}])
    return int(str(raw).strip())


def _extracted_from_payload(raw: Any, url: str) -> ExtractedProduct:
    """JSON `product` із запиту підтвердження → `ExtractedProduct`."""
    if not isinstance(raw, dict):
        raise ValidationError("product is required", errors=[{"field": "product", "message": "must be an object"}])
    store_domain = str(raw.get("storeDomain") or "").strip()
    if not store_domain:
        # 🌐 Фолбек: хост із URL
        store_domain = normalize_host(urlsplit(url).hostname) or "unknown"
    try:
        return ExtractedProduct(
            title=str(raw.get("title") or "").strip(),
            price=str(raw.get("price") or "").strip(),
            store_domain=store_domain,
            image_url=raw.get("imageUrl") or None,
            color=raw.get("color") or None,
            size=raw.get("size") or None,
            availability=raw.get("availability") or None,
        )
    except ValueError as exc:
        raise ValidationError("Invalid product data", details=str(exc)) from None


# ================================
# 🔐 ІДЕНТИЧНІСТЬ
# ================================
@api.before_request
def _identify_user() -> None:
    user_id = (request.headers.get(USER_HEADER) or "").strip()
    if not user_id:
        raise UnauthorizedError("Unauthorized")
    g.user_id = user_id


# ================================
# 🧾 ЕКСТРАКЦІЯ
# ================================
@api.post("/products/extract")
def extract_product():
    url = str(_json_body().get("url") or "").strip()
    if not url:
        raise ValidationError("URL is required")

    logger.info("🔗 Екстракція для user=%s: %s", g.user_id, url)
    result = asyncio.run(_container().extraction_service.extract_from_url(url))
    if not result.success:
        raise ExtractionFailedError(result.error)
    return jsonify(result.product.to_dict())


@api.post("/products/confirm")
def confirm_product():
    body = _json_body()
    url = str(body.get("url") or "").strip()
    if not url:
        raise ValidationError("URL is required")
    extracted = _extracted_from_payload(body.get("product"), url)
    product = _store().create_product_from_extracted(
        g.user_id,
        extracted,
        url,
        quantity=body.get("quantity", 1),
        notes=body.get("notes"),
    )
    return jsonify(product.to_dict()), 201


# ================================
# 🛒 ТОВАРИ
# ================================
@api.get("/products")
def list_products():
    return jsonify([p.to_dict() for p in _store().get_user_products(g.user_id)])


@api.post("/products")
def create_product():
    product = _store().create_product(g.user_id, _json_body())
    return jsonify(product.to_dict()), 201


@api.put("/products/<int:product_id>")
def update_product(product_id: int):
    product = _store().update_product(product_id, g.user_id, _json_body())
    return jsonify(product.to_dict())


@api.delete("/products/<int:product_id>")
def delete_product(product_id: int):
    _store().delete_product(product_id, g.user_id)
    return "", 204


# ================================
# 🔔 ПРАВИЛА
# ================================
@api.get("/rules")
def list_rules():
    return jsonify([r.to_dict() for r in _store().get_user_rules(g.user_id)])


@api.post("/rules")
def create_rule():
    rule = _store().create_rule(g.user_id, _json_body())
    return jsonify(rule.to_dict()), 201


@api.put("/rules/<int:rule_id>")
def update_rule(rule_id: int):
    rule = _store().update_rule(rule_id, g.user_id, _json_body())
    return jsonify(rule.to_dict())


@api.delete("/rules/<int:rule_id>")
def delete_rule(rule_id: int):
    _store().delete_rule(rule_id, g.user_id)
    return "", 204


# ================================
# 🔗 ТОВАРИ ПРАВИЛА
# ================================
@api.get("/rules/<int:rule_id>/products")
def list_rule_products(rule_id: int):
    return jsonify([p.to_dict() for p in _store().get_rule_products(rule_id, g.user_id)])


@api.post("/rules/<int:rule_id>/products")
def add_rule_product(rule_id: int):
    product_id = _require_id(_json_body(), "productId")
    link = _store().add_product_to_rule(rule_id, product_id, g.user_id)
    return jsonify(link.to_dict()), 201


@api.delete("/rules/<int:rule_id>/products/<int:product_id>")
def remove_rule_product(rule_id: int, product_id: int):
    _store().remove_product_from_rule(rule_id, product_id, g.user_id)
    return "", 204


__all__ = ["api", "USER_HEADER"]
