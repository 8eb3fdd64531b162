# 🧪 tests/domain/test_entities.py
"""
🧪 Тести валідації доменних сутностей `Product` та `Rule`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.domain.products import Product, Rule, RuleConditionType
from app.shared.errors import ValidationError
from app.shared.utils.logger import LOG_NAME

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _product(**overrides) -> Product:
    fields = dict(
        id=1,
        user_id="alice",
        title="Wireless Mouse",
        price="799.5",
        original_url="https://www.amazon.in/dp/B0TEST",
        store_domain="Amazon India",
        created_at=NOW,
        updated_at=NOW,
    )
    fields.update(overrides)
    return Product(**fields)


def test_price_is_quantized_to_two_places() -> None:
    assert _product().price == Decimal("799.50")
    assert _product(price="10.005").price == Decimal("10.01")


def test_long_title_is_truncated() -> None:
    assert len(_product(title="x" * 600).title) == 500


def test_blank_optionals_become_none() -> None:
    product = _product(image_url="  ", color="", notes=" ")

    assert product.image_url is None
    assert product.color is None
    assert product.notes is None


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"price": "-1"}, "price"),
        ({"price": "100000000"}, "price"),
        ({"original_url": "amazon.in/dp/x"}, "originalUrl"),
        ({"user_id": ""}, "userId"),
        ({"notes": "n" * 2001}, "notes"),
    ],
)
def test_invalid_product_fields(overrides, field) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _product(**overrides)

    assert field in {problem["field"] for problem in exc_info.value.errors}


def test_product_to_dict_is_camel_case() -> None:
    data = _product().to_dict()

    assert data["originalUrl"] == "https://www.amazon.in/dp/B0TEST"
    assert data["price"] == "799.50"
    assert data["createdAt"] == NOW.isoformat()


def test_rule_coerces_enums() -> None:
    rule = Rule(
        id=1,
        user_id="alice",
        name="  Urgent  ",
        trigger="low_stock",
        action="highlight",
        created_at=NOW,
        updated_at=NOW,
        condition_type="stock_level",
        condition_value=" 3 ",
    )

    assert rule.name == "Urgent"
    assert rule.condition_type is RuleConditionType.STOCK_LEVEL
    assert rule.condition_value == "3"
    assert rule.to_dict()["trigger"] == "low_stock"


def test_rule_rejects_unknown_condition_type() -> None:
    with pytest.raises(ValidationError) as exc_info:
        Rule(
            id=1,
            user_id="alice",
            name="Rule",
            trigger="price_drop",
            action="notify",
            created_at=NOW,
            updated_at=NOW,
            condition_type="whenever",
        )

    assert exc_info.value.errors[0]["field"] == "conditionType"


def test_validation_failures_log_under_app_namespace(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=f"{LOG_NAME}.domain")

    with pytest.raises(ValidationError):
        _product(price="abc")

    assert any(record.name == f"{LOG_NAME}.domain" for record in caplog.records)
