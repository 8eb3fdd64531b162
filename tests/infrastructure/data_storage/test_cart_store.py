# 🧪 tests/infrastructure/data_storage/test_cart_store.py
"""
🧪 Тести для `InMemoryCartStore`.

Перевіряємо:
- ізоляцію користувачів (чужий == відсутній);
- каскадне видалення звʼязків правило↔товар;
- інваріант «звʼязок лише між сутностями одного користувача»;
- валідацію кількості, ціни та полів правила.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.products import ExtractedProduct, RuleAction, RuleTrigger
from app.infrastructure.data_storage import InMemoryCartStore
from app.shared.errors import NotFoundError, ValidationError

ALICE = "user-alice"
BOB = "user-bob"


class _TickingClock:
    """Кожен виклик повертає час на секунду пізніше."""

    def __init__(self):
        self._now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


@pytest.fixture
def store() -> InMemoryCartStore:
    return InMemoryCartStore(clock=_TickingClock())


def _product_payload(**overrides):
    payload = {
        "title": "Wireless Mouse",
        "price": "799",
        "originalUrl": "https://www.amazon.in/dp/B0TEST",
        "storeDomain": "Amazon India",
    }
    payload.update(overrides)
    return payload


def _rule_payload(**overrides):
    payload = {"name": "Cheap mouse", "trigger": "price_drop", "action": "notify"}
    payload.update(overrides)
    return payload


# ──────────────────────────────────────────────────────────────────────────────
#                                  🛒 Товари
# ──────────────────────────────────────────────────────────────────────────────

def test_create_and_read_product(store) -> None:
    product = store.create_product(ALICE, _product_payload(quantity=2, notes="  gift  "))

    assert product.id == 1
    assert product.price == Decimal("799.00")
    assert product.quantity == 2
    assert product.notes == "gift"
    assert store.get_product(product.id, ALICE) == product
    assert product.to_dict()["price"] == "799.00"


def test_products_are_isolated_per_user(store) -> None:
    product = store.create_product(ALICE, _product_payload())

    assert store.get_product(product.id, BOB) is None
    assert store.get_user_products(BOB) == []
    with pytest.raises(NotFoundError):
        store.update_product(product.id, BOB, {"quantity": 3})
    with pytest.raises(NotFoundError):
        store.delete_product(product.id, BOB)


def test_user_products_are_newest_first(store) -> None:
    first = store.create_product(ALICE, _product_payload(title="First item"))
    second = store.create_product(ALICE, _product_payload(title="Second item"))

    assert [p.id for p in store.get_user_products(ALICE)] == [second.id, first.id]


def test_store_domain_defaults_to_url_host(store) -> None:
    product = store.create_product(ALICE, _product_payload(storeDomain=""))

    assert product.store_domain == "amazon.in"


@pytest.mark.parametrize("quantity", [0, -1, 1.5, True, "two"])
def test_quantity_must_be_positive_integer(store, quantity) -> None:
    with pytest.raises(ValidationError) as exc_info:
        store.create_product(ALICE, _product_payload(quantity=quantity))

    assert {"field": "quantity", "message": "must be an integer >= 1"} in exc_info.value.errors


def test_missing_fields_are_reported_together(store) -> None:
    with pytest.raises(ValidationError) as exc_info:
        store.create_product(ALICE, {"notes": "no data"})

    fields = {problem["field"] for problem in exc_info.value.errors}
    assert {"title", "price", "originalUrl", "storeDomain"} <= fields


def test_update_changes_only_writable_fields(store) -> None:
    product = store.create_product(ALICE, _product_payload())

    updated = store.update_product(product.id, ALICE, {"quantity": "3", "id": 99, "userId": BOB, "bogus": 1})

    assert updated.id == product.id
    assert updated.user_id == ALICE
    assert updated.quantity == 3
    assert updated.updated_at > product.updated_at
    assert updated.created_at == product.created_at


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,999.00", Decimal("1999.00")),
        ("₹2,074.17", Decimal("2074.17")),
        ("Rs. 450", Decimal("450.00")),
    ],
)
def test_manual_price_with_separators_and_symbol(store, raw, expected) -> None:
    product = store.create_product(ALICE, _product_payload(price=raw))

    assert product.price == expected


def test_update_accepts_displayed_price(store) -> None:
    product = store.create_product(ALICE, _product_payload())

    updated = store.update_product(product.id, ALICE, {"price": "₹1,249.50"})

    assert updated.price == Decimal("1249.50")


@pytest.mark.parametrize("raw", ["-1,000", "abc", "12 apples"])
def test_non_price_strings_are_still_rejected(store, raw) -> None:
    with pytest.raises(ValidationError) as exc_info:
        store.create_product(ALICE, _product_payload(price=raw))

    assert {"field": "price", "message": "must be a decimal number"} in exc_info.value.errors


def test_invalid_update_keeps_previous_state(store) -> None:
    product = store.create_product(ALICE, _product_payload())

    with pytest.raises(ValidationError):
        store.update_product(product.id, ALICE, {"quantity": 0})

    assert store.get_product(product.id, ALICE).quantity == 1


def test_create_from_extracted(store) -> None:
    extracted = ExtractedProduct(title="Desk Lamp", price="₹2,074.17", store_domain="Amazon US", color="Black")

    product = store.create_product_from_extracted(ALICE, extracted, "https://www.amazon.com/dp/B0LAMP", quantity=2)

    assert product.price == Decimal("2074.17")
    assert product.store_domain == "Amazon US"
    assert product.color == "Black"
    assert product.quantity == 2


def test_create_from_extracted_with_unreadable_price(store) -> None:
    extracted = ExtractedProduct(title="Desk Lamp", price="See price in cart", store_domain="eBay")

    with pytest.raises(ValidationError):
        store.create_product_from_extracted(ALICE, extracted, "https://www.ebay.com/itm/1")


# ──────────────────────────────────────────────────────────────────────────────
#                                  🔔 Правила
# ──────────────────────────────────────────────────────────────────────────────

def test_create_rule_with_products(store) -> None:
    mouse = store.create_product(ALICE, _product_payload())
    lamp = store.create_product(ALICE, _product_payload(title="Desk Lamp"))

    rule = store.create_rule(
        ALICE,
        _rule_payload(conditionType="price_below", conditionValue="500", productIds=[mouse.id, lamp.id, mouse.id]),
    )

    assert rule.trigger is RuleTrigger.PRICE_DROP
    assert rule.action is RuleAction.NOTIFY
    assert rule.is_active is True
    assert rule.to_dict()["conditionType"] == "price_below"
    assert [p.id for p in store.get_rule_products(rule.id, ALICE)] == [mouse.id, lamp.id]


def test_rule_with_foreign_product_is_rejected_atomically(store) -> None:
    foreign = store.create_product(BOB, _product_payload())

    with pytest.raises(NotFoundError):
        store.create_rule(ALICE, _rule_payload(productIds=[foreign.id]))

    assert store.get_user_rules(ALICE) == []


def test_rule_validation_errors(store) -> None:
    with pytest.raises(ValidationError) as exc_info:
        store.create_rule(ALICE, {"name": "", "trigger": "sometimes", "action": "notify", "isActive": "yes"})

    fields = {problem["field"] for problem in exc_info.value.errors}
    assert fields == {"name", "trigger", "isActive"}


def test_update_rule(store) -> None:
    rule = store.create_rule(ALICE, _rule_payload())

    updated = store.update_rule(rule.id, ALICE, {"isActive": False, "action": "mark_urgent"})

    assert updated.is_active is False
    assert updated.action is RuleAction.MARK_URGENT
    with pytest.raises(NotFoundError):
        store.update_rule(rule.id, BOB, {"isActive": True})


# ──────────────────────────────────────────────────────────────────────────────
#                                  🔗 Звʼязки
# ──────────────────────────────────────────────────────────────────────────────

def test_link_requires_same_user(store) -> None:
    rule = store.create_rule(ALICE, _rule_payload())
    bobs_product = store.create_product(BOB, _product_payload())

    with pytest.raises(NotFoundError):
        store.add_product_to_rule(rule.id, bobs_product.id, ALICE)
    with pytest.raises(NotFoundError):
        store.add_product_to_rule(rule.id, bobs_product.id, BOB)


def test_duplicate_link_is_idempotent(store) -> None:
    product = store.create_product(ALICE, _product_payload())
    rule = store.create_rule(ALICE, _rule_payload())

    first = store.add_product_to_rule(rule.id, product.id, ALICE)
    second = store.add_product_to_rule(rule.id, product.id, ALICE)

    assert first == second
    assert len(store.get_rule_products(rule.id, ALICE)) == 1


def test_deleting_product_removes_its_links(store) -> None:
    product = store.create_product(ALICE, _product_payload())
    rule = store.create_rule(ALICE, _rule_payload(productIds=[product.id]))

    store.delete_product(product.id, ALICE)

    assert store.get_product(product.id, ALICE) is None
    assert store.get_rule_products(rule.id, ALICE) == []


def test_deleting_rule_removes_links_but_keeps_products(store) -> None:
    product = store.create_product(ALICE, _product_payload())
    rule = store.create_rule(ALICE, _rule_payload(productIds=[product.id]))

    store.delete_rule(rule.id, ALICE)

    assert store.get_rule(rule.id, ALICE) is None
    assert store.get_product(product.id, ALICE) is not None
    with pytest.raises(NotFoundError):
        store.get_rule_products(rule.id, ALICE)


def test_remove_product_from_rule(store) -> None:
    product = store.create_product(ALICE, _product_payload())
    rule = store.create_rule(ALICE, _rule_payload(productIds=[product.id]))

    store.remove_product_from_rule(rule.id, product.id, ALICE)

    assert store.get_rule_products(rule.id, ALICE) == []
    with pytest.raises(NotFoundError):
        store.remove_product_from_rule(rule.id, product.id, ALICE)
