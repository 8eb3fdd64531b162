# 🗂️ app/infrastructure/parsers/extractors/site_rules.py
"""
🗂️ Декларативна таблиця селекторів `{маркетплейс: {поле: [селектор, ...]}}`.

🔹 `SITE_SELECTORS` — вбудовані ланцюжки кандидатів для кожного підтримуваного сайту.
🔹 `SITE_PROFILES` — метадані маркетплейсу: назва для повідомлень та політика підпису магазину.
🔹 `GENERIC_SELECTORS` — універсальні пули для фолбек-екстрактора.
🔹 `build_selector_table()` накладає перевизначення з `parser.selectors.marketplaces`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування
from dataclasses import dataclass	# 🧱 Профіль сайту
from typing import Any, Dict, Mapping, Optional	# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from app.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера
from .base import FieldSelectors	# 🧱 Селектори полів

logger = logging.getLogger(f"{LOG_NAME}.parser.rules")


# ================================
# 🏷️ ПРОФІЛІ МАРКЕТПЛЕЙСІВ
# ================================
@dataclass(frozen=True)
class SiteProfile:
    """Метадані маркетплейсу, що не є селекторами."""
    name: str	# 🏷️ Назва для повідомлень («Amazon», «Flipkart»)
    rules: str	# 🗂️ Ключ у таблиці селекторів
    store_label: Optional[str] = None	# 🏪 Фіксований підпис; None → хост без www.


SITE_PROFILES: Dict[str, SiteProfile] = {
    "amazon.com": SiteProfile(name="Amazon", rules="amazon", store_label="Amazon US"),
    "amazon.in": SiteProfile(name="Amazon", rules="amazon", store_label="Amazon India"),
    "ebay.com": SiteProfile(name="eBay", rules="ebay", store_label="eBay"),
    "flipkart.com": SiteProfile(name="Flipkart", rules="flipkart"),
    "myntra.com": SiteProfile(name="Myntra", rules="myntra"),
    "nykaa.com": SiteProfile(name="Nykaa", rules="nykaa"),
    "ajio.com": SiteProfile(name="Ajio", rules="ajio"),
    "meesho.com": SiteProfile(name="Meesho", rules="meesho"),
    "shopclues.com": SiteProfile(name="Shopclues", rules="shopclues"),
    "snapdeal.com": SiteProfile(name="Snapdeal", rules="snapdeal"),
}	# 🗺️ id маркетплейсу (елемент allow-list) → профіль


# ================================
# 📋 ТАБЛИЦЯ СЕЛЕКТОРІВ
# ================================
SITE_SELECTORS: Dict[str, Dict[str, tuple]] = {
    "amazon": {
        "title": ("#productTitle", "h1.a-size-large", '[data-feature-name="title"] h1'),
        "price": (".a-price-whole", ".a-price .a-offscreen", "#priceblock_dealprice", "#priceblock_ourprice"),
        "image": ("#landingImage", ".a-dynamic-image", "#imgTagWrapperId img"),
        "availability": ("#availability span", ".a-color-state"),
        "color": ("#variation_color_name .selection", ".swatches-container .swatch.selected @title"),
        "size": ("#variation_size_name .selection", ".size-selections .selected"),
    },
    "flipkart": {
        "title": ("h1 span", ".B_NuCI", "._35KyD6", 'h1[class*="title"]', 'span[class*="title"]', "h1"),
        "price": ("._30jeq3._16Jk6d", "._30jeq3", "._1_WHN1", 'div[class*="price"] span', 'span[class*="price"]'),
        "image": ("._396cs4 img", "._2r_T1I img", "._3li7GG img", 'img[class*="product"]', 'img[alt*="product"]'),
        "availability": ("._16FRp0", "._3xgqrA", 'div[class*="stock"]'),
        "color": ('div[class*="color"] span', ".selected-color"),
        "size": ('div[class*="size"] span', ".selected-size"),
    },
    "myntra": {
        "title": ("h1.pdp-title", ".pdp-name", 'h1[class*="title"]', "h1"),
        "price": (".pdp-price strong", ".price-current", 'span[class*="price"]', 'div[class*="price"] span'),
        "image": (".image-grid-image", ".pdp-img", 'img[class*="image"]', 'img[alt*="product"]'),
        "color": ('span[class*="color"]', ".selected-color"),
        "size": ('span[class*="size"]', ".selected-size"),
    },
    "nykaa": {
        "title": (
            'h1[data-testid="pdp_product_name"]',
            ".product-title",
            'h1[class*="product"]',
            'h1[class*="title"]',
            "h1",
        ),
        "price": ('[data-testid="pdp_product_price"]', ".price", 'span[class*="price"]', 'div[class*="price"] span'),
        "image": ('[data-testid="pdp_product_image"] img', ".product-image img", 'img[class*="product"]', 'img[alt*="product"]'),
        "color": ('span[class*="color"]', 'div[class*="shade"]', ".selected-color"),
        "size": ('span[class*="size"]', ".selected-size"),
    },
    "ajio": {
        "title": ("h1.pdp-product-name", ".product-name", 'h1[class*="product"]', 'h1[class*="title"]', "h1"),
        "price": (
            ".pdp-price .price-value",
            ".current-price",
            'span[class*="price"]',
            ".price",
            'div[class*="price"] span',
        ),
        "image": (".pdp-image img", ".product-image img", 'img[class*="product"]', 'img[alt*="product"]'),
        "color": ('span[class*="color"]', ".selected-color"),
        "size": ('span[class*="size"]', ".selected-size"),
    },
    "meesho": {
        "title": ('h1[class*="product"]', ".product-title", 'h1[class*="title"]', "h1"),
        "price": ('span[class*="price"]', ".price", 'div[class*="price"] span', 'span[class*="rs"]'),
        "image": ('img[class*="product"]', ".product-image img", 'img[alt*="product"]', "img"),
        "availability": ('span[class*="stock"]', 'div[class*="available"]'),
    },
    "shopclues": {
        "title": ("h1.prd_name", ".product-title", 'h1[class*="product"]', "h1"),
        "price": (".prd_price", ".price", 'span[class*="price"]', 'div[class*="price"] span'),
        "image": (".prd_img img", ".product-image img", 'img[class*="product"]', 'img[alt*="product"]'),
        "availability": ('span[class*="stock"]', ".availability"),
    },
    "snapdeal": {
        "title": ('h1[itemprop="name"]', ".pdp-product-name", 'h1[class*="product"]', "h1"),
        "price": ('span[itemprop="price"]', ".payBlkBig", ".price", 'span[class*="price"]'),
        "image": ('img[itemprop="image"]', ".cloudzoom", ".product-image img", 'img[class*="product"]'),
        "availability": ('div[class*="stock"]', ".availability-status"),
    },
    "ebay": {
        "title": (
            'h1[data-testid="x-item-title-label"]',
            ".x-item-title-label",
            "#iti-title",
            'h1[class*="notranslate"]',
            "h1",
        ),
        "price": ('[data-testid="notranslate"]', ".display-price", '[class*="price"]', ".u-flL.condText", "#prcIsum"),
        "image": (
            "#icImg",
            '[data-testid="ux-image-carousel-item"] img',
            ".ux-image-carousel-item img",
            'img[alt*="Picture"]',
            "img",
        ),
        "availability": ('[data-testid="u-bold"]', ".u-flL.condText", '[class*="available"]'),
    },
}


# ================================
# 🧭 УНІВЕРСАЛЬНІ ПУЛИ
# ================================
GENERIC_SELECTORS = FieldSelectors(
    title=(
        "h1",
        '[data-testid*="title"]',
        '[data-testid*="name"]',
        ".product-title",
        ".pdp-title",
        ".product-name",
        '[class*="title"]',
        '[class*="name"]',
        '[class*="product-title"]',
    ),
    price=(
        '[data-testid*="price"]',
        ".price",
        ".product-price",
        ".current-price",
        '[class*="price"]',
        '[class*="current"]',
        'span[class*="rs"]',
        'span[class*="rupee"]',
        'span[class*="₹"]',
    ),
    image=(
        'img[alt*="product"]',
        'img[class*="product"]',
        'img[data-testid*="image"]',
        ".product-image img",
        ".pdp-image img",
        "main img",
        'img[src*="product"]',
        'meta[property="og:image"] @content',
    ),
)


# ================================
# 🔄 ЗЛИТТЯ З КОНФІГОМ
# ================================
def build_selector_table(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, FieldSelectors]:
    """
    Повертає таблицю `{marketplace_id: FieldSelectors}` з урахуванням конфігу.

    Args:
        overrides: Вузол `parser.selectors.marketplaces` — ключем може бути
            id маркетплейсу (`amazon.com`) або ключ набору правил (`amazon`).
    """
    base: Dict[str, FieldSelectors] = {
        rules_key: FieldSelectors.from_mapping(chains) for rules_key, chains in SITE_SELECTORS.items()
    }	# 🧱 Стартуємо з вбудованих селекторів
    node = overrides if isinstance(overrides, Mapping) else {}

    table: Dict[str, FieldSelectors] = {}
    for marketplace_id, profile in SITE_PROFILES.items():
        selectors = base[profile.rules].merged(node.get(profile.rules))	# 🔄 Перевизначення набору правил
        selectors = selectors.merged(node.get(marketplace_id))	# 🏷️ Точкове перевизначення маркетплейсу
        table[marketplace_id] = selectors

    unknown = sorted(set(node) - set(SITE_PROFILES) - set(SITE_SELECTORS))
    if unknown:
        logger.warning("⚠️ Перевизначення для невідомих маркетплейсів проігноровано: %s", ", ".join(unknown))
    logger.debug("🔧 Таблиця селекторів зібрана (%d маркетплейсів, overrides=%d)", len(table), len(node))
    return table


__all__ = [
    "SiteProfile",
    "SITE_PROFILES",
    "SITE_SELECTORS",
    "GENERIC_SELECTORS",
    "build_selector_table",
]
