# 🧪 tests/infrastructure/parsers/test_site_extractor.py
"""
🧪 Тести для `SiteExtractor` на вбудованій таблиці селекторів.

Перевіряємо:
- Amazon India: назва, ціна та підпис магазину;
- Amazon US: конверсію USD → INR;
- порядок кандидатів, атрибутні селектори та протокол-відносні зображення;
- MISSING_REQUIRED_FIELDS, коли назви чи ціни немає.
"""

from __future__ import annotations

import pytest

from app.infrastructure.parsers import build_site_extractors
from app.shared.result import Err, ExtractionErrorKind, Ok


@pytest.fixture
def extractors(normalizer):
    return build_site_extractors(normalizer)


def test_amazon_india_minimal_page(extractors, soup) -> None:
    html = """
    <html><body>
      <span id="productTitle">  Wireless Mouse </span>
      <span class="a-price-whole">799</span>
    </body></html>
    """

    result = extractors["amazon.in"].extract(soup(html), domain="amazon.in")

    assert isinstance(result, Ok)
    assert result.value.to_dict() == {"title": "Wireless Mouse", "price": "799", "storeDomain": "Amazon India"}


def test_amazon_us_price_is_converted(extractors, soup) -> None:
    html = '<span id="productTitle">Desk Lamp</span><span class="a-price"><span class="a-offscreen">$24.99</span></span>'

    result = extractors["amazon.com"].extract(soup(html), domain="amazon.com")

    assert isinstance(result, Ok)
    assert result.value.price == "₹2,074.17"
    assert result.value.store_domain == "Amazon US"


def test_amazon_us_rupee_price_is_not_converted(extractors, soup) -> None:
    html = '<span id="productTitle">Desk Lamp</span><span class="a-price-whole">₹1,299</span>'

    result = extractors["amazon.com"].extract(soup(html), domain="amazon.com")

    assert isinstance(result, Ok)
    assert result.value.price == "1,299"


def test_first_candidate_wins_and_optional_fields(extractors, soup) -> None:
    html = """
    <h1 class="a-size-large">Secondary title</h1>
    <span id="productTitle">Primary title</span>
    <span class="a-price-whole">1,499.</span>
    <img id="landingImage" src="//m.media-amazon.com/images/I/abc.jpg">
    <div id="availability"><span> In stock </span></div>
    <div id="variation_color_name"><span class="selection">Black</span></div>
    <div id="variation_size_name"><span class="selection">M</span></div>
    """

    product = extractors["amazon.in"].extract(soup(html), domain="amazon.in").value

    assert product.title == "Primary title"
    assert product.price == "1,499."
    assert product.image_url == "https://m.media-amazon.com/images/I/abc.jpg"
    assert product.availability == "In stock"
    assert product.color == "Black"
    assert product.size == "M"


def test_attribute_selector_reads_swatch_title(extractors, soup) -> None:
    html = """
    <span id="productTitle">Shirt</span><span class="a-price-whole">499</span>
    <div class="swatches-container"><li class="swatch selected" title="Navy Blue"></li></div>
    """

    product = extractors["amazon.in"].extract(soup(html), domain="amazon.in").value

    assert product.color == "Navy Blue"


def test_flipkart_uses_hostname_label(extractors, soup) -> None:
    html = '<h1><span>Running Shoes</span></h1><div class="_30jeq3 _16Jk6d">₹2,999</div>'

    result = extractors["flipkart.com"].extract(soup(html), domain="flipkart.com")

    assert isinstance(result, Ok)
    assert result.value.title == "Running Shoes"
    assert result.value.price == "2,999"
    assert result.value.store_domain == "flipkart.com"


def test_ebay_price_always_converted(extractors, soup) -> None:
    html = '<h1 class="x-item-title-label">Vintage Camera</h1><div class="display-price">US 10.00</div>'

    product = extractors["ebay.com"].extract(soup(html), domain="ebay.com").value

    assert product.price == "₹830.00"
    assert product.store_domain == "eBay"


def test_missing_title_fails_with_site_name(extractors, soup) -> None:
    html = '<h1>Bare heading only</h1><span class="a-price-whole">799</span>'

    result = extractors["amazon.in"].extract(soup(html), domain="amazon.in")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.MISSING_REQUIRED_FIELDS
    assert result.error.missing_fields == ("title",)
    assert result.error.message == (
        "Could not extract required product information from Amazon page. The page structure may have changed."
    )


def test_extraction_is_deterministic(extractors, soup) -> None:
    html = '<span id="productTitle">Mouse</span><span class="a-price-whole">799</span>'

    first = extractors["amazon.in"].extract(soup(html), domain="amazon.in")
    second = extractors["amazon.in"].extract(soup(html), domain="amazon.in")

    assert first == second
