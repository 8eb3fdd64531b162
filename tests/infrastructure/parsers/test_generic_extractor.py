# 🧪 tests/infrastructure/parsers/test_generic_extractor.py
"""
🧪 Тести для `GenericExtractor`: фільтри кандидатів та текст відмови.
"""

from __future__ import annotations

import pytest

from app.infrastructure.parsers import GenericExtractor
from app.shared.result import Err, ExtractionErrorKind, Ok


@pytest.fixture
def generic(normalizer) -> GenericExtractor:
    return GenericExtractor(normalizer)


def test_generic_extracts_title_price_image(generic, soup) -> None:
    html = """
    <h1>Cotton Kurta Set</h1>
    <span class="price">₹1,249.00</span>
    <img class="product-main" src="https://cdn.example.com/kurta.jpg">
    """

    result = generic.extract(soup(html), "example.com")

    assert isinstance(result, Ok)
    assert result.value.to_dict() == {
        "title": "Cotton Kurta Set",
        "price": "1,249.00",
        "imageUrl": "https://cdn.example.com/kurta.jpg",
        "storeDomain": "example.com",
    }


def test_short_title_candidates_are_skipped(generic, soup) -> None:
    html = '<h1>Sale</h1><div class="product-title">Linen Shirt</div><span class="price">999</span>'

    product = generic.extract(soup(html), "example.com").value

    assert product.title == "Linen Shirt"


def test_price_without_digits_is_skipped(generic, soup) -> None:
    html = '<h1>Linen Shirt</h1><span class="price">Call us</span><span class="product-price">Rs 650</span>'

    product = generic.extract(soup(html), "example.com").value

    assert product.price == "650"


def test_relative_image_is_skipped_and_og_image_used(generic, soup) -> None:
    html = """
    <head><meta property="og:image" content="//cdn.example.com/og.jpg"></head>
    <h1>Linen Shirt</h1><span class="price">650</span>
    <img alt="product photo" src="/local/thumb.jpg">
    """

    product = generic.extract(soup(html), "example.com").value

    assert product.image_url == "https://cdn.example.com/og.jpg"


def test_generic_never_converts_currency(generic, soup) -> None:
    html = '<h1>Desk Lamp Pro</h1><span class="price">$24.99</span>'

    product = generic.extract(soup(html), "amazon.com").value

    assert product.price == "24.99"


def test_missing_fields_message(generic, soup) -> None:
    result = generic.extract(soup("<p>nothing here</p>"), "example.com")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.MISSING_REQUIRED_FIELDS
    assert result.error.missing_fields == ("title", "price")
    assert result.error.message == "Generic extraction failed - Could not find title and price on the page"
