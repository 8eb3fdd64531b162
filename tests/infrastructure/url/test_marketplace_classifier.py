# 🧪 tests/infrastructure/url/test_marketplace_classifier.py
"""
🧪 Тести для `MarketplaceClassifier`.

Перевіряємо:
- перший збіг allow-list визначає маркетплейс;
- `www.` та регістр не впливають на результат;
- невалідні та непідтримувані URL дають типізовану відмову.
"""

from __future__ import annotations

import pytest

from app.config.config_service import DEFAULTS
from app.infrastructure.url import MarketplaceClassifier
from app.shared.result import Err, ExtractionErrorKind, Ok

SUPPORTED = DEFAULTS["marketplaces"]["supported"]


@pytest.fixture
def classifier() -> MarketplaceClassifier:
    return MarketplaceClassifier(SUPPORTED)


@pytest.mark.parametrize(
    "url,expected_id,expected_domain",
    [
        ("https://www.amazon.in/dp/B0TEST", "amazon.in", "amazon.in"),
        ("https://WWW.Amazon.com/dp/B0TEST", "amazon.com", "amazon.com"),
        ("https://smile.amazon.com/dp/B0TEST", "amazon.com", "smile.amazon.com"),
        ("http://www.flipkart.com/p/itm123", "flipkart.com", "flipkart.com"),
        ("https://www.ebay.com/itm/1234", "ebay.com", "ebay.com"),
    ],
)
def test_classify_known_marketplaces(classifier, url, expected_id, expected_domain) -> None:
    result = classifier.classify(url)

    assert isinstance(result, Ok)
    assert result.value.id == expected_id
    assert result.value.domain == expected_domain


def test_unlisted_host_is_unsupported(classifier) -> None:
    result = classifier.classify("https://shop.example.com/item")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.UNSUPPORTED_DOMAIN
    assert result.error.message.startswith("Unsupported domain: shop.example.com. Supported sites: amazon.in, ")


@pytest.mark.parametrize("url", ["", "not a url", "ftp://amazon.in/file", "https://"])
def test_invalid_urls(classifier, url) -> None:
    result = classifier.classify(url)

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.INVALID_URL
    assert result.error.message.startswith("Invalid URL")


def test_substring_match_keeps_allow_list_order() -> None:
    """Хост, що містить кілька елементів, належить першому з них."""
    classifier = MarketplaceClassifier(["ebay.com", "amazon.com"])

    result = classifier.classify("https://amazon.com.ebay.com/item")

    assert isinstance(result, Ok)
    assert result.value.id == "ebay.com"


def test_blank_entries_are_dropped() -> None:
    classifier = MarketplaceClassifier([" Amazon.in ", "", "  "])

    assert classifier.supported == ["amazon.in"]
