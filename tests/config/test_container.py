# 🧪 tests/config/test_container.py
"""
🧪 Тести для DI-контейнера: сервіси збираються з конфігу.
"""

from __future__ import annotations

from decimal import Decimal

from app.config.config_service import ConfigService
from app.config.setup.container import Container
from app.infrastructure.data_storage import InMemoryCartStore


def test_container_wires_services_from_config() -> None:
    config = ConfigService(
        {
            "marketplaces.supported": ["myntra.com", "ajio.com"],
            "currency.usd_to_inr_rate": "80",
            "fetcher.timeout_sec": "2.5",
            "parser.selectors.marketplaces": {"myntra.com": {"title": ["h2.name"]}},
        },
        use_env=False,
    )

    container = Container(config)

    assert container.classifier.supported == ["myntra.com", "ajio.com"]
    assert container.price_normalizer.rate == Decimal("80")
    assert container.page_fetcher.timeout_s == 2.5
    assert container.site_extractors["myntra.com"].selectors.title == ("h2.name",)
    assert isinstance(container.cart_store, InMemoryCartStore)
    assert container.extraction_service.classifier is container.classifier


def test_invalid_rate_falls_back_to_default() -> None:
    container = Container(ConfigService({"currency.usd_to_inr_rate": "-3"}, use_env=False))

    assert container.price_normalizer.rate == Decimal("83.0")
