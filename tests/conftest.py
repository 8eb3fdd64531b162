# tests/conftest.py
import os
import sys
from pathlib import Path

import pytest

# 1) Гасимо автопідхоплення сторонніх плагінів
os.environ.setdefault("PYTEST_DISABLE_PLUGIN_AUTOLOAD", "1")

# 2) Додаємо src у sys.path, щоб працював імпорт "app.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from bs4 import BeautifulSoup  # noqa: E402

from app.infrastructure.currency.price_normalizer import PriceNormalizer  # noqa: E402


class FakeConfig:
    """Мінімальний замінник ConfigService: тільки .get() з крапковими ключами."""

    def __init__(self, values=None):
        self._values = dict(values or {})

    def get(self, key, default=None, cast=None):
        value = self._values.get(key, default)
        if value is None:
            return default
        return cast(value) if cast else value


@pytest.fixture
def fake_config():
    return FakeConfig


@pytest.fixture
def normalizer() -> PriceNormalizer:
    return PriceNormalizer()


@pytest.fixture
def soup():
    def _make(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    return _make
