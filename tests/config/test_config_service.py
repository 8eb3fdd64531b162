# 🧪 tests/config/test_config_service.py
"""
🧪 Тести для `ConfigService`: пріоритет джерел, крапкові ключі та приведення типів.
"""

from __future__ import annotations

import pytest

from app.config.config_service import ConfigService


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Прибирає змінні середовища та .env поточної директорії."""
    for name in ("LOG_LEVEL", "USD_TO_INR_RATE", "FETCH_TIMEOUT_SEC", "CART_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults_are_available_without_files(tmp_path) -> None:
    cfg = ConfigService(yaml_path=tmp_path / "missing.yaml", use_env=False)

    assert cfg.get("currency.usd_to_inr_rate") == 83.0
    assert cfg.get("marketplaces.supported")[0] == "amazon.in"
    assert cfg.get("fetcher.max_redirects", cast=int) == 5


def test_missing_key_returns_default() -> None:
    cfg = ConfigService(use_env=False)

    assert cfg.get("nope.nothing", "fallback") == "fallback"
    assert cfg.get("currency.nope") is None


def test_failed_cast_returns_default() -> None:
    cfg = ConfigService({"fetcher.timeout_sec": "soon"}, use_env=False)

    assert cfg.get("fetcher.timeout_sec", 10.0, cast=float) == 10.0


def test_overrides_use_dotted_keys() -> None:
    cfg = ConfigService({"api.port": 9000}, use_env=False)

    assert cfg.get("api.port") == 9000
    assert cfg.get("api.host") == "127.0.0.1"


def test_nested_override_dict() -> None:
    cfg = ConfigService({"currency": {"usd_sources": {"ebay.com": "usd_or_unmarked"}}}, use_env=False)

    assert cfg.get("currency.usd_sources")["ebay.com"] == "usd_or_unmarked"
    assert cfg.get("currency.usd_sources")["amazon.com"] == "usd_or_unmarked"


def test_environment_variables_override_yaml(isolated_env, monkeypatch) -> None:
    monkeypatch.setenv("USD_TO_INR_RATE", "90.5")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    cfg = ConfigService()

    assert cfg.get("currency.usd_to_inr_rate", cast=float) == 90.5
    assert cfg.get("logging.level") == "DEBUG"


def test_extra_yaml_file(isolated_env, monkeypatch) -> None:
    extra = isolated_env / "extra.yaml"
    extra.write_text("marketplaces:\n  supported: [myntra.com]\napi:\n  port: 8080\n", encoding="utf-8")
    monkeypatch.setenv("CART_CONFIG_FILE", str(extra))

    cfg = ConfigService()

    assert cfg.get("marketplaces.supported") == ["myntra.com"]
    assert cfg.get("api.port", cast=int) == 8080
    assert cfg.get("api.host") == "127.0.0.1"


def test_broken_yaml_is_ignored(isolated_env, monkeypatch) -> None:
    extra = isolated_env / "broken.yaml"
    extra.write_text("fetcher: [unclosed\n", encoding="utf-8")
    monkeypatch.setenv("CART_CONFIG_FILE", str(extra))

    cfg = ConfigService()

    assert cfg.get("fetcher.max_redirects") == 5
