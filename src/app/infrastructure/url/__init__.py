# 🔗 app/infrastructure/url/__init__.py
"""
🔗 Пакет перевірки URL та визначення маркетплейсу.

🔹 `MarketplaceClassifier` — allow-list підрядків хоста → `Marketplace`.
"""

from __future__ import annotations

from .marketplace_classifier import Marketplace, MarketplaceClassifier, normalize_host

__all__ = ["Marketplace", "MarketplaceClassifier", "normalize_host"]
