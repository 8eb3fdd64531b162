# 🌍 app/infrastructure/web/__init__.py
"""
🌍 Інфраструктурний модуль для завантаження HTML сторінок через httpx.

🔹 Експортує `PageFetcher` — завантаження з однією повторною спробою на 403/429.
🔹 Використовується `ProductExtractionService` для отримання HTML.
"""

from __future__ import annotations

# 🧭 Основний сервіс
from .page_fetcher import PageFetcher

__all__ = ["PageFetcher"]
