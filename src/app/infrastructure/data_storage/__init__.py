# 🗃️ app/infrastructure/data_storage/__init__.py
"""
🗃️ Інфраструктурні сервіси зберігання даних.

🔹 `InMemoryCartStore` — процесне сховище товарів, правил та їх звʼязків.
"""

from __future__ import annotations

# 🛒 Сховище кошика
from .cart_store import InMemoryCartStore

__all__ = ["InMemoryCartStore"]
