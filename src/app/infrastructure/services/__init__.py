# 🧰 app/infrastructure/services/__init__.py
"""
🧰 Інфраструктурні оркестратори/сервіси верхнього рівня.

🔹 `ProductExtractionService` — URL → `ExtractionResult` (класифікація, завантаження, екстракція).
"""

from __future__ import annotations

from .product_extraction_service import ProductExtractionService	# 🧠 Оркестратор екстракції

__all__ = ["ProductExtractionService"]
