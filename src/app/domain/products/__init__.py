# 🧩 app/domain/products/__init__.py
"""
🧩 Пакет `domain.products` публікує доменні сутності та контракти кошика.

🔹 `entities.py` — `ExtractedProduct`, `ExtractionResult`, `Product`, `Rule`, `RuleProduct` та переліки правил.
🔹 `interfaces.py` — `ICartStore`, `IProductExtractor`.
"""

# 🧩 Внутрішні модулі проєкту
from .entities import (                                        # 🧱 Сутності кошика
    ExtractedProduct,
    ExtractionResult,
    Product,
    Rule,
    RuleAction,
    RuleConditionType,
    RuleProduct,
    RuleTrigger,
)
from .interfaces import ICartStore, IProductExtractor          # 📋 Контракти


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    # Сутності
    "ExtractedProduct",
    "ExtractionResult",
    "Product",
    "Rule",
    "RuleProduct",
    "RuleTrigger",
    "RuleConditionType",
    "RuleAction",
    # Контракти
    "ICartStore",
    "IProductExtractor",
]
