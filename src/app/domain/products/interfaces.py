# app/domain/products/interfaces.py
"""
🧩 Контракти доменного шару: сховище кошика та джерела даних товару.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from .entities import ExtractedProduct, ExtractionResult, Product, Rule, RuleProduct

# ================================
# 🏛️ ІНТЕРФЕЙСИ
# ================================


class IProductExtractor(ABC):
    """Контракт для сервісу, що перетворює URL сторінки на запис товару."""

    @abstractmethod
    async def extract_from_url(self, url: str) -> ExtractionResult:
        """Повертає успіх із товаром або типізовану відмову; ніколи не кидає."""


class ICartStore(ABC):
    """
    Контракт сховища кошика.

    Кожна операція отримує `user_id` і бачить лише записи цього користувача.
    `get_*` повертають None для чужих або відсутніх записів; мутації в такому
    разі піднімають `NotFoundError`.
    """

    # --- Товари ---
    @abstractmethod
    def get_user_products(self, user_id: str) -> List[Product]:
        """Товари користувача, новіші першими."""

    @abstractmethod
    def get_product(self, product_id: int, user_id: str) -> Optional[Product]:
        ...

    @abstractmethod
    def create_product(self, user_id: str, payload: Mapping[str, Any]) -> Product:
        ...

    @abstractmethod
    def create_product_from_extracted(
        self,
        user_id: str,
        extracted: ExtractedProduct,
        original_url: str,
        *,
        quantity: int = 1,
        notes: Optional[str] = None,
    ) -> Product:
        """Зберігає результат екстракції як товар кошика."""

    @abstractmethod
    def update_product(self, product_id: int, user_id: str, changes: Mapping[str, Any]) -> Product:
        ...

    @abstractmethod
    def delete_product(self, product_id: int, user_id: str) -> None:
        """Видаляє товар разом з усіма його звʼязками з правилами."""

    # --- Правила ---
    @abstractmethod
    def get_user_rules(self, user_id: str) -> List[Rule]:
        ...

    @abstractmethod
    def get_rule(self, rule_id: int, user_id: str) -> Optional[Rule]:
        ...

    @abstractmethod
    def create_rule(self, user_id: str, payload: Mapping[str, Any]) -> Rule:
        ...

    @abstractmethod
    def update_rule(self, rule_id: int, user_id: str, changes: Mapping[str, Any]) -> Rule:
        ...

    @abstractmethod
    def delete_rule(self, rule_id: int, user_id: str) -> None:
        """Видаляє правило разом з усіма його звʼязками з товарами."""

    # --- Звʼязки ---
    @abstractmethod
    def get_rule_products(self, rule_id: int, user_id: str) -> List[Product]:
        ...

    @abstractmethod
    def add_product_to_rule(self, rule_id: int, product_id: int, user_id: str) -> RuleProduct:
        ...

    @abstractmethod
    def remove_product_from_rule(self, rule_id: int, product_id: int, user_id: str) -> None:
        ...
