# 💱 app/infrastructure/currency/price_normalizer.py
"""
💱 Нормалізація цінових рядків, знятих зі сторінок.

🔹 Базовий режим: лишаємо тільки цифри, коми та крапки (`"₹1,999.00"` → `"1,999.00"`).
🔹 Для позначених джерел (USD-маркетплейси) перераховуємо USD → INR за фіксованим курсом.
🔹 `parse_price_decimal` дає Decimal для збереження товару.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging															# 🧾 Логування конверсій
import re																# 🧵 Фільтрація символів
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation			# 💰 Точна арифметика та округлення
from typing import Mapping, Optional, Union								# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from app.shared.utils.logger import LOG_NAME							# 🏷️ Єдине імʼя логера


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.currency")						# 🧾 Модульний логер


# ================================
# 📏 КОНСТАНТИ
# ================================
DEFAULT_USD_TO_INR = Decimal("83.0")									# 💵 Курс за замовчуванням
DEFAULT_USD_SOURCES: Mapping[str, str] = {
    "amazon.com": "usd_or_unmarked",									# 🇺🇸 "$" або без символу → USD
    "ebay.com": "always",												# 🌍 Завжди USD
}
POLICY_ALWAYS = "always"
POLICY_USD_OR_UNMARKED = "usd_or_unmarked"
_QUANTUM = Decimal("0.01")												# 📐 Два знаки після коми

_KEEP_PRICE_CHARS = re.compile(r"[^\d,.]")								# ✂️ Все, крім цифр/коми/крапки
_NUMBER_TOKEN = re.compile(r"\d[\d,]*(?:\.\d+)?")						# 🔢 Перше число: "Rs. 1,499.00" → "1,499.00"
_CURRENCY_SYMBOLS = ("₹", "$", "€", "£", "¥")							# 💱 Явні символи валют
_CURRENCY_CODES = re.compile(r"\b(?:INR|USD|EUR|GBP|RS\.?)\b", re.IGNORECASE)


# ================================
# 🧰 ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_decimal(value: object) -> Decimal:
    """🧮 Безпечно приводить значення до Decimal через рядкове представлення."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())							# 🧼 Позбавляємося артефактів float
    except (InvalidOperation, AttributeError, ValueError) as exc:
        raise ValueError(f"Невалідне числове значення: {value!r}") from exc


def _has_currency_marker(text: str) -> bool:
    return any(symbol in text for symbol in _CURRENCY_SYMBOLS) or bool(_CURRENCY_CODES.search(text))


def strip_price(raw: Optional[str]) -> str:
    """Лишає тільки цифри, коми та крапки."""
    return _KEEP_PRICE_CHARS.sub("", raw or "")


def parse_price_decimal(text: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Витягує число з цінового рядка (`"₹2,074.17"` → `Decimal("2074.17")`).

    Raises:
        ValueError: якщо в тексті немає числа.
    """
    if isinstance(text, Decimal):
        return text
    match = _NUMBER_TOKEN.search(str(text or ""))					# 🧹 Без символів валют і префіксів
    if match is None:
        raise ValueError(f"No numeric price in {text!r}")
    amount = _to_decimal(match.group(0).replace(",", ""))
    if not amount.is_finite():
        raise ValueError(f"No numeric price in {text!r}")
    return amount


# ================================
# 💱 НОРМАЛІЗАТОР
# ================================
class PriceNormalizer:
    """💱 Нормалізує ціну і, для позначених джерел, конвертує USD → INR."""

    def __init__(
        self,
        usd_to_inr_rate: Union[Decimal, float, str] = DEFAULT_USD_TO_INR,
        usd_sources: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.rate = _to_decimal(usd_to_inr_rate)						# 💵 Курс як Decimal (без float-артефактів)
        if self.rate <= 0:
            raise ValueError(f"USD→INR rate must be positive, got {self.rate}")
        sources = DEFAULT_USD_SOURCES if usd_sources is None else usd_sources
        self.usd_sources = {
            str(source).strip().lower(): str(policy).strip().lower() for source, policy in sources.items()
        }																# 🗺️ джерело → політика
        logger.debug("⚙️ PriceNormalizer rate=%s sources=%s", self.rate, self.usd_sources)

    # ================================
    # 🔄 ПУБЛІЧНИЙ API
    # ================================
    def normalize(self, raw: Optional[str], *, source: Optional[str] = None) -> str:
        """
        Нормалізує ціну для відображення.

        Args:
            raw: Сирий текст ціни зі сторінки.
            source: id маркетплейсу (`amazon.com`, `ebay.com`, ...).

        Returns:
            `"1,999.00"` для нативних INR-цін; `"₹2,074.17"` після конверсії;
            вихідний текст, якщо конверсія потрібна, але число не розпізнане.
        """
        text = raw or ""
        if self.should_convert(text, source):
            return self.convert_usd_to_inr(text)
        return strip_price(text)

    def should_convert(self, raw: str, source: Optional[str]) -> bool:
        policy = self.usd_sources.get((source or "").strip().lower())
        if policy == POLICY_ALWAYS:
            return True
        if policy == POLICY_USD_OR_UNMARKED:
            return "$" in raw or not _has_currency_marker(raw)
        return False

    def convert_usd_to_inr(self, raw: str) -> str:
        """`"$24.99"` → `"₹2,074.17"` (ROUND_HALF_UP до копійок)."""
        try:
            usd = parse_price_decimal(raw)
        except ValueError:
            logger.debug("💤 Ціну %r не розпізнано, повертаємо як є", raw)
            return raw
        inr = (usd * self.rate).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
        logger.debug("💱 %s USD × %s → %s INR", usd, self.rate, inr)
        return f"₹{inr:,.2f}"


__all__ = [
    "PriceNormalizer",
    "parse_price_decimal",
    "strip_price",
    "DEFAULT_USD_TO_INR",
    "DEFAULT_USD_SOURCES",
]
