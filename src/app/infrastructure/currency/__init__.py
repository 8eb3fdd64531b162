# 💱 app/infrastructure/currency/__init__.py
"""
💱 Нормалізація цін та фіксована конверсія USD → INR.
"""

from .price_normalizer import PriceNormalizer, parse_price_decimal, strip_price

__all__ = ["PriceNormalizer", "parse_price_decimal", "strip_price"]
