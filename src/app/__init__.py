# 🛒 app/__init__.py
"""🛒 Cart aggregator: екстракція товарів зі сторінок маркетплейсів та кошик користувача."""

__version__ = "0.1.0"
