# app/config/setup/__init__.py
"""
⚙️ Пакет для "збірки" всіх компонентів застосунку перед запуском.

Надає доступ до контейнера залежностей.
"""

from .container import Container

__all__ = ["Container"]
