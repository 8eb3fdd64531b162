# 🧰 app/shared/utils/__init__.py
"""
🧰 Спільні утиліти застосунку.

🔹 Логування за єдиною схемою (`LOG_NAME`, `init_logging`, `get_logger`).
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

__all__ = [
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
]
