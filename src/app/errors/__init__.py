# 🚨 app/errors/__init__.py
"""
🚨 Обробка помилок: стратегії конвертації, центральний сервіс та інтеграція з Flask.
"""

from .custom_errors import ExtractionFailedError, NetworkRequestError
from .error_handler import register_error_handlers
from .exception_handler_service import ExceptionHandlerService
from .strategies import HttpxErrorStrategy, IErrorHandlingStrategy, WerkzeugErrorStrategy

__all__ = [
    "ExceptionHandlerService",
    "ExtractionFailedError",
    "HttpxErrorStrategy",
    "IErrorHandlingStrategy",
    "NetworkRequestError",
    "WerkzeugErrorStrategy",
    "register_error_handlers",
]
