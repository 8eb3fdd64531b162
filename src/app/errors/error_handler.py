# 🛠️ app/errors/error_handler.py
"""
🛠️ Підключення `ExceptionHandlerService` до Flask-застосунку.

🔹 Один обробник на `Exception` перехоплює і доменні, і werkzeug-винятки.
🔹 Відповідь завжди JSON: `{"message": ...}` (+ `errors` для валідації).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from flask import Flask, g, jsonify									# 🌐 Flask-застосунок та контекст запиту

# 🔠 Системні імпорти
import logging														# 🧾 Логи обробки помилок

# 🧩 Внутрішні модулі проєкту
from .exception_handler_service import ExceptionHandlerService		# 🛡️ Центральний сервіс обробки винятків


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("cart_aggregator.errors.error_handler")	# 🧾 Локальний логер


# ================================
# 🏭 РЕЄСТРАЦІЯ
# ================================
def register_error_handlers(app: Flask, service: ExceptionHandlerService) -> None:
    """
    Реєструє глобальний обробник винятків.

    Args:
        app: Flask-застосунок.
        service: Сервіс, який перетворює виняток на (payload, status).
    """

    @app.errorhandler(Exception)
    def _handle_any(error: Exception):
        user_id = g.get("user_id")									# 🆔 Може бути відсутнім (401, 404 маршруту)
        payload, status = service.handle(error, user_id)
        return jsonify(payload), status

    logger.debug("🧱 error handlers registered for app=%s", app.import_name)


__all__ = ["register_error_handlers"]									# 📤 Публічний API
