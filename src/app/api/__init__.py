# 🌐 app/api/__init__.py
"""
🌐 Flask-застосунок cart aggregator.

🔹 `create_app()` збирає контейнер (або приймає готовий), реєструє маршрути
   та глобальний JSON-обробник помилок.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from flask import Flask, jsonify										# 🌐 WSGI-застосунок

# 🔠 Системні імпорти
import logging															# 🧾 Логування старту
from typing import TYPE_CHECKING, Optional								# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from app.errors.error_handler import register_error_handlers			# 🛡️ JSON-помилки
from app.shared.utils.logger import LOG_NAME							# 🏷️ Базове імʼя логера
from .routes import USER_HEADER, api									# 🧭 Маршрути /api

if TYPE_CHECKING:
    from app.config.config_service import ConfigService
    from app.config.setup.container import Container

logger = logging.getLogger(f"{LOG_NAME}.api")


def create_app(
    container: Optional["Container"] = None,
    *,
    config: Optional["ConfigService"] = None,
) -> Flask:
    """
    Створює Flask-застосунок.

    Args:
        container: Готовий DI-контейнер (тести передають свій).
        config: Конфігурація для нового контейнера, якщо `container` не заданий.
    """
    if container is None:
        from app.config.config_service import ConfigService				# 🧭 Локальний імпорт для уникнення циклів
        from app.config.setup.container import Container

        container = Container(config or ConfigService())

    app = Flask(__name__)
    app.json.sort_keys = False											# 🧾 Порядок ключів як у to_dict()
    app.extensions["container"] = container								# 📦 Доступ для маршрутів
    app.register_blueprint(api)
    register_error_handlers(app, container.exception_handler_service)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    logger.info("✅ Flask-застосунок готовий (%d маршрутів)", len(list(app.url_map.iter_rules())))
    return app


__all__ = ["create_app", "USER_HEADER"]
