# 📜 app/shared/utils/logger.py
"""
📜 Єдина схема логування для сервісу кошика та екстракції товарів.

🔹 Налаштовує кореневий логер `cart_aggregator` (консоль + файл із ротацією).
🔹 Підтримує JSON-формат для файлу, окремі рівні та приглушення сторонніх бібліотек.
🔹 Дає `get_logger()` для дочірніх логерів із загальним префіксом.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import json											# 📦 Серіалізація записів у JSON
import logging											# 🪵 Стандартні логери Python
import sys											# 🖥️ Потік stdout
import threading										# 🔒 Захист повторної ініціалізації
from dataclasses import dataclass, field							# 🧱 DTO-конфіг логування
from logging.handlers import TimedRotatingFileHandler					# 📁 Файл із ротацією за часом
from pathlib import Path								# 📂 Шляхи до лог-файлу
from typing import Any, Dict, Optional, Union						# 🧰 Типізація

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "cart_aggregator"							# 🏷️ Базовий префікс усіх логерів
PLAIN_FORMAT: str = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"	# 📄 Формат файлу
CONSOLE_FORMAT: str = "[%(levelname).1s] %(name)s: %(message)s"			# 🖥️ Короткий консольний формат

_RESERVED_ATTRS = frozenset(
    {
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "levelno", "lineno", "module", "msecs", "message", "msg", "name",
        "pathname", "process", "processName", "relativeCreated", "stack_info",
        "thread", "threadName", "levelname", "funcName", "taskName",
    }
)											# 🚫 Поля LogRecord, які не вважаються extra

_lock = threading.Lock()								# 🔒 Одночасна ініціалізація заборонена


# ================================
# 🧾 DTO КОНФІГУРАЦІЇ
# ================================
@dataclass
class LoggingConfig:
    """Налаштування логування з дефолтами для локального запуску."""
    level: str = "INFO"								# 🎚️ Глобальний рівень
    console: bool = True								# 🖥️ Консольний вивід
    json: bool = False									# 📦 JSON-формат файлу
    file: Optional[str] = "logs/cart.log"						# 📁 Шлях до файлу (None → без файлу)
    when: str = "midnight"								# ⏰ Період ротації
    backup_count: int = 7								# ♻️ Скільки архівів тримати
    suppress: Dict[str, str] = field(default_factory=dict)				# 🙊 Рівні для сторонніх логерів
    console_level: str = "INFO"							# 🖥️ Рівень консолі
    file_level: str = "DEBUG"								# 📁 Рівень файлу


# ================================
# 🧰 ФОРМАТТЕР
# ================================
class JsonFormatter(logging.Formatter):
    """Пише кожен запис як один JSON-рядок (разом з extra-полями)."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),		# ⏱️ Час події
            "level": record.levelname,							# 🎚️ Рівень
            "name": record.name,								# 🏷️ Логер
            "func": record.funcName,							# 🧮 Функція
            "line": record.lineno,								# 📍 Рядок
            "message": record.getMessage(),						# 🗒️ Текст
        }
        for key, value in record.__dict__.items():					# 🔎 Додаємо extra
            if key.startswith("_") or key in _RESERVED_ATTRS or key in payload:
                continue
            try:
                json.dumps(value)							# ✅ Серіалізується як є
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = str(value)						# 🔄 Інакше рядок
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)		# ⚠️ Трасування
        return json.dumps(payload, ensure_ascii=False)


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_level(value: Union[str, int, None], default: int) -> int:
    """Рядок або число → числовий рівень logging."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return getattr(logging, str(value).upper(), default)


def _make_file_handler(cfg: LoggingConfig, fmt: logging.Formatter) -> logging.Handler:
    """Файловий хендлер із ротацією; директорію створюємо за потреби."""
    log_path = Path(str(cfg.file))
    log_path.parent.mkdir(parents=True, exist_ok=True)				# 🧱 Гарантуємо директорію
    handler = TimedRotatingFileHandler(
        filename=str(log_path),
        when=cfg.when,
        backupCount=cfg.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(fmt)
    return handler


def _suppress_third_party(suppress: Dict[str, str]) -> None:
    """Знижує шум сторонніх бібліотек (httpx, werkzeug тощо)."""
    for name, level in (suppress or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))	# 🙊 Приглушуємо


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def init_logging(
    *,
    level: Optional[str] = None,
    console: Optional[bool] = None,
    json_mode: Optional[bool] = None,
    file: Optional[str] = None,
    suppress: Optional[Dict[str, str]] = None,
    console_level: Optional[Union[str, int]] = None,
    file_level: Optional[Union[str, int]] = None,
) -> logging.Logger:
    """Ініціалізує логер застосунку. Повторний виклик замінює наші хендлери."""
    with _lock:
        cfg = LoggingConfig(
            level=level or "INFO",
            console=True if console is None else bool(console),
            json=bool(json_mode),
            file=file if file is not None else LoggingConfig.file,
            suppress=suppress or {},
            console_level=str(console_level or level or "INFO"),
            file_level=str(file_level or level or "DEBUG"),
        )

        root_logger = logging.getLogger(LOG_NAME)					# 🏷️ Кореневий логер застосунку
        root_logger.setLevel(
            min(
                _to_level(cfg.level, logging.INFO),
                _to_level(cfg.console_level, logging.INFO),
                _to_level(cfg.file_level, logging.DEBUG) if cfg.file else logging.CRITICAL,
            )
        )										# 🧮 Нижня межа серед усіх виводів

        for handler in list(root_logger.handlers):					# 🧹 Прибираємо попередні хендлери
            root_logger.removeHandler(handler)
            handler.close()

        if cfg.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            console_handler.setLevel(_to_level(cfg.console_level, logging.INFO))
            root_logger.addHandler(console_handler)					# ➕ Консоль

        if cfg.file:
            fmt_file = JsonFormatter() if cfg.json else logging.Formatter(PLAIN_FORMAT)
            file_handler = _make_file_handler(cfg, fmt_file)
            file_handler.setLevel(_to_level(cfg.file_level, logging.DEBUG))
            root_logger.addHandler(file_handler)					# ➕ Файл

        _suppress_third_party(cfg.suppress)

        root_logger.info(
            "✅ Logging initialized | level=%s console=%s json=%s file=%s",
            cfg.level.upper(),
            "ON" if cfg.console else "OFF",
            "ON" if cfg.json else "OFF",
            cfg.file or "OFF",
        )
        return root_logger


def init_logging_from_config(config: Optional[Dict[str, Any]]) -> logging.Logger:
    """
    Ініціалізує логування з вузла `logging` конфігурації.

    Args:
        config: Словник розділу `logging` із ConfigService.

    Returns:
        logging.Logger: Налаштований кореневий логер застосунку.
    """
    node = config or {}
    file_value = node.get("file", LoggingConfig.file)
    return init_logging(
        level=node.get("level"),
        console=node.get("console"),
        json_mode=node.get("json"),
        file=file_value or "",							# 🚫 Порожній рядок вимикає файл
        suppress=node.get("suppress"),
        console_level=node.get("console_level"),
        file_level=node.get("file_level"),
    )


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Повертає `cart_aggregator` або `cart_aggregator.<suffix>`."""
    return logging.getLogger(LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}")


__all__ = [
    "LOG_NAME",
    "LoggingConfig",
    "JsonFormatter",
    "init_logging",
    "init_logging_from_config",
    "get_logger",
]
