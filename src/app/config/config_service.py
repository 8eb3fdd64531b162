# ⚙️ config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Збирає конфігурацію з вбудованих дефолтів, config.yaml, зовнішнього YAML та .env.
- Надає єдиний метод .get() (з необовʼязковим приведенням типу) для будь-якого параметра.
- Приймає словник overrides, щоб тести не залежали від файлів і змінних середовища.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import copy                                 # 🧬 Глибока копія дефолтів
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Callable, Dict, Mapping, Optional, Union   # 🧩 Типізація

logger = logging.getLogger("cart_aggregator.config")

_MISSING = object()                         # 🚫 Маркер відсутнього ключа

# ============================
# 📦 ВБУДОВАНІ ДЕФОЛТИ
# ============================
DEFAULTS: Dict[str, Any] = {
    "marketplaces": {
        "supported": [
            "amazon.in",
            "amazon.com",
            "flipkart.com",
            "myntra.com",
            "nykaa.com",
            "ajio.com",
            "meesho.com",
            "shopclues.com",
            "snapdeal.com",
            "ebay.com",
        ],
    },
    "fetcher": {
        "timeout_sec": 10.0,
        "max_redirects": 5,
        "user_agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
    },
    "currency": {
        "usd_to_inr_rate": 83.0,
        "usd_sources": {
            "amazon.com": "usd_or_unmarked",
            "ebay.com": "always",
        },
    },
    "parser": {
        "html_parser": "html.parser",
        "selectors": {"marketplaces": {}},
    },
    "logging": {
        "level": "INFO",
        "console": True,
        "json": False,
        "file": "logs/cart.log",
        "suppress": {"httpx": "WARNING", "httpcore": "WARNING", "werkzeug": "WARNING"},
    },
    "api": {
        "host": "127.0.0.1",
        "port": 5000,
    },
}

# 🔐 Змінна середовища → крапковий ключ конфігурації
ENV_KEYS: Dict[str, str] = {
    "LOG_LEVEL": "logging.level",
    "USD_TO_INR_RATE": "currency.usd_to_inr_rate",
    "FETCH_TIMEOUT_SEC": "fetcher.timeout_sec",
}

CONFIG_FILE_ENV = "CART_CONFIG_FILE"        # 📄 Шлях до додаткового YAML


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних конфігураційних параметрів проєкту.

    Пріоритет (від нижчого до вищого): DEFAULTS → config.yaml → $CART_CONFIG_FILE → env → overrides.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        yaml_path: Optional[Union[str, Path]] = None,
        use_env: bool = True,
    ) -> None:
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULTS)     # 📦 Обʼєднана конфігурація
        self._load_all_configs(yaml_path=yaml_path, use_env=use_env)
        if overrides:
            self._deep_update(self._config, self._unflatten_dict(dict(overrides)))
            logger.debug("🧪 Застосовано overrides: %s", sorted(overrides))

    def _load_all_configs(self, *, yaml_path: Optional[Union[str, Path]], use_env: bool) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        """
        # --- 1. Вбудований YAML ---
        default_yaml = Path(yaml_path) if yaml_path else Path(__file__).parent / "config.yaml"
        self._merge_yaml(default_yaml)

        if not use_env:
            logger.debug("🔕 Змінні середовища пропущено")
            return

        # --- 2. .env + додатковий YAML ---
        load_dotenv()  # 🔐 Ініціалізує змінні середовища з файлу .env
        extra_yaml = os.getenv(CONFIG_FILE_ENV)
        if extra_yaml:
            self._merge_yaml(Path(extra_yaml))

        # --- 3. Окремі змінні середовища ---
        env_vars = {key: os.getenv(name) for name, key in ENV_KEYS.items()}
        env_vars = {key: value for key, value in env_vars.items() if value not in (None, "")}
        # 🔁 Перетворюємо крапкові ключі в словник та обʼєднуємо з config
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.debug("✅ Конфігурацію завантажено (env keys: %s)", sorted(env_vars))

    def _merge_yaml(self, path: Path) -> None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.debug("📘 YAML %s відсутній, пропускаємо", path)
            return
        except yaml.YAMLError as e:
            logger.warning("⚠️ Не вдалося розібрати %s: %s", path, e)
            return
        if not isinstance(data, dict):
            logger.warning("⚠️ %s має містити словник верхнього рівня", path)
            return
        self._deep_update(self._config, data)
        logger.debug("📘 Підмішано YAML: %s", path)

    def get(self, key: str, default: Any = None, cast: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'currency.usd_to_inr_rate').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.
            cast: Необовʼязкове приведення типу (int, float, ...). Якщо воно
                падає, повертається default.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split('.'):                  # ⛓️ Розбиваємо ключ за крапкою
            if isinstance(value, dict) and k in value:
                value = value[k]                 # 🔎 Переходимо глибше в структуру
            else:
                value = _MISSING
                break
        if value is _MISSING or value is None:
            return default
        if cast is None:
            return value
        try:
            return cast(value)
        except (TypeError, ValueError):
            logger.warning("⚠️ Ключ '%s' має невалідне значення %r, беремо дефолт", key, value)
            return default

    def as_dict(self) -> Dict[str, Any]:
        """🧬 Копія всієї обʼєднаної конфігурації."""
        return copy.deepcopy(self._config)

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================

    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'currency.usd_to_inr_rate' → {'currency': {'usd_to_inr_rate': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')                   # 🧩 Розбиваємо ключ на частини
            d_ref = result
            for part in parts[:-1]:                  # 🔁 Ітеруємось по вкладеності
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value                 # 🧷 Вставляємо значення у найглибший рівень
        return result

    @classmethod
    def _deep_update(cls, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """
        🔁 Рекурсивно обʼєднує два словника (оновлення значень).
        Якщо значення — словник, обʼєднує його глибоко.
        """
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                cls._deep_update(source[key], value)  # 🔁 Глибоке обʼєднання
            else:
                source[key] = value                    # 🧩 Перезапис простого значення
