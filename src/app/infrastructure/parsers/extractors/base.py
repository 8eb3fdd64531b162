# 🧾 app/infrastructure/parsers/extractors/base.py
"""
🧾 Спільні примітиви екстракторів: селектори полів та first-match резолвер.

🔹 Нормалізує текстові дані й посилання для екстракторів.
🔹 `FieldSelectors` — впорядковані CSS-кандидати для кожного поля товару.
🔹 `first_match` — перший кандидат із непорожнім (і прийнятим) значенням перемагає.
🔹 Запис селектора може читати атрибут через суфікс `" @attr"`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup	# 🥣 Парсимо HTML-документи
from bs4.element import Tag	# 🧱 Тип DOM-вузла

# 🔠 Системні імпорти
import logging	# 🧾 Логування подій
import re	# 🧵 Робота з регулярними виразами
from dataclasses import dataclass, fields	# 🧱 Створення датакласів
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple	# 🧰 Типи для статичного аналізу

# 🧩 Внутрішні модулі проєкту
from app.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.parser.extractor")	# 🧾 Логер для екстракторів парсера

# ================================
# 📦 КОНСТАНТИ МОДУЛЯ
# ================================
FIELD_NAMES: Tuple[str, ...] = ("title", "price", "image", "availability", "color", "size")	# 🧾 Поля таблиці селекторів
ATTR_SEPARATOR = " @"	# 🔖 `".swatch.selected @title"` → атрибут `title`

Accept = Callable[[str], bool]	# ✅ Фільтр кандидата

# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _norm_ws(text: str) -> str:
    """Нормалізує пробіли у переданому рядку."""
    if not text:	# 🚫 Порожній або None рядок
        return ""	# 🪣 Повертаємо порожній результат
    return re.sub(r"\s+", " ", text).strip()	# 🧹 Стискаємо та обрізаємо пробіли


def _attr_to_str(value: Any) -> str:
    """Повертає перше непорожнє текстове значення атрибута."""
    if value is None:	# 🚫 Атрибут відсутній
        return ""	# 🪣 Порожній рядок
    if isinstance(value, (list, tuple)):	# 📚 bs4 повертає class/rel як список
        for candidate in value:	# 🔁 Перебираємо можливі значення
            if candidate:	# ✅ Обираємо перший непорожній елемент
                return str(candidate)	# 🔄 Повертаємо текстове представлення
        return ""	# 🪣 Жодного валідного значення
    return str(value)	# 🔄 Конвертуємо одиночний атрибут у рядок


def _normalize_image_url(src: Optional[str]) -> Optional[str]:
    """Протокол-відносний URL (`//cdn/...`) доповнюється `https:`."""
    if not src:	# 🚫 Немає посилання
        return None	# 🪣 Поле опційне
    if src.startswith("//"):	# 🌐 Вирівнюємо протокол відносного URL
        return f"https:{src}"	# 🔗 Повертаємо абсолютний URL
    return src	# 🔁 Використовуємо як є


def parse_selector(entry: str, default_attr: Optional[str] = None) -> Tuple[str, Optional[str]]:
    """
    Розбирає запис таблиці на (css, attr).

    `".swatch.selected @title"` → (".swatch.selected", "title");
    `"#landingImage"` з default_attr="src" → ("#landingImage", "src").
    """
    css, sep, attr = entry.rpartition(ATTR_SEPARATOR)	# ✂️ Шукаємо останній " @"
    if sep and css.strip() and attr.strip() and " " not in attr.strip():
        return css.strip(), attr.strip()	# 🔖 Явний атрибут
    return entry.strip(), default_attr	# 🧾 Текст або дефолтний атрибут


def read_candidate(soup: BeautifulSoup, entry: str, default_attr: Optional[str] = None) -> str:
    """Значення першого елемента для одного запису (порожній рядок, якщо нічого)."""
    css, attr = parse_selector(entry, default_attr)
    node: Optional[Tag] = soup.select_one(css)	# 🔎 Перший збіг у документі
    if node is None:	# 🚫 Селектор нічого не знайшов
        return ""
    if attr:	# 🔖 Читаємо атрибут
        return _norm_ws(_attr_to_str(node.get(attr)))
    return _norm_ws(node.get_text())	# 🧾 Текст вузла з нащадками


def first_match(
    soup: BeautifulSoup,
    selectors: Iterable[str],
    *,
    default_attr: Optional[str] = None,
    accept: Optional[Accept] = None,
    label: str = "",
) -> Optional[str]:
    """
    Повертає перше непорожнє значення серед кандидатів.

    Args:
        soup: Розібраний документ.
        selectors: Впорядковані записи селекторів.
        default_attr: Атрибут для записів без суфікса `@attr` (None → текст).
        accept: Додатковий фільтр кандидата (довжина, формат).
        label: Назва поля для діагностики.
    """
    for entry in selectors:	# 🔁 Порядок кандидатів = пріоритет
        value = read_candidate(soup, entry, default_attr)
        if not value:
            continue
        if accept is not None and not accept(value):	# 🚫 Кандидат не пройшов фільтр
            logger.debug("🔎 %s: %r відхилено (%s)", label or "field", value[:60], entry)
            continue
        logger.debug("🎯 %s ← %s", label or "field", entry)
        return value
    logger.debug("🕳️ %s: жоден селектор не спрацював", label or "field")
    return None


# ================================
# 🧱 СТРУКТУРА СЕЛЕКТОРІВ
# ================================
@dataclass(frozen=True)
class FieldSelectors:
    """Впорядковані CSS-кандидати для кожного поля товару."""
    title: Tuple[str, ...] = ()
    price: Tuple[str, ...] = ()
    image: Tuple[str, ...] = ()
    availability: Tuple[str, ...] = ()
    color: Tuple[str, ...] = ()
    size: Tuple[str, ...] = ()

    @staticmethod
    def _as_tuple(value: Any) -> Tuple[str, ...]:
        """Перетворює значення конфігу на кортеж рядків."""
        if value is None:	# 🚫 Значення відсутнє
            return tuple()	# 📦 Порожній кортеж
        if isinstance(value, (list, tuple)):	# 📚 У конфігу вже передано послідовність
            return tuple(str(x).strip() for x in value if str(x).strip())	# 🧹 Нормалізуємо кожен елемент
        normalized = str(value).strip()	# 🧹 Очищаємо одиночне значення
        return (normalized,) if normalized else tuple()	# 📦 Повертаємо кортеж із одного елемента

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FieldSelectors":
        known = {f.name for f in fields(cls)}
        return cls(**{key: cls._as_tuple(value) for key, value in data.items() if key in known})

    def merged(self, overrides: Optional[Mapping[str, Any]]) -> "FieldSelectors":
        """Поля з overrides повністю замінюють відповідні списки; невідомі ключі ігноруються."""
        if not isinstance(overrides, Mapping) or not overrides:
            return self
        current: Dict[str, Tuple[str, ...]] = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, val in overrides.items():	# 🔁 Обходимо джерело оновлень
            if key in current:	# ✅ Оновлюємо лише відомі ключі
                current[key] = self._as_tuple(val)	# 🔄 Підміняємо селектор значенням конфігу
            else:
                logger.warning("⚠️ Невідоме поле селекторів у конфігу: %s", key)
        return FieldSelectors(**current)


# ================================
# 📤 ЕКСПОРТ МОДУЛЯ
# ================================
__all__ = [
    "FIELD_NAMES",	# 🧾 Поля таблиці
    "FieldSelectors",	# 🧱 Dataclass селекторів
    "first_match",	# 🎯 First-match резолвер
    "read_candidate",	# 🔎 Значення одного запису
    "parse_selector",	# 🔖 css + attr
    "_norm_ws",	# 🧹 Нормалізація пробілів
    "_attr_to_str",	# 🧾 Перетворення атрибутів у рядок
    "_normalize_image_url",	# 🖼️ Нормалізація URL зображень
]
