# 🖥️ app/cli.py
"""
🖥️ Консольна точка входу cart aggregator.

🔹 `extract <url>` — одноразовий запуск конвеєра екстракції з таблицею rich.
🔹 `serve` — запуск Flask API (host/port з конфігу або прапорців).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from rich.console import Console										# 🖨️ Кольоровий вивід
from rich.table import Table											# 📋 Таблиця товару

# 🔠 Системні імпорти
import argparse															# 🧾 Розбір аргументів
import asyncio															# ⏳ Запуск корутини екстракції
import logging															# 🧾 Логування
import sys																# 🚪 Код виходу
from typing import List, Optional										# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from app.config.config_service import ConfigService						# ⚙️ Конфігурація
from app.config.setup.container import Container, bootstrap_logging		# 📦 DI-контейнер
from app.domain.products.entities import ExtractionResult				# 📦 Результат конвеєра
from app.shared.utils.logger import LOG_NAME							# 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.cli")

_FIELD_LABELS = (
    ("title", "Назва"),
    ("price", "Ціна"),
    ("storeDomain", "Магазин"),
    ("imageUrl", "Зображення"),
    ("color", "Колір"),
    ("size", "Розмір"),
    ("availability", "Наявність"),
)


# ================================
# 🖨️ ВИВІД
# ================================
def render_result(result: ExtractionResult, console: Console) -> int:
    """Друкує результат і повертає код виходу (0 — успіх, 1 — відмова)."""
    if not result.success:
        console.print(f"[bold red]❌ {result.error.kind.value}[/bold red]")
        console.print(result.error.message)
        return 1

    data = result.product.to_dict()
    table = Table(title="🛍️ Товар", show_header=True, header_style="bold cyan")
    table.add_column("Поле")
    table.add_column("Значення", overflow="fold")
    for key, label in _FIELD_LABELS:
        if key in data:
            table.add_row(label, str(data[key]))
    console.print(table)
    return 0


# ================================
# 🧾 КОМАНДИ
# ================================
def _cmd_extract(args: argparse.Namespace, config: ConfigService, console: Console) -> int:
    container = Container(config)
    result = asyncio.run(container.extraction_service.extract_from_url(args.url))
    return render_result(result, console)


def _cmd_serve(args: argparse.Namespace, config: ConfigService, console: Console) -> int:
    from app.api import create_app										# 🧭 Flask лише для цієї команди

    host = args.host or config.get("api.host", "127.0.0.1", str)
    port = args.port or config.get("api.port", 5000, int)
    app = create_app(Container(config))
    console.print(f"🚀 Cart API на http://{host}:{port}")
    app.run(host=host, port=port, debug=args.debug)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cart-aggregator", description="Product extraction and cart API")
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Extract a product from a marketplace URL")
    extract.add_argument("url")
    extract.set_defaults(handler=_cmd_extract)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--debug", action="store_true")
    serve.set_defaults(handler=_cmd_serve)
    return parser


# ================================
# 🚀 ENTRYPOINT
# ================================
def main(argv: Optional[List[str]] = None, *, config: Optional[ConfigService] = None) -> int:
    args = build_parser().parse_args(argv)
    config = config or ConfigService()
    bootstrap_logging(config)
    logger.debug("🧭 CLI команда: %s", args.command)
    return args.handler(args, config, Console())


if __name__ == "__main__":												# ▶️ python -m app.cli
    sys.exit(main())
