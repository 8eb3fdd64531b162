# 🧰 app/shared/__init__.py
"""🧰 Спільні утиліти: логування, ієрархія помилок, тегований Result."""
