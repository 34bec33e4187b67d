"""
Модуль для конфигурации логирования.

Уровень берется из настроек (LOG_LEVEL), формат общий для всего приложения.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(funcName)s(%(lineno)d) - %(message)s"

# Библиотеки python-telegram-bot пишут каждый запрос к API и каждый апдейт
LIBRARY_LOGGERS = ("httpx", "telegram", "telegram.ext")


def setup_logging(level: str = "INFO") -> None:
    """
    Настраивает вывод логов приложения в stdout.

    Args:
        level: Название уровня ('DEBUG', 'INFO', ...). На DEBUG видны
            поля формы, которые не попадают в заявку.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=numeric_level, handlers=[stdout_handler], force=True)

    library_level = max(numeric_level, logging.WARNING)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logging.getLogger(__name__).debug(f"Logging configured with level {level}.")
