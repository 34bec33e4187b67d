"""
Текущее время в часовом поясе отображения.
"""

from datetime import datetime

import pytz


def now_local(timezone_name: str) -> datetime:
    """
    Возвращает текущее время с учетом указанного часового пояса.

    Args:
        timezone_name: Название часового пояса, например 'Europe/Moscow'.
    """
    return datetime.now(pytz.timezone(timezone_name))
