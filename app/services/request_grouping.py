"""
Группировка заявок по дате создания для компактного отображения.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from app.models.request import Request
from app.models.view import RequestGroup

logger = logging.getLogger(__name__)

TODAY_KEY = "TODAY"
YESTERDAY_KEY = "YESTERDAY"

GROUP_LABELS = {
    TODAY_KEY: "СЕГОДНЯ",
    YESTERDAY_KEY: "ВЧЕРА",
}

DATE_FORMAT = "%d.%m.%Y"


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_date(value: str) -> Optional[date]:
    """Разбирает дату в формате DD.MM.YYYY, при ошибке возвращает None."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None


def _bucket_order(key: str) -> tuple[int, int]:
    if key == TODAY_KEY:
        return 0, 0
    if key == YESTERDAY_KEY:
        return 1, 0
    parsed = parse_date(key)
    if parsed is None:
        return 3, 0
    # Более поздние даты идут раньше
    return 2, -parsed.toordinal()


def group_by_date(requests: Iterable[Request], today: date) -> list[RequestGroup]:
    """
    Разбивает заявки на группы по дате создания.

    Порядок групп: 'СЕГОДНЯ', 'ВЧЕРА', затем остальные даты от новых
    к старым. Группы с нераспознанной датой идут в конце в порядке
    появления. Внутри группы порядок заявок не меняется.

    Args:
        requests: Отфильтрованные и отсортированные заявки.
        today: Текущая дата.
    """
    today_str = format_date(today)
    yesterday_str = format_date(today - timedelta(days=1))

    buckets: dict[str, list[Request]] = {}
    for request in requests:
        if request.created_at == today_str:
            key = TODAY_KEY
        elif request.created_at == yesterday_str:
            key = YESTERDAY_KEY
        else:
            key = request.created_at
        buckets.setdefault(key, []).append(request)

    for key in buckets:
        if key not in GROUP_LABELS and parse_date(key) is None:
            logger.warning(f"Malformed request date '{key}', grouping it last.")

    # sorted устойчив, поэтому нераспознанные даты сохраняют порядок появления
    ordered_keys = sorted(buckets, key=_bucket_order)
    return [
        RequestGroup(
            key=key,
            label=GROUP_LABELS.get(key, key),
            requests=tuple(buckets[key]),
        )
        for key in ordered_keys
    ]
