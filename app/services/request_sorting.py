"""
Сортировка списка заявок.

Каждому полю из SortField сопоставлена своя функция ключа:
приоритет и статус сравниваются по рангу, дата создания - как дата,
остальные строки - по правилам Unicode Collation Algorithm
(ё рядом с е, строчные перед прописными).
"""

import logging
from datetime import date
from typing import Any, Callable, Iterable, Optional

from pyuca import Collator

from app.models.request import PRIORITY_RANK, STATUS_RANK, Request
from app.models.view import SortDirection, SortField
from app.services.request_grouping import parse_date

logger = logging.getLogger(__name__)

# Загрузка таблицы весов занимает заметное время, создаем один раз
_collator = Collator()


def text_key(value: str) -> tuple[tuple[int, ...], str]:
    """Ключ для сравнения строк: сначала по весам сортировки, затем как есть."""
    return _collator.sort_key(value), value


def _created_at_key(request: Request) -> date:
    # Нераспознанные даты считаются самыми старыми
    return parse_date(request.created_at) or date.min


SORT_KEYS: dict[SortField, Callable[[Request], Any]] = {
    SortField.NUMBER: lambda req: text_key(req.number),
    SortField.PHARMACY: lambda req: text_key(req.pharmacy.address),
    SortField.CREATED_AT: _created_at_key,
    SortField.CREATED_TIME: lambda req: text_key(req.created_time),
    SortField.PRIORITY: lambda req: PRIORITY_RANK[req.priority],
    SortField.TITLE: lambda req: text_key(req.title),
    SortField.CATEGORY: lambda req: text_key(req.category),
    SortField.TECHNICIAN: lambda req: text_key(req.technician),
    SortField.DEADLINE: lambda req: text_key(req.deadline),
    SortField.DECISION: lambda req: text_key(req.decision),
    SortField.STATUS: lambda req: STATUS_RANK[req.status],
}


def parse_sort_field(value: str) -> Optional[SortField]:
    """
    Преобразует название поля в SortField.

    Для неизвестного поля возвращает None, сортировка в этом случае
    не применяется.
    """
    try:
        return SortField(value.strip().lower())
    except ValueError:
        logger.warning(f"Unknown sort field '{value}', sorting is ignored.")
        return None


def sort_requests(
    requests: Iterable[Request],
    field: Optional[SortField],
    direction: SortDirection = "asc",
) -> list[Request]:
    """
    Возвращает новый отсортированный список заявок.

    Сортировка устойчивая в обоих направлениях: заявки с равными
    ключами сохраняют исходный порядок. Без поля сортировки порядок
    не меняется.
    """
    if field is None:
        return list(requests)

    key = SORT_KEYS.get(field)
    if key is None:
        logger.warning(f"No comparator for sort field '{field}', sorting is ignored.")
        return list(requests)

    return sorted(requests, key=key, reverse=direction == "desc")
