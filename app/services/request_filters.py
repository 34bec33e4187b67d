"""
Фильтрация списка заявок по статусу, исполнителю и строке поиска.
"""

from typing import Iterable

from app.models.request import Request
from app.models.view import StatusTab


def matches_query(request: Request, query: str) -> bool:
    """
    Проверяет, входит ли строка поиска (без учета регистра) в номер,
    тему, адрес аптеки или категорию заявки.
    """
    needle = query.lower()
    return any(
        needle in value.lower()
        for value in (
            request.number,
            request.title,
            request.pharmacy.address,
            request.category,
        )
    )


def filter_requests(
    requests: Iterable[Request],
    *,
    status: StatusTab = "all",
    only_mine: bool = False,
    query: str = "",
    current_user: str = "",
) -> list[Request]:
    """
    Оставляет заявки, удовлетворяющие всем заданным условиям.

    Args:
        requests: Исходные заявки.
        status: Статус или 'all' (без фильтра).
        only_mine: Только заявки, назначенные на current_user.
        query: Строка поиска, пустая строка - без фильтра.
        current_user: Имя текущего пользователя.

    Returns:
        Новый список; относительный порядок заявок сохраняется.
    """
    filtered = list(requests)

    if status != "all":
        filtered = [req for req in filtered if req.status == status]
    if only_mine:
        filtered = [req for req in filtered if req.technician == current_user]
    if query:
        filtered = [req for req in filtered if matches_query(req, query)]

    return filtered
