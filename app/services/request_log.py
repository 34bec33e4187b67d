"""
Журнал заявок: неизменяемая коллекция, новые заявки добавляются в начало.
"""

import logging
from typing import Iterable, Iterator

from app.models.request import Request

logger = logging.getLogger(__name__)


class RequestLog:
    """
    Неизменяемый список заявок, от новых к старым.

    insert_newest не меняет текущий журнал, а возвращает новый.
    """

    __slots__ = ("_requests",)

    def __init__(self, requests: Iterable[Request] = ()):
        self._requests: tuple[Request, ...] = tuple(requests)

    @property
    def requests(self) -> tuple[Request, ...]:
        return self._requests

    def insert_newest(self, request: Request) -> "RequestLog":
        """Возвращает новый журнал с заявкой в начале списка."""
        if self.contains(request.id):
            logger.warning(
                f"Request with id {request.id} is already in the log, skipping insert."
            )
            return self
        return RequestLog((request, *self._requests))

    def contains(self, request_id: str) -> bool:
        return any(req.id == request_id for req in self._requests)

    def __iter__(self) -> Iterator[Request]:
        return iter(self._requests)

    def __len__(self) -> int:
        return len(self._requests)
