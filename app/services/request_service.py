"""
Сервисный модуль для работы со списком заявок.

Хранит текущий журнал заявок, создает новые заявки и строит
отображаемый список: фильтрация, сортировка и группировка по датам.
"""

import logging
import random
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from app.models.request import CreateRequestFormData, Request
from app.models.view import DashboardView, RequestGroup
from app.services.pharmacy_directory import PharmacyDirectory
from app.services.request_factory import (
    DEFAULT_DEADLINE_HOURS,
    DEFAULT_NUMBER_PREFIXES,
    build_request,
)
from app.services.request_filters import filter_requests
from app.services.request_grouping import group_by_date
from app.services.request_log import RequestLog
from app.services.request_sorting import sort_requests

logger = logging.getLogger(__name__)


class RequestService:
    """
    Сервис для работы с заявками.

    Единственный владелец журнала заявок: только create_request
    заменяет журнал новым, все остальные методы работают со снимком.
    """

    def __init__(
        self,
        directory: PharmacyDirectory,
        requests: Iterable[Request] = (),
        number_prefixes: Sequence[str] = DEFAULT_NUMBER_PREFIXES,
        deadline_hours: int = DEFAULT_DEADLINE_HOURS,
        rng: Optional[random.Random] = None,
    ):
        self.directory = directory
        self._log = RequestLog(requests)
        self._number_prefixes = tuple(number_prefixes)
        self._deadline_hours = deadline_hours
        self._rng = rng

    @property
    def log(self) -> RequestLog:
        return self._log

    def create_request(
        self, form: CreateRequestFormData, current_user: str, now: datetime
    ) -> Request:
        """Создает заявку и добавляет ее в начало журнала."""
        if form.is_warranty or form.description or form.files:
            logger.debug(
                "Warranty flag, description and files are not stored on the request."
            )
        request = build_request(
            form,
            current_user=current_user,
            now=now,
            directory=self.directory,
            prefixes=self._number_prefixes,
            deadline_hours=self._deadline_hours,
            rng=self._rng,
        )
        self._log = self._log.insert_newest(request)
        logger.info(
            f"Request {request.number} created by {current_user}. Total requests: {len(self._log)}."
        )
        return request

    def get_view(self, view: DashboardView, current_user: str) -> list[Request]:
        """Фильтрует и сортирует заявки согласно критериям экрана."""
        filtered = filter_requests(
            self._log,
            status=view.status,
            only_mine=view.only_mine,
            query=view.query,
            current_user=current_user,
        )
        return sort_requests(filtered, view.sort.field, view.sort.direction)

    def get_grouped_view(
        self, view: DashboardView, current_user: str, today: date
    ) -> list[RequestGroup]:
        """То же, что get_view, но с разбивкой по дням."""
        return group_by_date(self.get_view(view, current_user), today)
