"""
Модели состояния экрана со списком заявок: фильтр, сортировка, группы.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from app.models.request import Request, Status

SortDirection = Literal["asc", "desc"]
StatusTab = Status | Literal["all"]


class SortField(str, Enum):
    """Поля, по которым разрешена сортировка."""

    NUMBER = "number"
    PHARMACY = "pharmacy"
    CREATED_AT = "created_at"
    CREATED_TIME = "created_time"
    PRIORITY = "priority"
    TITLE = "title"
    CATEGORY = "category"
    TECHNICIAN = "technician"
    DEADLINE = "deadline"
    DECISION = "decision"
    STATUS = "status"


class SortState(BaseModel):
    """
    Текущая сортировка: поле и направление.

    Атрибуты:
        field (SortField | None): Поле сортировки, None - исходный порядок.
        direction (SortDirection): Направление, 'asc' или 'desc'.
    """

    model_config = ConfigDict(frozen=True)

    field: SortField | None = None
    direction: SortDirection = "asc"

    def toggle(self, field: SortField) -> "SortState":
        """
        Повторный выбор того же поля меняет направление,
        выбор нового поля сбрасывает направление на 'asc'.
        """
        if self.field == field:
            direction = "desc" if self.direction == "asc" else "asc"
            return SortState(field=field, direction=direction)
        return SortState(field=field, direction="asc")


class DashboardView(BaseModel):
    """
    Критерии отображения списка заявок для одного пользователя.
    """

    model_config = ConfigDict(frozen=True)

    status: StatusTab = "all"
    only_mine: bool = False
    query: str = ""
    sort: SortState = SortState()


class RequestGroup(BaseModel):
    """
    Группа заявок за один день.

    Атрибуты:
        key (str): 'TODAY', 'YESTERDAY' или дата в формате DD.MM.YYYY.
        label (str): Заголовок группы для отображения.
        requests (tuple[Request, ...]): Заявки группы в порядке сортировки.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    requests: tuple[Request, ...]
