"""
Модели данных, связанные с заявкой на ремонт.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Определяем возможные приоритеты и статусы заявки для строгой типизации
Priority = Literal["critical", "high", "medium", "low"]
Status = Literal[
    "new",
    "declined",
    "under_review",
    "in_progress",
    "awaiting_parts",
    "ready",
    "closed",
]

# Приоритеты в логическом порядке (critical → low)
PRIORITY_RANK: dict[str, int] = {
    "critical": 0,
    "high": 1,
    "medium": 2,
    "low": 3,
}

# Статусы в логическом порядке (new → closed)
STATUS_RANK: dict[str, int] = {
    "new": 0,
    "declined": 1,
    "under_review": 2,
    "in_progress": 3,
    "awaiting_parts": 4,
    "ready": 5,
    "closed": 6,
}

# --- Подписи для отображения ---
STATUS_LABELS: dict[str, str] = {
    "new": "Новая",
    "declined": "Отклонена",
    "under_review": "На рассмотрении",
    "in_progress": "В работе",
    "awaiting_parts": "Ожидает запчасти",
    "ready": "Готова",
    "closed": "Закрыта",
}

PRIORITY_LABELS: dict[str, str] = {
    "critical": "Критический",
    "high": "Высокий",
    "medium": "Средний",
    "low": "Низкий",
}


class Pharmacy(BaseModel):
    """
    Аптека, к которой относится заявка.

    Атрибуты:
        id (str): Идентификатор аптеки в справочнике.
        address (str): Адрес аптеки.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Pharmacy ID")
    address: str = Field(..., description="Pharmacy address")


class Request(BaseModel):
    """
    Модель заявки на техническое обслуживание.

    Создается только фабрикой заявок и после создания не изменяется.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    number: str
    pharmacy: Pharmacy
    created_at: str  # DD.MM.YYYY
    created_time: str  # HH:MM:SS
    priority: Priority
    title: str
    category: str
    technician: str
    deadline: str  # HH:MM
    decision: str = ""
    status: Status = "new"


class CreateRequestFormData(BaseModel):
    """
    Данные формы создания заявки.

    Поля is_warranty, description и files собираются формой,
    но в саму заявку не переносятся.
    """

    model_config = ConfigDict(frozen=True)

    pharmacy: str
    category: str
    title: str
    priority: Priority = "medium"
    is_warranty: bool = False
    description: str = ""
    # Только ссылки на файлы (имена или file_id), без содержимого
    files: tuple[str, ...] = ()
