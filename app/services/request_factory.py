"""
Фабрика заявок.

Превращает данные формы создания заявки в полностью заполненную заявку:
идентификатор, номер, дату и время создания, срок выполнения.
"""

import logging
import random
import uuid
from datetime import datetime, timedelta
from typing import Optional, Sequence

import pytz

from app.models.request import CreateRequestFormData, Pharmacy, Request
from app.services.pharmacy_directory import PharmacyDirectory

logger = logging.getLogger(__name__)

DEFAULT_NUMBER_PREFIXES = ("ЗЯ",)
UNKNOWN_ADDRESS = "Неизвестный адрес"
DEFAULT_DEADLINE_HOURS = 2

DATE_FORMAT = "%d.%m.%Y"
TIME_FORMAT = "%H:%M:%S"
DEADLINE_FORMAT = "%H:%M"


def generate_request_number(
    prefixes: Sequence[str] = DEFAULT_NUMBER_PREFIXES,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Генерирует номер заявки вида 'ЗЯ-0042'.

    Уникальность номера не проверяется, совпадения возможны.

    Args:
        prefixes: Набор префиксов, из которого префикс выбирается случайно.
        rng: Источник случайных чисел (для тестов).
    """
    rng = rng or random.Random()
    prefix = rng.choice(list(prefixes) or list(DEFAULT_NUMBER_PREFIXES))
    digits = rng.randint(0, 9999)
    return f"{prefix}-{digits:04d}"


def resolve_pharmacy(directory: PharmacyDirectory, pharmacy_id: str) -> Pharmacy:
    """Находит аптеку в справочнике, для неизвестного ID подставляет заглушку."""
    pharmacy = directory.get_by_id(pharmacy_id)
    if pharmacy is None:
        logger.warning(
            f"Pharmacy '{pharmacy_id}' not found in directory, using placeholder address."
        )
        return Pharmacy(id=pharmacy_id, address=UNKNOWN_ADDRESS)
    return pharmacy


def build_request(
    form: CreateRequestFormData,
    current_user: str,
    now: datetime,
    directory: PharmacyDirectory,
    prefixes: Sequence[str] = DEFAULT_NUMBER_PREFIXES,
    deadline_hours: int = DEFAULT_DEADLINE_HOURS,
    rng: Optional[random.Random] = None,
) -> Request:
    """
    Создает новую заявку из данных формы.

    Заявка назначается на текущего пользователя и получает статус 'new'.
    Срок выполнения хранит только часы и минуты, переход через полночь
    не отслеживается.

    Args:
        form: Проверенные данные формы.
        current_user: Имя пользователя, создающего заявку.
        now: Текущее время.
        directory: Справочник аптек.
        prefixes: Префиксы для номера заявки.
        deadline_hours: Сколько часов отводится на выполнение.
        rng: Источник случайных чисел для номера.

    Returns:
        Полностью заполненная заявка. Добавлять ее в начало списка
        должен вызывающий код.
    """
    delta = timedelta(hours=deadline_hours)
    if now.tzinfo is None:
        deadline = now + delta
    else:
        # Сложение с pytz сохраняет старое смещение, поэтому считаем через UTC
        deadline = (now.astimezone(pytz.utc) + delta).astimezone(now.tzinfo)

    request = Request(
        id=str(uuid.uuid4()),
        number=generate_request_number(prefixes, rng),
        pharmacy=resolve_pharmacy(directory, form.pharmacy),
        created_at=now.strftime(DATE_FORMAT),
        created_time=now.strftime(TIME_FORMAT),
        priority=form.priority,
        title=form.title,
        category=form.category,
        technician=current_user,
        deadline=deadline.strftime(DEADLINE_FORMAT),
        decision="",
        status="new",
    )
    logger.info(
        f"Built request {request.number} ({request.id}) for pharmacy '{request.pharmacy.id}'."
    )
    return request
