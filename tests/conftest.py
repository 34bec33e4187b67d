"""
Общие фикстуры для тестов.
"""

import os

import pytest

# Настройки читаются при импорте app.core.config, токен нужен заранее
os.environ.setdefault("BOT_TOKEN", "123456:TEST-TOKEN")

from app.models.request import Pharmacy, Request  # noqa: E402
from app.services.pharmacy_directory import PharmacyDirectory  # noqa: E402

CURRENT_USER = "Иванов И."

PHARMACIES = [
    Pharmacy(id="ph-1", address="ул. Ленина, 10"),
    Pharmacy(id="ph-2", address="пр. Мира, 25"),
]


@pytest.fixture
def directory() -> PharmacyDirectory:
    """Фикстура со справочником из двух аптек."""
    return PharmacyDirectory(PHARMACIES)


@pytest.fixture
def make_request():
    """Фикстура-фабрика для создания заявок с нужными полями."""

    def _make(**overrides) -> Request:
        data = {
            "id": "1",
            "number": "ЗЯ-0001",
            "pharmacy": PHARMACIES[0],
            "created_at": "01.10.2026",
            "created_time": "10:00:00",
            "priority": "medium",
            "title": "Не работает кондиционер",
            "category": "Вентиляция и кондиционирование",
            "technician": CURRENT_USER,
            "deadline": "12:00",
            "decision": "",
            "status": "new",
        }
        data.update(overrides)
        return Request(**data)

    return _make
