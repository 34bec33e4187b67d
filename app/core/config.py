"""
Модуль конфигурации проекта.

Загружает настройки из переменных окружения с помощью Pydantic Settings.
Обеспечивает централизованный доступ к конфигурационным данным.
"""

from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.request import Pharmacy


class Settings(BaseSettings):
    """
    Основные настройки приложения.

    Атрибуты:
        bot_token (str): Секретный токен для доступа к Telegram Bot API.
        current_user (str): Имя техника, от лица которого работает панель.
        request_number_prefixes (list[str]): Префиксы номеров заявок.
        categories (list[str]): Справочник категорий заявок.
        pharmacies (list[Pharmacy]): Справочник аптек.
        deadline_hours (int): Срок выполнения заявки в часах.
        display_timezone (str): Часовой пояс для дат и времени.
        log_level (str): Уровень логирования.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # --- Telegram Bot Settings ---
    bot_token: str = Field(..., description="Telegram Bot API Token")

    # --- Business Logic Settings ---
    current_user: str = Field(
        default="Иванов И.",
        description="Identity of the acting technician",
    )

    request_number_prefixes_str: str = Field(
        default="ЗЯ",
        alias="REQUEST_NUMBER_PREFIXES",
        description="Comma-separated list of request number prefixes",
    )

    categories_str: str = Field(
        default="Сантехника,Электрика,Вентиляция и кондиционирование,"
        "Холодильное оборудование,Мебель,Другое",
        alias="CATEGORIES",
        description="Comma-separated list of request categories",
    )

    # JSON-список вида [{"id": "1", "address": "..."}]
    pharmacies: list[Pharmacy] = Field(
        default_factory=list, description="Pharmacy directory"
    )

    deadline_hours: int = Field(default=2, description="Hours until deadline")

    display_timezone: str = Field(
        default="Europe/Moscow",
        description="Timezone for displaying dates and times to users",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Application log level"
    )

    @computed_field
    @property
    def request_number_prefixes(self) -> list[str]:
        """Преобразует строку префиксов в список, пустые значения отбрасываются."""
        prefixes = [
            item.strip() for item in self.request_number_prefixes_str.split(",")
        ]
        return [prefix for prefix in prefixes if prefix] or ["ЗЯ"]

    @computed_field
    @property
    def categories(self) -> list[str]:
        """Преобразует строку categories_str в список строк."""
        if not self.categories_str:
            return []
        return [item.strip() for item in self.categories_str.split(",")]


# Создаем единственный экземпляр настроек, который будет использоваться во всем приложении
settings = Settings()
