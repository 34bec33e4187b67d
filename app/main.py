"""
Основная точка входа в приложение.

Этот файл отвечает за инициализацию и запуск Telegram-бота панели заявок.
"""

import logging

from telegram.ext import (
    Application,
    CommandHandler,
    ConversationHandler,
    MessageHandler,
    filters,
)

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.handlers import common, dashboard
from app.handlers import request as request_handler
from app.services.pharmacy_directory import PharmacyDirectory
from app.services.request_service import RequestService

logger = logging.getLogger(__name__)


def build_application() -> Application:
    """Создает приложение бота и регистрирует обработчики."""
    logger.info("Initializing services...")
    directory = PharmacyDirectory(settings.pharmacies)
    request_service = RequestService(
        directory=directory,
        number_prefixes=settings.request_number_prefixes,
        deadline_hours=settings.deadline_hours,
    )
    logger.info(f"Loaded {len(directory.get_all())} pharmacies.")

    application = Application.builder().token(settings.bot_token).build()

    # Сохраняем экземпляры сервисов в bot_data для доступа из обработчиков
    application.bot_data["request_service"] = request_service

    # --- Создаем ConversationHandler для создания заявки ---
    text_input = filters.TEXT & ~filters.COMMAND
    conv_handler = ConversationHandler(
        entry_points=[CommandHandler("new", request_handler.new_request_start)],
        states={
            request_handler.PHARMACY: [
                MessageHandler(text_input, request_handler.get_pharmacy)
            ],
            request_handler.CATEGORY: [
                MessageHandler(text_input, request_handler.get_category)
            ],
            request_handler.WARRANTY: [
                MessageHandler(text_input, request_handler.get_warranty)
            ],
            request_handler.TITLE: [
                MessageHandler(text_input, request_handler.get_title)
            ],
            request_handler.PRIORITY: [
                MessageHandler(text_input, request_handler.get_priority)
            ],
            request_handler.DESCRIPTION: [
                MessageHandler(text_input, request_handler.get_description),
                CommandHandler("skip", request_handler.skip_description),
            ],
            request_handler.FILES: [
                MessageHandler(
                    filters.PHOTO | filters.Document.ALL, request_handler.get_file
                ),
                CommandHandler(["done", "skip"], request_handler.finish_files),
            ],
        },
        fallbacks=[CommandHandler("cancel", request_handler.cancel)],
    )

    application.add_handler(conv_handler)
    application.add_handler(CommandHandler("start", common.start))
    application.add_handler(CommandHandler("help", common.start))
    application.add_handler(CommandHandler("requests", dashboard.show_requests))
    application.add_handler(CommandHandler("status", dashboard.set_status))
    application.add_handler(CommandHandler("mine", dashboard.toggle_mine))
    application.add_handler(CommandHandler("search", dashboard.search))
    application.add_handler(CommandHandler("sort", dashboard.sort))

    application.add_error_handler(common.error_handler)
    return application


def main() -> None:
    """Основная функция для запуска бота."""
    setup_logging(settings.log_level)

    application = build_application()

    logger.info("Starting bot...")
    application.run_polling()


if __name__ == "__main__":
    main()
