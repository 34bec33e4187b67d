"""
Обработчики общих команд.
"""

import logging

from telegram import Update
from telegram.ext import ContextTypes

from app.core.config import settings

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Команды панели заявок:\n"
    "/requests - показать заявки\n"
    "/status &lt;статус|all&gt; - фильтр по статусу\n"
    "/mine - только мои заявки (вкл/выкл)\n"
    "/search &lt;текст&gt; - поиск по номеру, теме, адресу или категории\n"
    "/sort &lt;поле&gt; - сортировка (повторный вызов меняет направление)\n"
    "/new - создать новую заявку"
)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Обработчик команды /start.

    Приветствует пользователя и показывает список команд.
    """
    user = update.effective_user
    if user:
        logger.info(f"User {user.id} ({user.username}) started the bot.")

    await update.effective_message.reply_html(
        f"Привет, {settings.current_user}! 👋\n\n{HELP_TEXT}"
    )


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Логирует ошибки и сообщает пользователю о сбое.
    """
    logger.error("Exception while handling an update:", exc_info=context.error)

    if isinstance(update, Update) and update.effective_message:
        try:
            await update.effective_message.reply_text(
                "❌ Произошла ошибка. Пожалуйста, попробуйте позже."
            )
        except Exception as e:
            logger.error(f"Failed to send error message to user: {e}")
