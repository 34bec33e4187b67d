"""
Обработчики для создания заявки на ремонт.
"""

import logging

from pydantic import ValidationError
from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes, ConversationHandler

from app.core.clock import now_local
from app.core.config import settings
from app.models.request import PRIORITY_LABELS, CreateRequestFormData
from app.services.card_service import CardService
from app.services.request_service import RequestService

logger = logging.getLogger(__name__)

# --- Константы для сообщений ---
SUCCESS_MESSAGE = "✅ Заявка создана."
FORM_KEY = "request_form"

# Определяем состояния диалога
(PHARMACY, CATEGORY, WARRANTY, TITLE, PRIORITY, DESCRIPTION, FILES) = range(7)

WARRANTY_ANSWERS = {"Да": True, "Нет": False}


def _one_column_keyboard(items: list[str]) -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        [[item] for item in items], one_time_keyboard=True, resize_keyboard=True
    )


async def new_request_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Начинает диалог создания новой заявки."""
    message = update.effective_message
    request_service: RequestService = context.application.bot_data["request_service"]
    context.user_data[FORM_KEY] = {}

    addresses = [pharmacy.address for pharmacy in request_service.directory.get_all()]
    reply_markup = _one_column_keyboard(addresses) if addresses else None

    await message.reply_text(
        "Создание новой заявки.\n\n"
        "<b>Шаг 1/7:</b> Выберите аптеку или введите ее ID.",
        reply_markup=reply_markup,
        parse_mode=ParseMode.HTML,
    )
    return PHARMACY


async def get_pharmacy(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Получает аптеку и запрашивает категорию."""
    message = update.effective_message
    text = message.text.strip()
    request_service: RequestService = context.application.bot_data["request_service"]

    # Кнопки содержат адреса, но можно ввести и ID аптеки вручную
    pharmacy = request_service.directory.find_by_address(text)
    context.user_data[FORM_KEY]["pharmacy"] = pharmacy.id if pharmacy else text

    await message.reply_text(
        "<b>Шаг 2/7:</b> Выберите категорию с помощью кнопок ниже.",
        reply_markup=_one_column_keyboard(settings.categories),
        parse_mode=ParseMode.HTML,
    )
    return CATEGORY


async def get_category(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Получает категорию и спрашивает, гарантийный ли случай."""
    message = update.effective_message
    category = message.text.strip()

    if category not in settings.categories:
        await message.reply_text(
            "Пожалуйста, выберите категорию, используя предложенные кнопки."
        )
        return CATEGORY  # Остаемся на том же шаге

    context.user_data[FORM_KEY]["category"] = category
    await message.reply_text(
        f"Категория: <b>{category}</b>\n\n<b>Шаг 3/7:</b> Это гарантийный случай?",
        reply_markup=_one_column_keyboard(list(WARRANTY_ANSWERS)),
        parse_mode=ParseMode.HTML,
    )
    return WARRANTY


async def get_warranty(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Получает признак гарантии и запрашивает тему заявки."""
    message = update.effective_message
    answer = message.text.strip()

    if answer not in WARRANTY_ANSWERS:
        await message.reply_text("Пожалуйста, ответьте «Да» или «Нет» кнопками ниже.")
        return WARRANTY

    context.user_data[FORM_KEY]["is_warranty"] = WARRANTY_ANSWERS[answer]
    await message.reply_text(
        "<b>Шаг 4/7:</b> Введите тему заявки.",
        reply_markup=ReplyKeyboardRemove(),
        parse_mode=ParseMode.HTML,
    )
    return TITLE


async def get_title(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Получает тему и запрашивает приоритет."""
    message = update.effective_message
    title = message.text.strip()

    if not title:
        await message.reply_text("Тема заявки не может быть пустой.")
        return TITLE

    context.user_data[FORM_KEY]["title"] = title
    await message.reply_text(
        "<b>Шаг 5/7:</b> Выберите приоритет.",
        reply_markup=_one_column_keyboard(list(PRIORITY_LABELS.values())),
        parse_mode=ParseMode.HTML,
    )
    return PRIORITY


async def get_priority(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Получает приоритет и запрашивает описание."""
    message = update.effective_message
    label = message.text.strip()
    priority = next(
        (key for key, value in PRIORITY_LABELS.items() if value == label), None
    )

    if priority is None:
        await message.reply_text(
            "Пожалуйста, выберите приоритет, используя предложенные кнопки."
        )
        return PRIORITY

    context.user_data[FORM_KEY]["priority"] = priority
    await message.reply_text(
        "<b>Шаг 6/7:</b> Опишите проблему. Если описание не требуется, нажмите /skip.",
        reply_markup=ReplyKeyboardRemove(),
        parse_mode=ParseMode.HTML,
    )
    return DESCRIPTION


async def get_description(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Получает описание и запрашивает файлы."""
    context.user_data[FORM_KEY]["description"] = update.effective_message.text.strip()
    return await _ask_files(update)


async def skip_description(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Пропускает шаг с описанием."""
    return await _ask_files(update)


async def _ask_files(update: Update) -> int:
    await update.effective_message.reply_text(
        "<b>Шаг 7/7:</b> Прикрепите фотографии или документы. "
        "Когда закончите, нажмите /done. Если файлы не нужны, нажмите /skip.",
        parse_mode=ParseMode.HTML,
    )
    return FILES


async def get_file(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Сохраняет ссылку на присланное фото или документ."""
    message = update.effective_message

    if message.photo:
        file_id = message.photo[-1].file_id
    elif message.document:
        file_id = message.document.file_id
    else:
        await message.reply_text("Пришлите фото или документ, либо нажмите /done.")
        return FILES

    files = context.user_data[FORM_KEY].setdefault("files", [])
    files.append(file_id)
    await message.reply_text(
        f"Файл прикреплен (всего: {len(files)}). Отправьте еще или нажмите /done."
    )
    return FILES


async def finish_files(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Завершает шаг с файлами (/done или /skip) и сохраняет заявку."""
    return await _create_request(update, context)


async def _create_request(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    message = update.effective_message
    request_service: RequestService = context.application.bot_data["request_service"]
    form_data = context.user_data.pop(FORM_KEY, {})

    try:
        form = CreateRequestFormData(**form_data)
    except ValidationError as e:
        logger.warning(f"Invalid request form data {form_data}: {e}")
        await message.reply_text(
            "❌ Не все поля заявки заполнены. Начните заново командой /new."
        )
        return ConversationHandler.END

    now = now_local(settings.display_timezone)
    request = request_service.create_request(form, settings.current_user, now)

    await message.reply_text(
        f"{SUCCESS_MESSAGE}\n\n{CardService.render_request_card(request)}",
        parse_mode=ParseMode.HTML,
    )
    return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Отменяет текущий диалог."""
    context.user_data.pop(FORM_KEY, None)

    await update.effective_message.reply_text(
        "Создание заявки отменено.", reply_markup=ReplyKeyboardRemove()
    )
    return ConversationHandler.END
