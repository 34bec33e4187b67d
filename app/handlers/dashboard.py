"""
Обработчики просмотра списка заявок: фильтры, поиск, сортировка.
"""

import logging

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from app.core.clock import now_local
from app.core.config import settings
from app.models.request import STATUS_RANK
from app.models.view import DashboardView, SortField
from app.services.card_service import EMPTY_VIEW_TEXT, CardService
from app.services.request_service import RequestService
from app.services.request_sorting import parse_sort_field

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 4096
VIEW_KEY = "view"


def get_view_state(context: ContextTypes.DEFAULT_TYPE) -> DashboardView:
    """Возвращает критерии отображения текущего пользователя."""
    return context.user_data.get(VIEW_KEY) or DashboardView()


def _save_view_state(context: ContextTypes.DEFAULT_TYPE, view: DashboardView) -> None:
    context.user_data[VIEW_KEY] = view


def pack_messages(blocks: list[str], limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """
    Склеивает блоки текста в сообщения, не превышающие лимит Telegram.
    Слишком длинный блок делится только по переводам строк,
    чтобы не разорвать HTML-тег или сущность.
    """
    messages: list[str] = []
    current = ""
    for block in blocks:
        for piece in _split_lines(block, limit):
            candidate = f"{current}\n\n{piece}" if current else piece
            if len(candidate) <= limit:
                current = candidate
                continue
            if current:
                messages.append(current)
            current = piece
    if current:
        messages.append(current)
    return messages


def _split_lines(block: str, limit: int) -> list[str]:
    if len(block) <= limit:
        return [block]

    pieces: list[str] = []
    current = ""
    for line in block.split("\n"):
        if len(line) > limit:
            logger.warning(f"Message line of {len(line)} chars exceeds the limit.")
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) <= limit or not current:
            current = candidate
        else:
            pieces.append(current)
            current = line
    if current:
        pieces.append(current)
    return pieces


async def show_requests(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Показывает заявки с учетом фильтров, сгруппированные по дням.
    """
    message = update.effective_message
    request_service: RequestService = context.application.bot_data["request_service"]
    view = get_view_state(context)

    today = now_local(settings.display_timezone).date()
    groups = request_service.get_grouped_view(view, settings.current_user, today)
    total = sum(len(group.requests) for group in groups)
    logger.info(f"Showing {total} requests in {len(groups)} groups.")

    await message.reply_text(
        text=CardService.render_view_summary(view, total), parse_mode=ParseMode.HTML
    )
    if not groups:
        await message.reply_text(EMPTY_VIEW_TEXT)
        return

    blocks: list[str] = []
    for group in groups:
        blocks.append(CardService.render_group_header(group))
        blocks.extend(CardService.render_request_card(req) for req in group.requests)

    for text in pack_messages(blocks):
        await message.reply_text(text=text, parse_mode=ParseMode.HTML)


async def set_status(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Выбирает вкладку статуса.
    Использование: /status <статус|all>
    """
    message = update.effective_message
    allowed = ["all", *STATUS_RANK]

    if len(context.args) != 1 or context.args[0].lower() not in allowed:
        await message.reply_text(
            "⚠️ Укажите статус: " + ", ".join(allowed) + "\nПример: /status in_progress"
        )
        return

    view = get_view_state(context).model_copy(
        update={"status": context.args[0].lower()}
    )
    _save_view_state(context, view)
    await message.reply_text(
        text=CardService.render_view_summary(view, _count(context, view)),
        parse_mode=ParseMode.HTML,
    )


async def toggle_mine(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Включает или выключает фильтр 'Показать только мои'."""
    current = get_view_state(context)
    view = current.model_copy(update={"only_mine": not current.only_mine})
    _save_view_state(context, view)
    await update.effective_message.reply_text(
        text=CardService.render_view_summary(view, _count(context, view)),
        parse_mode=ParseMode.HTML,
    )


async def search(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Задает строку поиска. Без аргументов сбрасывает поиск.
    Использование: /search <текст>
    """
    query = " ".join(context.args or []).strip()
    view = get_view_state(context).model_copy(update={"query": query})
    _save_view_state(context, view)
    await update.effective_message.reply_text(
        text=CardService.render_view_summary(view, _count(context, view)),
        parse_mode=ParseMode.HTML,
    )


async def sort(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Сортирует по полю; повторный выбор поля меняет направление.
    Использование: /sort <поле>
    """
    message = update.effective_message
    field = parse_sort_field(context.args[0]) if len(context.args) == 1 else None
    if field is None:
        await message.reply_text(
            "⚠️ Укажите поле сортировки: "
            + ", ".join(item.value for item in SortField)
            + "\nПример: /sort priority"
        )
        return

    current = get_view_state(context)
    view = current.model_copy(update={"sort": current.sort.toggle(field)})
    _save_view_state(context, view)
    await message.reply_text(
        text=CardService.render_view_summary(view, _count(context, view)),
        parse_mode=ParseMode.HTML,
    )


def _count(context: ContextTypes.DEFAULT_TYPE, view: DashboardView) -> int:
    request_service: RequestService = context.application.bot_data["request_service"]
    return len(request_service.get_view(view, settings.current_user))
