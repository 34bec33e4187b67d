"""
Сервис для подготовки текстов карточек заявок в Telegram.
"""

import html

from app.models.request import PRIORITY_LABELS, STATUS_LABELS, Request
from app.models.view import DashboardView, RequestGroup

PRIORITY_ICONS = {
    "critical": "⏫",
    "high": "🔼",
    "medium": "🔷",
    "low": "🔽",
}

EMPTY_VIEW_TEXT = "Заявок не найдено.\nПопробуйте изменить фильтры."

# Ограничение для свободного текста, чтобы карточка помещалась в одно сообщение
MAX_FIELD_LENGTH = 500


def _clip(value: str, limit: int = MAX_FIELD_LENGTH) -> str:
    """Обрезает текст до лимита и экранирует его для HTML."""
    if len(value) > limit:
        value = value[: limit - 1] + "…"
    return html.escape(value)


class CardService:
    @staticmethod
    def render_request_card(request: Request) -> str:
        """
        Формирует HTML-карточку заявки.
        """
        priority = (
            f"{PRIORITY_ICONS[request.priority]} {PRIORITY_LABELS[request.priority]}"
        )
        text = (
            f"<b>{html.escape(request.number)}</b> · {priority}\n"
            f"📝 {_clip(request.title)}\n"
            f"📍 {_clip(request.pharmacy.address)}\n"
            f"🔧 {_clip(request.category)}\n"
            f"👤 {_clip(request.technician)}\n"
            f"🕓 {request.created_at} {request.created_time} · срок до {request.deadline}\n"
            f"Статус: <i>{STATUS_LABELS[request.status]}</i>"
        )
        if request.decision:
            text += f"\nРешение: {_clip(request.decision)}"
        return text

    @staticmethod
    def render_group_header(group: RequestGroup) -> str:
        return f"<b>— {group.label} —</b> ({len(group.requests)})"

    @staticmethod
    def render_view_summary(view: DashboardView, total: int) -> str:
        """Краткое описание активных фильтров и сортировки."""
        status = "Все статусы" if view.status == "all" else STATUS_LABELS[view.status]
        parts = [f"Статус: <b>{status}</b>"]
        if view.only_mine:
            parts.append("только мои")
        if view.query:
            parts.append(f"поиск: «{_clip(view.query)}»")
        if view.sort.field is not None:
            arrow = "↑" if view.sort.direction == "asc" else "↓"
            parts.append(f"сортировка: {view.sort.field.value} {arrow}")
        return f"📋 Заявок: {total}\n" + ", ".join(parts)
