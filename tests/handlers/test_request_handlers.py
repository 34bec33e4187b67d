"""
Тесты для диалога создания заявки.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from telegram.ext import ConversationHandler

from app.handlers import request as request_handler
from app.services.request_service import RequestService


@pytest.fixture
def request_service(directory) -> RequestService:
    return RequestService(directory=directory)


@pytest.fixture
def mock_update_context(mocker, request_service) -> tuple[MagicMock, MagicMock]:
    """Фикстура для создания моков Update и Context."""
    mock_update = mocker.MagicMock()
    mock_context = mocker.MagicMock()

    mock_update.effective_message.reply_text = mocker.AsyncMock()

    mock_context.application.bot_data = {"request_service": request_service}
    mock_context.user_data = {}

    mocker.patch(
        "app.handlers.request.now_local",
        return_value=datetime(2026, 10, 19, 22, 15, 0),
    )
    return mock_update, mock_context


async def _answer(handler, mock_update, mock_context, text: str) -> int:
    mock_update.effective_message.text = text
    return await handler(mock_update, mock_context)


@pytest.mark.asyncio
async def test_full_conversation_creates_request(mock_update_context, request_service):
    """
    Тест: Пройдя все шаги, пользователь создает заявку в начале журнала.
    """
    mock_update, mock_context = mock_update_context

    state = await request_handler.new_request_start(mock_update, mock_context)
    assert state == request_handler.PHARMACY

    state = await _answer(
        request_handler.get_pharmacy, mock_update, mock_context, "пр. Мира, 25"
    )
    assert state == request_handler.CATEGORY

    state = await _answer(
        request_handler.get_category, mock_update, mock_context, "Электрика"
    )
    assert state == request_handler.WARRANTY

    state = await _answer(request_handler.get_warranty, mock_update, mock_context, "Да")
    assert state == request_handler.TITLE

    state = await _answer(
        request_handler.get_title, mock_update, mock_context, "Не работает розетка"
    )
    assert state == request_handler.PRIORITY

    state = await _answer(
        request_handler.get_priority, mock_update, mock_context, "Высокий"
    )
    assert state == request_handler.DESCRIPTION

    state = await request_handler.skip_description(mock_update, mock_context)
    assert state == request_handler.FILES

    state = await request_handler.finish_files(mock_update, mock_context)
    assert state == ConversationHandler.END

    assert len(request_service.log) == 1
    created = request_service.log.requests[0]
    assert created.pharmacy.id == "ph-2"
    assert created.category == "Электрика"
    assert created.title == "Не работает розетка"
    assert created.priority == "high"
    assert created.technician == "Иванов И."
    assert created.created_at == "19.10.2026"
    assert created.deadline == "00:15"
    assert request_handler.FORM_KEY not in mock_context.user_data

    last_text = mock_update.effective_message.reply_text.call_args.args[0]
    assert last_text.startswith(request_handler.SUCCESS_MESSAGE)
    assert created.number in last_text


@pytest.mark.asyncio
async def test_unknown_pharmacy_id_is_accepted(mock_update_context, request_service):
    mock_update, mock_context = mock_update_context
    mock_context.user_data[request_handler.FORM_KEY] = {}

    await _answer(request_handler.get_pharmacy, mock_update, mock_context, "ph-404")
    mock_context.user_data[request_handler.FORM_KEY].update(
        {"category": "Мебель", "title": "Шатается стеллаж", "priority": "low"}
    )
    state = await _answer(
        request_handler.get_description, mock_update, mock_context, "Второй ряд"
    )
    assert state == request_handler.FILES
    await request_handler.finish_files(mock_update, mock_context)

    created = request_service.log.requests[0]
    assert created.pharmacy.id == "ph-404"
    assert created.pharmacy.address == "Неизвестный адрес"


@pytest.mark.asyncio
async def test_invalid_category_repeats_step(mock_update_context):
    mock_update, mock_context = mock_update_context
    mock_context.user_data[request_handler.FORM_KEY] = {}

    state = await _answer(
        request_handler.get_category, mock_update, mock_context, "Космос"
    )

    assert state == request_handler.CATEGORY
    assert "category" not in mock_context.user_data[request_handler.FORM_KEY]


@pytest.mark.asyncio
async def test_invalid_priority_repeats_step(mock_update_context):
    mock_update, mock_context = mock_update_context
    mock_context.user_data[request_handler.FORM_KEY] = {}

    state = await _answer(
        request_handler.get_priority, mock_update, mock_context, "Срочно!!!"
    )

    assert state == request_handler.PRIORITY


@pytest.mark.asyncio
async def test_incomplete_form_is_rejected(mock_update_context, request_service):
    mock_update, mock_context = mock_update_context
    mock_context.user_data[request_handler.FORM_KEY] = {"pharmacy": "ph-1"}

    state = await request_handler.finish_files(mock_update, mock_context)

    assert state == ConversationHandler.END
    assert len(request_service.log) == 0


@pytest.mark.asyncio
async def test_invalid_warranty_answer_repeats_step(mock_update_context):
    mock_update, mock_context = mock_update_context
    mock_context.user_data[request_handler.FORM_KEY] = {}

    state = await _answer(
        request_handler.get_warranty, mock_update, mock_context, "Может быть"
    )

    assert state == request_handler.WARRANTY
    assert "is_warranty" not in mock_context.user_data[request_handler.FORM_KEY]


@pytest.mark.asyncio
async def test_warranty_and_files_reach_the_form(
    mock_update_context, request_service, mocker
):
    """
    Тест: Признак гарантии и ссылки на фото и документы попадают в форму.
    """
    mock_update, mock_context = mock_update_context
    mock_context.user_data[request_handler.FORM_KEY] = {
        "pharmacy": "ph-1",
        "category": "Мебель",
        "title": "Сломана витрина",
        "priority": "medium",
    }
    create_spy = mocker.spy(request_service, "create_request")
    message = mock_update.effective_message

    await _answer(request_handler.get_warranty, mock_update, mock_context, "Нет")
    assert mock_context.user_data[request_handler.FORM_KEY]["is_warranty"] is False
    mock_context.user_data[request_handler.FORM_KEY]["is_warranty"] = True

    # Фото: берется самый крупный размер
    message.photo = [mocker.Mock(file_id="small"), mocker.Mock(file_id="large")]
    message.document = None
    state = await request_handler.get_file(mock_update, mock_context)
    assert state == request_handler.FILES

    message.photo = []
    message.document = mocker.Mock(file_id="doc-1")
    state = await request_handler.get_file(mock_update, mock_context)
    assert state == request_handler.FILES

    state = await request_handler.finish_files(mock_update, mock_context)
    assert state == ConversationHandler.END

    form = create_spy.call_args.args[0]
    assert form.is_warranty is True
    assert form.files == ("large", "doc-1")
    assert len(request_service.log) == 1


@pytest.mark.asyncio
async def test_file_step_without_attachment_repeats(mock_update_context):
    mock_update, mock_context = mock_update_context
    mock_context.user_data[request_handler.FORM_KEY] = {}
    mock_update.effective_message.photo = []
    mock_update.effective_message.document = None

    state = await request_handler.get_file(mock_update, mock_context)

    assert state == request_handler.FILES
    assert "files" not in mock_context.user_data[request_handler.FORM_KEY]


@pytest.mark.asyncio
async def test_cancel_clears_form(mock_update_context):
    mock_update, mock_context = mock_update_context
    mock_context.user_data[request_handler.FORM_KEY] = {"pharmacy": "ph-1"}

    state = await request_handler.cancel(mock_update, mock_context)

    assert state == ConversationHandler.END
    assert request_handler.FORM_KEY not in mock_context.user_data
