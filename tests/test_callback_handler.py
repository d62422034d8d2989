import pytest

from handlers.callback_handler import handle_button
from models import ButtonCallbackEvent, MessageRef
from services.menus import (
    EMPTY_KEYBOARD,
    FIRST_MENU_KEYBOARD,
    FIRST_MENU_TEXT,
    PARSE_MODE_HTML,
    SECOND_MENU_KEYBOARD,
    SECOND_MENU_TEXT,
)


def _press(data, chat_id=7, message_id=3):
    return ButtonCallbackEvent(callback_id="cb-1", data=data, message=MessageRef(chat_id, message_id))


@pytest.mark.asyncio
async def test_next_acks_then_edits_to_second_menu(ctx, transport):
    await handle_button(ctx, _press("Next"))

    assert transport.ops() == ["answer_callback", "edit_message"]
    assert transport.calls[0][1]["callback_id"] == "cb-1"
    assert transport.calls[1][1] == {
        "chat_id": 7,
        "message_id": 3,
        "text": SECOND_MENU_TEXT,
        "keyboard": SECOND_MENU_KEYBOARD,
        "parse_mode": PARSE_MODE_HTML,
    }


@pytest.mark.asyncio
async def test_back_edits_to_first_menu(ctx, transport):
    await handle_button(ctx, _press("Back", chat_id=-100))

    edit = transport.calls[1][1]
    assert edit["chat_id"] == -100
    assert edit["text"] == FIRST_MENU_TEXT
    assert edit["keyboard"] == FIRST_MENU_KEYBOARD


@pytest.mark.asyncio
async def test_unknown_token_still_acks_and_sends_empty_edit(ctx, transport):
    await handle_button(ctx, _press("Claude"))

    assert transport.ops() == ["answer_callback", "edit_message"]
    assert transport.calls[1][1]["text"] == ""
    assert transport.calls[1][1]["keyboard"] == EMPTY_KEYBOARD


@pytest.mark.asyncio
async def test_failed_ack_does_not_prevent_edit(ctx, transport, caplog):
    transport.fail.add("answer_callback")
    await handle_button(ctx, _press("Next"))

    assert transport.ops() == ["answer_callback", "edit_message"]
    assert "cb-1" in caplog.text


@pytest.mark.asyncio
async def test_failed_edit_is_swallowed(ctx, transport):
    transport.fail.add("edit_message")
    await handle_button(ctx, _press("Next"))
    assert transport.ops() == ["answer_callback", "edit_message"]


@pytest.mark.asyncio
async def test_callback_without_message_is_only_acknowledged(ctx, transport):
    await handle_button(ctx, ButtonCallbackEvent(callback_id="cb-2", data="Next"))
    assert transport.ops() == ["answer_callback"]
