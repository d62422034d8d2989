"""
handlers/callback_handler.py
-----------------------------
Handles inline keyboard button presses: menu navigation.
"""

from models import ButtonCallbackEvent
from services.context import BotContext
from services.menus import PARSE_MODE_HTML, resolve_menu
from transport.base import TransportError
from utils.logger import get_logger

logger = get_logger(__name__)


async def handle_button(ctx: BotContext, event: ButtonCallbackEvent) -> None:
    """
    Handle a button press.

    Always acknowledges the callback first (clears the client's loading
    spinner), then replaces the message text and keyboard with the menu
    the button leads to. Each step's failure is logged on its own.
    """
    text, keyboard = resolve_menu(event.data)

    try:
        await ctx.transport.answer_callback(event.callback_id)
    except TransportError as e:
        logger.error(f"Failed to acknowledge callback {event.callback_id}: {e}")

    if event.message is None:
        logger.warning(f"Callback {event.callback_id} has no message to edit")
        return

    try:
        await ctx.transport.edit_message(
            event.message.chat_id,
            event.message.message_id,
            text,
            keyboard,
            parse_mode=PARSE_MODE_HTML,
        )
    except TransportError as e:
        logger.error(f"An error occurred during {e.operation} (chat_id={e.chat_id}): {e}")
