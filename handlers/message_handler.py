"""
handlers/message_handler.py
----------------------------
Handles text messages: bot commands, and echoing everything else
(upper-cased while screaming, copied verbatim otherwise).
"""

import re
from typing import Awaitable, Callable, Optional

from models import MessageEvent
from services.context import BotContext
from services.menus import PARSE_MODE_HTML, MenuState, menu_content
from transport.base import TransportError
from utils.logger import get_logger

logger = get_logger(__name__)

COMMAND_MARKER = "/"
_WHITESPACE = re.compile(r"\s")


def parse_command(text: str) -> Optional[str]:
    """
    Return the command name of a ``/command args...`` message.

    The name is everything between the marker and the first whitespace.
    Returns None when the text is not a command.
    """
    if not text.startswith(COMMAND_MARKER):
        return None
    return _WHITESPACE.split(text[len(COMMAND_MARKER):], maxsplit=1)[0]


async def start_command(ctx: BotContext, event: MessageEvent) -> None:
    """Handle /start - greet the user and offer the AI providers."""
    text, keyboard = menu_content(MenuState.START, event.sender.first_name)
    await ctx.transport.send_message(event.chat_id, text, parse_mode=PARSE_MODE_HTML, keyboard=keyboard)


async def scream_command(ctx: BotContext, event: MessageEvent) -> None:
    """Handle /scream - echo everything upper-cased, in every chat."""
    ctx.mode.set_screaming(True)
    logger.info(f"Screaming mode enabled by user {event.sender.id}")


async def whisper_command(ctx: BotContext, event: MessageEvent) -> None:
    """Handle /whisper - back to verbatim copies."""
    ctx.mode.set_screaming(False)
    logger.info(f"Screaming mode disabled by user {event.sender.id}")


async def menu_command(ctx: BotContext, event: MessageEvent) -> None:
    """Handle /menu - show the first navigation menu."""
    text, keyboard = menu_content(MenuState.MAIN)
    await ctx.transport.send_message(event.chat_id, text, parse_mode=PARSE_MODE_HTML, keyboard=keyboard)


COMMANDS: dict[str, Callable[[BotContext, MessageEvent], Awaitable[None]]] = {
    "start": start_command,
    "scream": scream_command,
    "whisper": whisper_command,
    "menu": menu_command,
}


async def handle_message(ctx: BotContext, event: MessageEvent) -> None:
    """
    Handle one inbound message.

    Rules, first match wins:
        1. ``/command`` → run the command (unknown commands are ignored).
        2. Screaming and non-empty text → send the text upper-cased,
           keeping the original formatting entities.
        3. Anything else → copy the message back into the chat.

    Transport failures are logged and swallowed.
    """
    user = event.sender
    if user is None:
        return

    logger.debug(
        f"id: {user.id} | username: {user.username} | "
        f"lang code: {user.language_code} | name: {user.full_name}"
    )
    logger.info(f"{user.first_name} wrote {event.text!r}")

    if ctx.guard is not None and not ctx.guard.is_allowed(user):
        return
    if ctx.limiter is not None and not ctx.limiter.allow(user.id):
        return

    try:
        command = parse_command(event.text)
        if command is not None:
            handler = COMMANDS.get(command)
            if handler is None:
                logger.debug(f"Ignoring unknown command /{command}")
                return
            await handler(ctx, event)
        elif ctx.mode.is_screaming() and event.text:
            # Entities are reattached unchanged (bold, italic..)
            await ctx.transport.send_message(
                event.chat_id,
                event.text.upper(),
                entities=event.entities,
            )
        else:
            # Like forwarding, without the "forwarded from" header
            await ctx.transport.copy_message(event.chat_id, event.chat_id, event.message_id)
    except TransportError as e:
        logger.error(f"An error occurred during {e.operation} (chat_id={e.chat_id}): {e}")
