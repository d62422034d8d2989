"""
transport/telegram_transport.py
-------------------------------
Transport implementation on top of python-telegram-bot.

Responsibilities:
    - Long-poll getUpdates through ``telegram.ext.Updater`` and convert
      each ``telegram.Update`` from its queue into a model.
    - Convert keyboards/entities back into Telegram types for outbound calls.
    - Wrap ``telegram.error.TelegramError`` into ``TransportError``.
"""

import asyncio
from typing import AsyncIterator, Optional, Sequence

from telegram import (
    Bot,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    MessageEntity,
    User,
)
from telegram import Update as TelegramUpdate
from telegram.error import TelegramError
from telegram.ext import Updater

from models import (
    ButtonCallbackEvent,
    Entity,
    Keyboard,
    MessageEvent,
    MessageRef,
    Sender,
    Update,
)
from transport.base import TransportError
from utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_UPDATES = ["message", "callback_query"]


def to_sender(user: User) -> Sender:
    return Sender(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        username=user.username,
        language_code=user.language_code,
        is_bot=user.is_bot,
    )


def to_user(sender: Sender) -> User:
    return User(
        id=sender.id,
        first_name=sender.first_name,
        is_bot=sender.is_bot,
        last_name=sender.last_name,
        username=sender.username,
        language_code=sender.language_code,
    )


def to_model(update: TelegramUpdate) -> Optional[Update]:
    """Convert a Telegram update into a MessageEvent / ButtonCallbackEvent, or None."""
    if update.message is not None:
        msg = update.message
        return MessageEvent(
            chat_id=msg.chat_id,
            message_id=msg.message_id,
            text=msg.text or "",
            sender=to_sender(msg.from_user) if msg.from_user is not None else None,
            entities=tuple(
                Entity(
                    type=e.type,
                    offset=e.offset,
                    length=e.length,
                    url=e.url,
                    language=e.language,
                    user=to_sender(e.user) if e.user is not None else None,
                    custom_emoji_id=e.custom_emoji_id,
                )
                for e in msg.entities or ()
            ),
        )

    if update.callback_query is not None:
        query = update.callback_query
        ref = None
        if query.message is not None:
            ref = MessageRef(chat_id=query.message.chat.id, message_id=query.message.message_id)
        return ButtonCallbackEvent(callback_id=query.id, data=query.data or "", message=ref)

    return None


def to_markup(keyboard: Keyboard) -> InlineKeyboardMarkup:
    """Build the Telegram inline keyboard for a Keyboard model."""
    return InlineKeyboardMarkup(
        [
            [
                InlineKeyboardButton(b.label, url=b.url)
                if b.url is not None
                else InlineKeyboardButton(b.label, callback_data=b.data)
                for b in row
            ]
            for row in keyboard.rows
        ]
    )


def to_entities(entities: Sequence[Entity]) -> list[MessageEntity]:
    return [
        MessageEntity(
            type=e.type,
            offset=e.offset,
            length=e.length,
            url=e.url,
            user=to_user(e.user) if e.user is not None else None,
            language=e.language,
            custom_emoji_id=e.custom_emoji_id,
        )
        for e in entities
    ]


def _log_poll_error(error: TelegramError) -> None:
    logger.error(f"Failed to get updates, polling will retry: {error}")


class TelegramTransport:
    """
    Telegram Bot API transport.

    Use ``async with transport.updater:`` to initialize the bot, then
    ``start()`` before consuming ``receive()`` and ``stop()`` when done.
    """

    def __init__(self, bot: Bot, poll_timeout: int = 60):
        self.bot = bot
        self.poll_timeout = poll_timeout
        self.update_queue: asyncio.Queue = asyncio.Queue()
        self.updater = Updater(bot, self.update_queue)

    async def start(self) -> None:
        """Start long polling in the background; updates land in ``update_queue``."""
        await self.updater.start_polling(
            timeout=self.poll_timeout,
            allowed_updates=ALLOWED_UPDATES,
            error_callback=_log_poll_error,
        )

    async def stop(self) -> None:
        if self.updater.running:
            await self.updater.stop()

    async def receive(self) -> AsyncIterator[Optional[Update]]:
        """Yield updates forever, in the order Telegram delivers them."""
        while True:
            raw = await self.update_queue.get()
            yield to_model(raw)

    async def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: Optional[str] = None,
        keyboard: Optional[Keyboard] = None,
        entities: Optional[Sequence[Entity]] = None,
    ) -> MessageRef:
        try:
            sent = await self.bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=parse_mode,
                reply_markup=to_markup(keyboard) if keyboard is not None else None,
                entities=to_entities(entities) if entities else None,
            )
        except TelegramError as e:
            raise TransportError("send_message", chat_id, e) from e
        return MessageRef(chat_id=sent.chat_id, message_id=sent.message_id)

    async def copy_message(self, from_chat_id: int, chat_id: int, message_id: int) -> MessageRef:
        try:
            copied = await self.bot.copy_message(
                chat_id=chat_id,
                from_chat_id=from_chat_id,
                message_id=message_id,
            )
        except TelegramError as e:
            raise TransportError("copy_message", chat_id, e) from e
        return MessageRef(chat_id=chat_id, message_id=copied.message_id)

    async def edit_message(
        self,
        chat_id: int,
        message_id: int,
        text: str,
        keyboard: Keyboard,
        parse_mode: Optional[str] = None,
    ) -> None:
        try:
            await self.bot.edit_message_text(
                text=text,
                chat_id=chat_id,
                message_id=message_id,
                parse_mode=parse_mode,
                reply_markup=to_markup(keyboard),
            )
        except TelegramError as e:
            raise TransportError("edit_message", chat_id, e) from e

    async def answer_callback(self, callback_id: str, text: Optional[str] = None) -> None:
        try:
            await self.bot.answer_callback_query(callback_query_id=callback_id, text=text or None)
        except TelegramError as e:
            raise TransportError("answer_callback", None, e) from e
