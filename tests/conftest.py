import asyncio
from typing import Any

import pytest

from models import MessageRef, Sender
from services.context import BotContext
from services.mode_store import ModeStore
from transport.base import TransportError


class FakeTransport:
    """Records outbound calls; optionally fails chosen operations."""

    def __init__(self, updates=(), fail: tuple[str, ...] = ()):
        self.updates = list(updates)
        self.fail = set(fail)
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._next_id = 1000

    def _record(self, op: str, **kw) -> None:
        self.calls.append((op, kw))
        if op in self.fail:
            raise TransportError(op, kw.get("chat_id"), RuntimeError("boom"))

    def ops(self) -> list[str]:
        return [op for op, _ in self.calls]

    async def receive(self):
        for u in self.updates:
            await asyncio.sleep(0)
            yield u

    async def send_message(self, chat_id, text, parse_mode=None, keyboard=None, entities=None):
        self._record("send_message", chat_id=chat_id, text=text, parse_mode=parse_mode,
                     keyboard=keyboard, entities=entities)
        self._next_id += 1
        return MessageRef(chat_id, self._next_id)

    async def copy_message(self, from_chat_id, chat_id, message_id):
        self._record("copy_message", from_chat_id=from_chat_id, chat_id=chat_id,
                     message_id=message_id)
        self._next_id += 1
        return MessageRef(chat_id, self._next_id)

    async def edit_message(self, chat_id, message_id, text, keyboard, parse_mode=None):
        self._record("edit_message", chat_id=chat_id, message_id=message_id, text=text,
                     keyboard=keyboard, parse_mode=parse_mode)

    async def answer_callback(self, callback_id, text=None):
        self._record("answer_callback", callback_id=callback_id, text=text)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def ctx(transport):
    return BotContext(transport=transport, mode=ModeStore())


@pytest.fixture
def ana():
    return Sender(id=42, first_name="Ana", last_name="Lima", username="ana", language_code="pt")
