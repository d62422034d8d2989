"""
transport/base.py
-----------------
Contract between the dispatch core and the messaging platform.
"""

from typing import AsyncIterator, Optional, Protocol, Sequence

from models import Entity, Keyboard, MessageRef, Update


class TransportError(Exception):
    """
    An outbound call to the messaging platform failed.

    Attributes:
        operation: Name of the failed call (e.g. ``send_message``).
        chat_id: Target chat, when the call has one.
    """

    def __init__(self, operation: str, chat_id: Optional[int] = None, cause: Optional[BaseException] = None):
        self.operation = operation
        self.chat_id = chat_id
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{operation} failed (chat_id={chat_id}){detail}")


class Transport(Protocol):
    """Inbound update stream plus the outbound calls the handlers need."""

    def receive(self) -> AsyncIterator[Optional[Update]]:
        """Endless stream of updates; None for updates with nothing to handle."""
        ...

    async def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: Optional[str] = None,
        keyboard: Optional[Keyboard] = None,
        entities: Optional[Sequence[Entity]] = None,
    ) -> MessageRef:
        ...

    async def copy_message(self, from_chat_id: int, chat_id: int, message_id: int) -> MessageRef:
        ...

    async def edit_message(
        self,
        chat_id: int,
        message_id: int,
        text: str,
        keyboard: Keyboard,
        parse_mode: Optional[str] = None,
    ) -> None:
        ...

    async def answer_callback(self, callback_id: str, text: Optional[str] = None) -> None:
        ...
