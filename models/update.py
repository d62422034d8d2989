"""
models/update.py
----------------
Domain models for inbound Telegram updates.

An Update is either a MessageEvent or a ButtonCallbackEvent, never both.
The transport produces None for updates with no actionable payload
(edited messages, channel posts, ...).
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Sender:
    """A Telegram user: a message author or a mentioned user."""
    id: int
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    is_bot: bool = False

    @property
    def full_name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name


@dataclass(frozen=True)
class Entity:
    """
    A rich-text formatting span (bold, italic, link...).

    Offsets and lengths refer to the original message text and are
    reattached unchanged when the text is transformed.
    """
    type: str
    offset: int
    length: int
    url: Optional[str] = None
    language: Optional[str] = None
    # text_mention
    user: Optional[Sender] = None
    # custom_emoji
    custom_emoji_id: Optional[str] = None


@dataclass(frozen=True)
class MessageRef:
    """Identifies a message already sent to a chat."""
    chat_id: int
    message_id: int


@dataclass(frozen=True)
class MessageEvent:
    """
    An inbound text message.

    Attributes:
        chat_id: Chat the message was posted in.
        message_id: Telegram message id, used to copy the message.
        text: Raw message text ("" for media without caption).
        sender: Author of the message (None for anonymous channel posts).
        entities: Formatting spans attached to ``text``.
    """
    chat_id: int
    message_id: int
    text: str
    sender: Optional[Sender] = None
    entities: tuple[Entity, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ButtonCallbackEvent:
    """
    An inline-keyboard button press.

    Attributes:
        callback_id: Opaque token needed to acknowledge the press.
        data: The pressed button's data token.
        message: The message carrying the keyboard (None for inline-mode messages).
    """
    callback_id: str
    data: str
    message: Optional[MessageRef] = None


Update = Union[MessageEvent, ButtonCallbackEvent]
