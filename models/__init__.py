"""
models/ - Domain Layer
=======================
Plain dataclasses describing inbound updates and outbound keyboards.
No Telegram library types leak into this package.
"""

from models.keyboard import Button, Keyboard
from models.update import (
    ButtonCallbackEvent,
    Entity,
    MessageEvent,
    MessageRef,
    Sender,
    Update,
)

__all__ = [
    "Button",
    "ButtonCallbackEvent",
    "Entity",
    "Keyboard",
    "MessageEvent",
    "MessageRef",
    "Sender",
    "Update",
]
