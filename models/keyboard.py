"""
models/keyboard.py
------------------
Inline keyboard layout: ordered rows of buttons.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Button:
    """
    A single inline button.

    Exactly one of ``data`` (sent back as the callback data) or ``url``
    (opens a link, never produces a callback) is set.
    """
    label: str
    data: Optional[str] = None
    url: Optional[str] = None

    def __post_init__(self):
        if (self.data is None) == (self.url is None):
            raise ValueError(f"Button {self.label!r} needs exactly one of data or url")

    @classmethod
    def action(cls, label: str, data: Optional[str] = None) -> "Button":
        """Data-carrying button; the data defaults to the label."""
        return cls(label=label, data=label if data is None else data)

    @classmethod
    def link(cls, label: str, url: str) -> "Button":
        return cls(label=label, url=url)


@dataclass(frozen=True)
class Keyboard:
    """Ordered rows of buttons. An empty keyboard has no rows."""
    rows: tuple[tuple[Button, ...], ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, *rows: list[Button]) -> "Keyboard":
        return cls(rows=tuple(tuple(row) for row in rows))

    @property
    def buttons(self) -> list[Button]:
        return [button for row in self.rows for button in row]

    def is_empty(self) -> bool:
        return not self.rows
