"""
services/menus.py
-----------------
Menu texts, keyboards and the button-to-menu navigation table.

Menus are not tracked per chat: the displayed menu lives only in the
rendered Telegram message, and each button press is resolved from its
data token alone.
"""

import html
from enum import Enum

from models import Button, Keyboard

# ── AI providers offered on /start ────────────────────────
CHATGPT = "ChatGPT"
CLAUDE = "Claude"
GEMINI = "Gemini"

# ── Button tokens ─────────────────────────────────────────
NEXT_BUTTON = "Next"
BACK_BUTTON = "Back"
TUTORIAL_BUTTON = "Tutorial"
TUTORIAL_URL = "https://core.telegram.org/bots/api"

# ── Menu texts (HTML) ─────────────────────────────────────
FIRST_MENU_TEXT = "<b>Menu 1</b>\n\nA beautiful menu with a shiny inline button."
SECOND_MENU_TEXT = "<b>Menu 2</b>\n\nA better menu with even more shiny inline buttons."
GREETING_TEMPLATE = "سلام {first_name}! امروز چی میخوای؟"

PARSE_MODE_HTML = "HTML"

# One button, one row
FIRST_MENU_KEYBOARD = Keyboard.of(
    [Button.action(NEXT_BUTTON)],
)

# Two buttons, one per row
SECOND_MENU_KEYBOARD = Keyboard.of(
    [Button.action(BACK_BUTTON)],
    [Button.link(TUTORIAL_BUTTON, TUTORIAL_URL)],
)

START_MENU_KEYBOARD = Keyboard.of(
    [Button.action(CHATGPT), Button.action(CLAUDE), Button.action(GEMINI)],
)

EMPTY_KEYBOARD = Keyboard()


class MenuState(Enum):
    START = "start"
    MAIN = "main"
    SECONDARY = "secondary"


_NAVIGATION = {
    NEXT_BUTTON: MenuState.SECONDARY,
    BACK_BUTTON: MenuState.MAIN,
}


def greeting(first_name: str) -> str:
    """Text of the /start reply (HTML; the name is escaped)."""
    return GREETING_TEMPLATE.format(first_name=html.escape(first_name))


def menu_content(state: MenuState, first_name: str = "") -> tuple[str, Keyboard]:
    """Text and keyboard displayed for a menu."""
    if state is MenuState.START:
        return greeting(first_name), START_MENU_KEYBOARD
    if state is MenuState.SECONDARY:
        return SECOND_MENU_TEXT, SECOND_MENU_KEYBOARD
    return FIRST_MENU_TEXT, FIRST_MENU_KEYBOARD


def resolve_menu(data: str) -> tuple[str, Keyboard]:
    """
    Resolve a pressed button to the (text, keyboard) the message should show.

    Unknown tokens (including the provider buttons of the start menu)
    resolve to an empty text and keyboard.
    """
    state = _NAVIGATION.get(data)
    if state is None:
        return "", EMPTY_KEYBOARD
    return menu_content(state)
