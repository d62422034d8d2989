"""
services/mode_store.py
----------------------
The "screaming" mode flag shared by every chat.
"""

import threading


class ModeStore:
    """
    A lock-guarded boolean.

    One instance is shared by all chats: /scream in one chat makes the
    bot scream everywhere until someone sends /whisper.
    """

    def __init__(self, screaming: bool = False):
        self._lock = threading.Lock()
        self._screaming = screaming

    def is_screaming(self) -> bool:
        with self._lock:
            return self._screaming

    def set_screaming(self, value: bool) -> None:
        with self._lock:
            self._screaming = value
