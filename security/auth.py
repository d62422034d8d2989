"""
security/auth.py
-----------------
Access control for inbound messages.
Blocks any user not in the allowed whitelist.
"""

from typing import Iterable, Optional

from models import Sender
from utils.logger import get_logger

logger = get_logger(__name__)


class AccessGuard:
    """
    Restricts the bot to whitelisted users.

    Behavior:
        - If the whitelist is empty, ALL users are allowed (dev mode).
        - If the list is set, only those users can use the bot.
        - Unauthorized attempts are logged.
    """

    def __init__(self, allowed_user_ids: Iterable[int] = ()):
        self.allowed_user_ids = frozenset(allowed_user_ids)

    def is_allowed(self, sender: Optional[Sender]) -> bool:
        if sender is None:
            return False

        # If no whitelist configured, allow all (dev mode)
        if not self.allowed_user_ids:
            return True

        if sender.id not in self.allowed_user_ids:
            logger.warning(
                f"🚫 Unauthorized access attempt: user_id={sender.id}, "
                f"username={sender.username}, name={sender.first_name}"
            )
            return False
        return True
