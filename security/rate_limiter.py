"""
security/rate_limiter.py
-------------------------
Rate limiting to prevent abuse.
Limits the number of messages a user can send within a time window.
"""

import time
from typing import Callable

from utils.logger import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Sliding-window message counter per user.

    Configuration (via .env):
        RATE_LIMIT_MESSAGES: Max messages per window (0 disables the limiter).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 60).
    """

    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        # {user_id: [timestamp1, timestamp2, ...]}
        self._user_timestamps: dict[int, list[float]] = {}

    @property
    def enabled(self) -> bool:
        return self.limit > 0

    def _cleanup(self, now: float) -> None:
        """Remove expired timestamps, and users with none left."""
        cutoff = now - self.window_seconds
        for user_id in list(self._user_timestamps):
            recent = [t for t in self._user_timestamps[user_id] if t > cutoff]
            if recent:
                self._user_timestamps[user_id] = recent
            else:
                del self._user_timestamps[user_id]

    def tracked_users(self) -> int:
        return len(self._user_timestamps)

    def allow(self, user_id: int) -> bool:
        """Record a message from ``user_id``; False when over the limit."""
        if not self.enabled:
            return True

        now = self._clock()
        self._cleanup(now)
        timestamps = self._user_timestamps.setdefault(user_id, [])

        if len(timestamps) >= self.limit:
            logger.warning(f"⚠️ Rate limit hit for user {user_id}")
            return False

        timestamps.append(now)
        return True
