"""
services/context.py
-------------------
Everything a handler needs, passed explicitly instead of kept in globals.
"""

from dataclasses import dataclass, field
from typing import Optional

from security.auth import AccessGuard
from security.rate_limiter import RateLimiter
from services.mode_store import ModeStore
from transport.base import Transport


@dataclass
class BotContext:
    """
    Attributes:
        transport: Outbound calls to the messaging platform.
        mode: The shared screaming flag.
        guard: Optional user whitelist for message events.
        limiter: Optional per-user message rate limiter.
    """
    transport: Transport
    mode: ModeStore = field(default_factory=ModeStore)
    guard: Optional[AccessGuard] = None
    limiter: Optional[RateLimiter] = None
