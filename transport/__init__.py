"""
transport/ - Messaging Platform Boundary
=========================================
Everything that talks to Telegram lives here. The rest of the bot
only sees the Transport protocol and the models package.
"""

from transport.base import Transport, TransportError

__all__ = ["Transport", "TransportError"]
