"""
main.py
-------
Entry point for the AI Gateway Telegram bot.

Responsibilities:
    - Load and validate configuration.
    - Build the Telegram transport and the dispatch context.
    - Receive updates until the operator presses Enter (or Ctrl+C).
"""

import asyncio
import sys
import threading

from telegram import Bot
from telegram.request import HTTPXRequest

from config import (
    ALLOWED_USER_IDS,
    POLL_TIMEOUT_SECONDS,
    RATE_LIMIT_MESSAGES,
    RATE_LIMIT_WINDOW_SECONDS,
    TELEGRAM_BOT_TOKEN,
    ConfigError,
    validate_config,
)
from handlers.router import receive_updates
from security.auth import AccessGuard
from security.rate_limiter import RateLimiter
from services.context import BotContext
from services.mode_store import ModeStore
from transport.telegram_transport import TelegramTransport
from utils.logger import get_logger

logger = get_logger(__name__)


def build_bot() -> Bot:
    """Create the Bot with a read timeout long enough for long polling."""
    return Bot(
        token=TELEGRAM_BOT_TOKEN,
        get_updates_request=HTTPXRequest(read_timeout=POLL_TIMEOUT_SECONDS + 10),
    )


def build_context(transport: TelegramTransport) -> BotContext:
    return BotContext(
        transport=transport,
        mode=ModeStore(),
        guard=AccessGuard(ALLOWED_USER_IDS),
        limiter=RateLimiter(RATE_LIMIT_MESSAGES, RATE_LIMIT_WINDOW_SECONDS),
    )


def watch_stdin(cancel: asyncio.Event) -> None:
    """Set ``cancel`` once a newline arrives on stdin (daemon thread)."""
    loop = asyncio.get_running_loop()

    def _read() -> None:
        sys.stdin.readline()
        loop.call_soon_threadsafe(cancel.set)

    threading.Thread(target=_read, name="stdin-watcher", daemon=True).start()


async def run() -> None:
    """Run the receive loop until the operator stops it."""
    bot = build_bot()
    transport = TelegramTransport(bot, poll_timeout=POLL_TIMEOUT_SECONDS)
    # Initializes the bot on entry, shuts it down on exit
    async with transport.updater:
        ctx = build_context(transport)
        cancel = asyncio.Event()

        await transport.start()
        receiver = asyncio.create_task(receive_updates(transport.receive(), ctx, cancel))

        # Tell the user the bot is online
        logger.info(f"🚀 @{bot.username} is running!")
        logger.info("Start listening for updates. Press enter to stop")

        watch_stdin(cancel)
        try:
            await receiver
        finally:
            await transport.stop()

    logger.info("Bot stopped.")


def main() -> None:
    """Initialize and run the bot."""
    try:
        validate_config()
    except ConfigError as e:
        logger.critical(f"Cannot start: {e}")
        sys.exit(1)

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Interrupted, bot stopped.")


if __name__ == "__main__":
    main()
