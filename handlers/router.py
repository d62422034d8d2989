"""
handlers/router.py
------------------
The update dispatch loop.

Updates are handled one at a time, in the order the transport delivers
them. Cancellation is cooperative: it is checked before taking the next
update and never interrupts an update that is being handled.
"""

import asyncio
from typing import AsyncIterable, Optional

from handlers.callback_handler import handle_button
from handlers.message_handler import handle_message
from models import ButtonCallbackEvent, MessageEvent, Update
from services.context import BotContext
from utils.logger import get_logger

logger = get_logger(__name__)


async def route_update(update: Optional[Update], ctx: BotContext) -> None:
    """Send an update to the message or button handler; ignore anything else."""
    if isinstance(update, MessageEvent):
        await handle_message(ctx, update)
    elif isinstance(update, ButtonCallbackEvent):
        await handle_button(ctx, update)
    else:
        logger.debug(f"Ignoring update without payload: {update!r}")


async def receive_updates(
    updates: AsyncIterable[Optional[Update]],
    ctx: BotContext,
    cancel: asyncio.Event,
) -> int:
    """
    Consume ``updates`` until ``cancel`` is set or the stream ends.

    Returns:
        The number of updates handled.
    """
    iterator = updates.__aiter__()
    cancelled = asyncio.ensure_future(cancel.wait())
    handled = 0
    try:
        while not cancel.is_set():
            next_update = asyncio.ensure_future(iterator.__anext__())
            await asyncio.wait({next_update, cancelled}, return_when=asyncio.FIRST_COMPLETED)

            if cancel.is_set():
                next_update.cancel()
                break

            try:
                update = next_update.result()
            except StopAsyncIteration:
                logger.info("Update stream ended.")
                break

            try:
                await route_update(update, ctx)
            except Exception:
                logger.exception(f"Unhandled error while processing {update!r}")
            handled += 1
    finally:
        cancelled.cancel()

    logger.info(f"Stopped receiving updates after {handled} update(s).")
    return handled
