import asyncio

import pytest

from handlers import router
from handlers.router import receive_updates, route_update
from models import ButtonCallbackEvent, MessageEvent, MessageRef


@pytest.mark.asyncio
async def test_route_message_and_callback(ctx, transport, ana):
    await route_update(MessageEvent(chat_id=1, message_id=2, text="hi", sender=ana), ctx)
    await route_update(ButtonCallbackEvent("cb", "Next", MessageRef(1, 2)), ctx)
    assert transport.ops() == ["copy_message", "answer_callback", "edit_message"]


@pytest.mark.asyncio
async def test_route_ignores_empty_update(ctx, transport):
    await route_update(None, ctx)
    assert transport.calls == []


@pytest.mark.asyncio
async def test_loop_processes_in_order_until_stream_ends(ctx, transport, ana):
    updates = [
        MessageEvent(chat_id=1, message_id=1, text="/scream", sender=ana),
        None,
        MessageEvent(chat_id=2, message_id=2, text="abc", sender=ana),
        ButtonCallbackEvent("cb", "Back", MessageRef(2, 5)),
    ]
    transport.updates = updates

    handled = await receive_updates(transport.receive(), ctx, asyncio.Event())

    assert handled == 4
    assert transport.ops() == ["send_message", "answer_callback", "edit_message"]
    assert transport.calls[0][1]["text"] == "ABC"


@pytest.mark.asyncio
async def test_cancel_while_idle_stops_loop(ctx):
    cancel = asyncio.Event()

    async def never():
        await asyncio.Event().wait()
        yield None

    task = asyncio.create_task(receive_updates(never(), ctx, cancel))
    await asyncio.sleep(0.01)
    cancel.set()

    assert await asyncio.wait_for(task, timeout=1) == 0


@pytest.mark.asyncio
async def test_cancel_lets_inflight_update_finish(ctx, transport, ana, monkeypatch):
    cancel = asyncio.Event()
    started = asyncio.Event()
    finished = []

    async def slow_route(update, _ctx):
        started.set()
        await asyncio.sleep(0.02)
        finished.append(update)

    monkeypatch.setattr(router, "route_update", slow_route)

    async def stream():
        yield MessageEvent(chat_id=1, message_id=1, text="first", sender=ana)
        yield MessageEvent(chat_id=1, message_id=2, text="second", sender=ana)

    task = asyncio.create_task(receive_updates(stream(), ctx, cancel))
    await started.wait()
    cancel.set()

    assert await asyncio.wait_for(task, timeout=1) == 1
    assert [u.text for u in finished] == ["first"]


@pytest.mark.asyncio
async def test_handler_crash_does_not_stop_loop(ctx, ana, monkeypatch):
    seen = []

    async def flaky_route(update, _ctx):
        seen.append(update.text)
        if update.text == "bad":
            raise RuntimeError("bug")

    monkeypatch.setattr(router, "route_update", flaky_route)

    async def stream():
        yield MessageEvent(chat_id=1, message_id=1, text="bad", sender=ana)
        yield MessageEvent(chat_id=1, message_id=2, text="good", sender=ana)

    assert await receive_updates(stream(), ctx, asyncio.Event()) == 2
    assert seen == ["bad", "good"]
