"""
tests.api.test_lifespan

Purpose:
    App lifespan: consumers start on startup, and shutdown joins them without
    stalling the event loop.
"""

from __future__ import annotations

import asyncio
import time

from backend.api.main import create_app
from backend.api.settings import Settings
from quote_processor.broker.memory import MemoryBroker
from quote_processor.pricing import fixed_pricing


def _app():
    return create_app(
        Settings(broker_backend="memory", inline_processor=True),
        broker=MemoryBroker(poll_timeout_s=0.01),
        pricing=fixed_pricing(1),
    )


def test_shutdown_does_not_block_event_loop() -> None:
    app = _app()
    service = app.state.correlation
    real_stop = service.stop

    def slow_stop() -> None:
        time.sleep(0.3)
        real_stop()

    service.stop = slow_stop

    async def scenario() -> int:
        ticks = 0
        stopping = asyncio.Event()

        async def ticker() -> None:
            nonlocal ticks
            await stopping.wait()
            while stopping.is_set():
                ticks += 1
                await asyncio.sleep(0.01)

        task = asyncio.create_task(ticker())
        async with app.router.lifespan_context(app):
            assert service.running
            stopping.set()
            await asyncio.sleep(0)
        stopping.clear()
        await task
        return ticks

    ticks = asyncio.run(scenario())

    assert ticks >= 5
    assert not service.running
