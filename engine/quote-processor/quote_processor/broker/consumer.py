"""
quote_processor.broker.consumer

Purpose:
    Run a broker consume loop on a background thread with cooperative shutdown.
    Used by the API process (result channel, optional inline processor) and the worker CLI.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import threading

from quote_processor.utils.logging import get_logger

from .base import BrokerUnavailableError, MessageBroker, MessageHandler

logger = get_logger(__name__)


class ConsumerThread:
    def __init__(
        self,
        broker: MessageBroker,
        channel: str,
        handler: MessageHandler,
        *,
        name: str | None = None,
        retry_delay_s: float = 1.0,
    ) -> None:
        self._broker = broker
        self._channel = channel
        self._handler = handler
        self._retry_delay_s = retry_delay_s
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            name=name or f"consumer:{channel}",
            daemon=True,
        )

    @property
    def channel(self) -> str:
        return self._channel

    def start(self) -> None:
        logger.info("Starting consumer on channel=%s", self._channel)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout=timeout)
        logger.info("Stopped consumer on channel=%s", self._channel)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self._broker.consume(self._channel, self._handler, stop_event=self._stop)
            except BrokerUnavailableError as exc:
                logger.warning("Broker unavailable on channel=%s: %s", self._channel, exc)
                self._stop.wait(self._retry_delay_s)
                continue
            # consume() only returns unprompted once the broker is closed.
            break
