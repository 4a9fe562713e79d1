"""
quote_processor.broker.memory

Purpose:
    In-process broker backed by one queue.Queue per channel.
    Used by tests and by the single-process (API + inline processor) mode.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import queue
import threading

from .base import BrokerUnavailableError, MessageBroker, MessageHandler, dispatch


class MemoryBroker(MessageBroker):
    def __init__(self, poll_timeout_s: float = 0.1) -> None:
        self._poll_timeout_s = poll_timeout_s
        self._queues: dict[str, queue.Queue[str]] = {}
        self._lock = threading.Lock()
        self._closed = False

    def _queue(self, channel: str) -> queue.Queue[str]:
        with self._lock:
            q = self._queues.get(channel)
            if q is None:
                q = queue.Queue()
                self._queues[channel] = q
            return q

    def publish(self, channel: str, body: str) -> None:
        if self._closed:
            raise BrokerUnavailableError("memory broker is closed")
        self._queue(channel).put(body)

    def pending(self, channel: str) -> int:
        return self._queue(channel).qsize()

    def consume(
        self,
        channel: str,
        handler: MessageHandler,
        *,
        stop_event: threading.Event | None = None,
        max_messages: int | None = None,
    ) -> int:
        q = self._queue(channel)
        delivered = 0
        while max_messages is None or delivered < max_messages:
            if stop_event is not None and stop_event.is_set():
                break
            if self._closed:
                break
            try:
                body = q.get(timeout=self._poll_timeout_s)
            except queue.Empty:
                continue
            dispatch(channel, handler, body)
            delivered += 1
        return delivered

    def drain(self, channel: str, handler: MessageHandler) -> int:
        """Deliver everything currently queued on channel without waiting."""
        q = self._queue(channel)
        delivered = 0
        while True:
            try:
                body = q.get_nowait()
            except queue.Empty:
                return delivered
            dispatch(channel, handler, body)
            delivered += 1

    def close(self) -> None:
        self._closed = True
