"""
quote_processor.broker.redis_broker

Purpose:
    Redis-backed broker. Each channel is a Redis list: publish = RPUSH, consume = BLPOP.
    Lets the API process and one or more processor workers run as separate processes.

Design Notes:
    - Competing consumers on one list each receive a disjoint subset of messages;
      distribution across workers is Redis' concern, not ours.
    - A message popped by a worker that then dies is lost (at-most-once).
    - Connection failures surface as BrokerUnavailableError.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import threading
from typing import Any

import redis
from redis.exceptions import RedisError

from quote_processor.utils.logging import get_logger

from .base import BrokerUnavailableError, MessageBroker, MessageHandler, dispatch

logger = get_logger(__name__)


class RedisBroker(MessageBroker):
    def __init__(
        self,
        redis_client: Any | None = None,
        redis_url: str = "redis://localhost:6379/0",
        *,
        key_prefix: str = "mq:",
        poll_timeout_s: float = 1.0,
    ) -> None:
        if redis_client is None:
            redis_client = redis.Redis.from_url(redis_url, decode_responses=True)
        self.client = redis_client
        self._key_prefix = key_prefix
        self._poll_timeout_s = poll_timeout_s

    def _key(self, channel: str) -> str:
        return f"{self._key_prefix}{channel}"

    def publish(self, channel: str, body: str) -> None:
        try:
            self.client.rpush(self._key(channel), body)
        except RedisError as exc:
            raise BrokerUnavailableError(f"publish to {channel!r} failed: {exc}") from exc

    def consume(
        self,
        channel: str,
        handler: MessageHandler,
        *,
        stop_event: threading.Event | None = None,
        max_messages: int | None = None,
    ) -> int:
        key = self._key(channel)
        delivered = 0
        while max_messages is None or delivered < max_messages:
            if stop_event is not None and stop_event.is_set():
                break
            try:
                item = self.client.blpop([key], timeout=self._poll_timeout_s)
            except RedisError as exc:
                raise BrokerUnavailableError(f"consume from {channel!r} failed: {exc}") from exc
            if item is None:
                continue

            _key, body = item
            if isinstance(body, bytes):
                body = body.decode("utf-8", errors="replace")
            dispatch(channel, handler, body)
            delivered += 1
        return delivered

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if callable(close):
            close()
