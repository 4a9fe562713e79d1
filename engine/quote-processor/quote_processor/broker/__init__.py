# Purpose: Broker transport package entrypoint (channel transports + factory).

from __future__ import annotations

from typing import Any

from .base import BrokerError, BrokerUnavailableError, MessageBroker, MessageHandler
from .consumer import ConsumerThread
from .memory import MemoryBroker


def create_broker(
    backend: str = "memory",
    *,
    redis_url: str = "redis://localhost:6379/0",
    redis_client: Any | None = None,
    poll_timeout_s: float = 1.0,
) -> MessageBroker:
    if backend == "memory":
        return MemoryBroker(poll_timeout_s=poll_timeout_s)
    if backend == "redis":
        from .redis_broker import RedisBroker

        return RedisBroker(redis_client=redis_client, redis_url=redis_url, poll_timeout_s=poll_timeout_s)
    raise ValueError("backend must be 'memory' or 'redis'")


__all__ = [
    "BrokerError",
    "BrokerUnavailableError",
    "ConsumerThread",
    "MemoryBroker",
    "MessageBroker",
    "MessageHandler",
    "create_broker",
]
