"""
quote_processor.broker.base

Purpose:
    Transport abstraction for the two logical channels (request + result).
    Message bodies are JSON text; encoding/decoding is the caller's concern.

Design Notes:
    - publish() is fire-and-forget: no delivery confirmation, no retry.
    - consume() blocks the calling thread, invoking handler(body) once per message,
      until stop_event is set or max_messages have been delivered.
    - A handler that raises is logged and the loop moves on to the next message.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Callable

from quote_processor.utils.logging import get_logger

MessageHandler = Callable[[str], object]

logger = get_logger(__name__)


class BrokerError(RuntimeError):
    """Base class for transport failures."""


class BrokerUnavailableError(BrokerError):
    """Raised when the broker cannot accept or deliver messages."""


class MessageBroker(ABC):
    @abstractmethod
    def publish(self, channel: str, body: str) -> None:
        pass

    @abstractmethod
    def consume(
        self,
        channel: str,
        handler: MessageHandler,
        *,
        stop_event: threading.Event | None = None,
        max_messages: int | None = None,
    ) -> int:
        """Deliver messages to handler; return how many were delivered."""

    @abstractmethod
    def close(self) -> None:
        pass


def dispatch(channel: str, handler: MessageHandler, body: str) -> None:
    """Invoke handler for one message, isolating the consume loop from handler failures."""
    try:
        handler(body)
    except Exception:  # noqa: BLE001
        logger.exception("Message handler failed on channel=%s; message dropped", channel)
