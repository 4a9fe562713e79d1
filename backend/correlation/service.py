"""
backend.correlation.service

Purpose:
    Long-lived service object owning the correlation state of one API process:
      - pending request registry + result registry
      - broker handle and channel names
      - submission / result-consumption / lookup stages
      - background consumer threads (result channel, optional inline processor)

Used By:
    - backend.api.main (built in create_app(), started/stopped by the app lifespan)
    - backend.api.routes.v1.quotes (via request.app.state.correlation)

Design Notes:
    - No module-level state: everything hangs off one instance so tests can build
      as many isolated services as they like.
    - The inline processor is a convenience for single-process runs (memory broker).
      In a split deployment the processor runs as its own `quote-processor` worker.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import logging
from typing import Callable
from uuid import UUID

from quote_processor.broker import ConsumerThread, MessageBroker
from quote_processor.contracts.channels import ChannelNames
from quote_processor.contracts.messages import Quote, QuoteRequest
from quote_processor.ids import new_correlation_id
from quote_processor.processor import QuoteProcessor

from backend.correlation.lookup import LookupStage
from backend.correlation.registry import DEFAULT_SHARDS, ShardedRegistry
from backend.correlation.result_consumer import ResultConsumer
from backend.correlation.submission import SubmissionStage

logger = logging.getLogger(__name__)


class CorrelationService:
    def __init__(
        self,
        broker: MessageBroker,
        *,
        channels: ChannelNames | None = None,
        registry_shards: int = DEFAULT_SHARDS,
        id_factory: Callable[[], UUID] = new_correlation_id,
        inline_processor: QuoteProcessor | None = None,
    ) -> None:
        self.broker = broker
        self.channels = channels or ChannelNames()

        self.request_registry: ShardedRegistry[UUID, QuoteRequest] = ShardedRegistry(registry_shards)
        self.result_registry: ShardedRegistry[UUID, Quote] = ShardedRegistry(registry_shards)

        self.submission = SubmissionStage(
            self.request_registry,
            broker,
            self.channels.requests,
            id_factory=id_factory,
        )
        self.result_consumer = ResultConsumer(self.result_registry, self.request_registry)
        self.lookup = LookupStage(self.request_registry, self.result_registry)

        self._inline_processor = inline_processor
        self._consumers: list[ConsumerThread] = []

    # ------------------------------------------------------------------
    # Stage entrypoints
    # ------------------------------------------------------------------

    def submit(self, subject: str) -> UUID:
        return self.submission.submit(subject)

    def lookup_request(self, correlation_id: UUID | str) -> QuoteRequest | None:
        return self.lookup.lookup_request(correlation_id)

    def lookup_result(self, correlation_id: UUID | str) -> Quote | None:
        return self.lookup.lookup_result(correlation_id)

    def list_requests(self) -> list[tuple[UUID, QuoteRequest]]:
        return self.lookup.list_requests()

    def list_results(self) -> list[tuple[UUID, Quote]]:
        return self.lookup.list_results()

    def handle_result_message(self, body: str | bytes) -> Quote | None:
        return self.result_consumer.handle(body)

    # ------------------------------------------------------------------
    # Background consumers
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return any(c.is_alive() for c in self._consumers)

    def start(self) -> None:
        if self._consumers:
            return

        self._consumers.append(
            ConsumerThread(
                self.broker,
                self.channels.results,
                self.handle_result_message,
                name="result-consumer",
            )
        )
        if self._inline_processor is not None:
            self._consumers.append(
                ConsumerThread(
                    self.broker,
                    self._inline_processor.channels.requests,
                    self._inline_processor.handle,
                    name="inline-processor",
                )
            )

        for consumer in self._consumers:
            consumer.start()
        logger.info("Correlation service started (%d consumer thread(s))", len(self._consumers))

    def stop(self) -> None:
        for consumer in self._consumers:
            consumer.stop()
        self._consumers.clear()
        logger.info("Correlation service stopped")
