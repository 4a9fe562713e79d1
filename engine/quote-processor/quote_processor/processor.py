"""
quote_processor.processor

Purpose:
    Computation stage: consume one QuoteRequest message, price it, emit a Quote message.

Used By:
    - quote_processor.cli.main (standalone worker process)
    - backend.api.main (inline processor thread when running single-process)

Design Notes:
    - Stateless apart from injected collaborators (broker, pricing, channel names).
    - Never touches the request/result registries; it only consumes and emits.
    - Every failure is isolated to the message being handled:
        malformed message   -> logged, dropped
        pricing error       -> logged, dropped
        broker unavailable  -> logged, quote lost (no retry)

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import threading

from quote_processor.broker.base import BrokerUnavailableError, MessageBroker
from quote_processor.contracts.channels import ChannelNames
from quote_processor.contracts.messages import (
    MalformedMessageError,
    Quote,
    decode_request,
    encode_quote,
)
from quote_processor.pricing import LengthBasedPricing, PricingFunction, round_half_up
from quote_processor.utils.logging import LogCtx, get_logger, is_trace_enabled, with_ctx

logger = get_logger(__name__)

STAGE = "compute"


class QuoteProcessor:
    def __init__(
        self,
        broker: MessageBroker,
        *,
        pricing: PricingFunction | None = None,
        channels: ChannelNames | None = None,
    ) -> None:
        self._broker = broker
        self._pricing = pricing or LengthBasedPricing()
        self._channels = channels or ChannelNames()

    @property
    def channels(self) -> ChannelNames:
        return self._channels

    def handle(self, body: str | bytes) -> Quote | None:
        """
        Process one inbound request message.

        Returns:
            The emitted Quote, or None when the message was dropped.
        """
        log = with_ctx(logger, LogCtx(stage=STAGE, channel=self._channels.requests))
        if is_trace_enabled(logger):
            log.debug("Received message: %s", body)

        try:
            request = decode_request(body)
        except MalformedMessageError as exc:
            log.warning("Dropping malformed request message: %s", exc)
            return None

        log = with_ctx(logger, LogCtx(stage=STAGE, request_id=str(request.id)))

        try:
            value = round_half_up(self._pricing(request.subject))
        except Exception:  # noqa: BLE001
            log.exception("Pricing failed for subject=%r; request dropped", request.subject)
            return None

        quote = Quote.from_request(request, value)
        log = with_ctx(logger, LogCtx(stage=STAGE, request_id=str(request.id), quote_id=str(quote.id)))
        log.info("Quote computed: value=%s", quote.value)

        try:
            self._broker.publish(self._channels.results, encode_quote(quote))
        except BrokerUnavailableError as exc:
            log.error("Quote emission failed; quote lost: %s", exc)
            return None

        return quote

    def run(
        self,
        *,
        stop_event: threading.Event | None = None,
        max_messages: int | None = None,
    ) -> int:
        """Consume the request channel until stopped; return the number of messages handled."""
        logger.info("Processor consuming channel=%s", self._channels.requests)
        return self._broker.consume(
            self._channels.requests,
            self.handle,
            stop_event=stop_event,
            max_messages=max_messages,
        )
