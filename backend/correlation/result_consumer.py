"""
backend.correlation.result_consumer

Purpose:
    Bind the result channel to the result registry: every quote message is stored
    under its back-reference (the originating request's correlation id).

Design Notes:
    - Last-write-wins. A redelivered or duplicate quote replaces the stored one;
      a replacement by a quote with a different own id is logged as a warning.
    - Quotes for correlation ids this process never submitted are still stored
      (another API replica may own them) but are logged.
    - Malformed messages are logged and dropped.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import logging
from uuid import UUID

from quote_processor.contracts.messages import MalformedMessageError, Quote, QuoteRequest, decode_quote

from backend.correlation.registry import ShardedRegistry

logger = logging.getLogger(__name__)


class ResultConsumer:
    def __init__(
        self,
        results: ShardedRegistry[UUID, Quote],
        requests: ShardedRegistry[UUID, QuoteRequest] | None = None,
    ) -> None:
        self._results = results
        self._requests = requests

    def handle(self, body: str | bytes) -> Quote | None:
        try:
            quote = decode_quote(body)
        except MalformedMessageError as exc:
            logger.warning("Dropping malformed quote message: %s", exc)
            return None

        if self._requests is not None and quote.request_id not in self._requests:
            logger.warning("Quote received for unknown request: correlation_id=%s", quote.request_id)

        previous = self._results.put(quote.request_id, quote)
        if previous is not None and previous.id != quote.id:
            logger.warning(
                "Quote replaced existing result: correlation_id=%s old_quote_id=%s new_quote_id=%s",
                quote.request_id,
                previous.id,
                quote.id,
            )

        logger.info(
            "Quote stored: correlation_id=%s quote_id=%s value=%s",
            quote.request_id,
            quote.id,
            quote.value,
        )
        return quote
