"""
backend.correlation.submission

Purpose:
    Submission stage: mint a correlation id, record the pending request, emit it on
    the request channel, and hand the id straight back to the caller.

Design Notes:
    - The registry write happens before publish, so a quote can never arrive for a
      request that lookup does not know about yet.
    - Emission is fire-and-forget. If the broker is unavailable the failure is logged,
      the pending entry is kept (no rollback) and the id is still returned; that
      request simply never resolves.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import logging
from typing import Callable
from uuid import UUID

from quote_processor.broker.base import BrokerUnavailableError, MessageBroker
from quote_processor.contracts.messages import QuoteRequest, encode_request
from quote_processor.ids import new_correlation_id

from backend.correlation.registry import ShardedRegistry

logger = logging.getLogger(__name__)


class SubmissionStage:
    def __init__(
        self,
        requests: ShardedRegistry[UUID, QuoteRequest],
        broker: MessageBroker,
        channel: str,
        *,
        id_factory: Callable[[], UUID] = new_correlation_id,
    ) -> None:
        self._requests = requests
        self._broker = broker
        self._channel = channel
        self._id_factory = id_factory

    def submit(self, subject: str) -> UUID:
        request = QuoteRequest(id=self._id_factory(), subject=subject)

        self._requests.put(request.id, request)

        try:
            self._broker.publish(self._channel, encode_request(request))
        except BrokerUnavailableError as exc:
            logger.error(
                "Quote request emission failed; request stays pending: correlation_id=%s error=%s",
                request.id,
                exc,
            )
        else:
            logger.info("Quote request submitted: correlation_id=%s subject=%r", request.id, subject)

        return request.id
