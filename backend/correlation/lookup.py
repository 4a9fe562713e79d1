"""
backend.correlation.lookup

Purpose:
    Lookup stage: read-only pass-through to the request and result registries.
    None is the not-found signal; the HTTP layer turns it into a 404.
"""

from __future__ import annotations

from uuid import UUID

from quote_processor.contracts.messages import Quote, QuoteRequest

from backend.correlation.registry import ShardedRegistry


def _as_uuid(value: UUID | str) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class LookupStage:
    def __init__(
        self,
        requests: ShardedRegistry[UUID, QuoteRequest],
        results: ShardedRegistry[UUID, Quote],
    ) -> None:
        self._requests = requests
        self._results = results

    def lookup_request(self, correlation_id: UUID | str) -> QuoteRequest | None:
        key = _as_uuid(correlation_id)
        if key is None:
            return None
        return self._requests.get(key)

    def lookup_result(self, correlation_id: UUID | str) -> Quote | None:
        key = _as_uuid(correlation_id)
        if key is None:
            return None
        return self._results.get(key)

    def list_requests(self) -> list[tuple[UUID, QuoteRequest]]:
        return self._requests.list_all()

    def list_results(self) -> list[tuple[UUID, Quote]]:
        return self._results.list_all()
