"""
tests.correlation.test_lookup

Purpose:
    Lookup stage pass-through semantics.
"""

from __future__ import annotations

from decimal import Decimal

from quote_processor.contracts.messages import Quote, QuoteRequest

from backend.correlation.lookup import LookupStage
from backend.correlation.registry import ShardedRegistry


def _stage():
    requests: ShardedRegistry = ShardedRegistry()
    results: ShardedRegistry = ShardedRegistry()
    return LookupStage(requests, results), requests, results


def test_lookup_by_uuid_or_string() -> None:
    stage, requests, results = _stage()
    req = QuoteRequest.create("Widget")
    quote = Quote.from_request(req, Decimal("9.99"))
    requests.put(req.id, req)
    results.put(req.id, quote)

    assert stage.lookup_request(req.id) == req
    assert stage.lookup_request(str(req.id)) == req
    assert stage.lookup_result(str(req.id)) == quote
    assert stage.lookup_result(req.id) is stage.lookup_result(req.id)


def test_unknown_and_invalid_ids_are_none() -> None:
    stage, _, _ = _stage()
    assert stage.lookup_request(QuoteRequest.create("x").id) is None
    assert stage.lookup_request("not-a-uuid") is None
    assert stage.lookup_result("") is None


def test_pending_request_has_no_result() -> None:
    stage, requests, _ = _stage()
    req = QuoteRequest.create("Widget")
    requests.put(req.id, req)

    assert stage.lookup_request(req.id) == req
    assert stage.lookup_result(req.id) is None


def test_listings() -> None:
    stage, requests, _ = _stage()
    reqs = [QuoteRequest.create(s) for s in ("a", "b")]
    for r in reqs:
        requests.put(r.id, r)

    assert dict(stage.list_requests()) == {r.id: r for r in reqs}
    assert stage.list_results() == []
