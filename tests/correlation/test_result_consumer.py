"""
tests.correlation.test_result_consumer

Purpose:
    Result channel binding: quotes stored by back-reference, overwrite and
    unknown-request warnings, malformed messages dropped.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from quote_processor.contracts.messages import Quote, QuoteRequest, encode_quote

from backend.correlation.registry import ShardedRegistry
from backend.correlation.result_consumer import ResultConsumer

_LOGGER = "backend.correlation.result_consumer"


def _setup():
    requests: ShardedRegistry = ShardedRegistry()
    results: ShardedRegistry = ShardedRegistry()
    return ResultConsumer(results, requests), requests, results


def test_quote_is_stored_under_request_id() -> None:
    consumer, requests, results = _setup()
    req = QuoteRequest.create("Widget")
    requests.put(req.id, req)
    quote = Quote.from_request(req, Decimal("123.46"))

    stored = consumer.handle(encode_quote(quote))

    assert stored == quote
    assert results.get(req.id) == quote
    assert results.get(quote.id) is None


def test_unknown_request_is_stored_with_warning(caplog) -> None:
    consumer, _, results = _setup()
    quote = Quote.from_request(QuoteRequest.create("Widget"), Decimal("1.00"))

    with caplog.at_level(logging.WARNING, logger=_LOGGER):
        consumer.handle(encode_quote(quote))

    assert results.get(quote.request_id) == quote
    assert "unknown request" in caplog.text


def test_second_quote_replaces_first_with_warning(caplog) -> None:
    consumer, requests, results = _setup()
    req = QuoteRequest.create("Widget")
    requests.put(req.id, req)
    first = Quote.from_request(req, Decimal("1.00"))
    second = Quote.from_request(req, Decimal("2.00"))

    consumer.handle(encode_quote(first))
    with caplog.at_level(logging.WARNING, logger=_LOGGER):
        consumer.handle(encode_quote(second))

    assert results.get(req.id) == second
    assert "replaced existing result" in caplog.text


def test_redelivery_of_same_quote_is_quiet(caplog) -> None:
    consumer, requests, results = _setup()
    req = QuoteRequest.create("Widget")
    requests.put(req.id, req)
    quote = Quote.from_request(req, Decimal("1.00"))

    with caplog.at_level(logging.WARNING, logger=_LOGGER):
        consumer.handle(encode_quote(quote))
        consumer.handle(encode_quote(quote))

    assert results.get(req.id) == quote
    assert caplog.records == []


def test_malformed_message_is_dropped(caplog) -> None:
    consumer, _, results = _setup()

    with caplog.at_level(logging.WARNING, logger=_LOGGER):
        assert consumer.handle("{not json") is None
        assert consumer.handle('{"id": "x"}') is None

    assert len(results) == 0
    assert "malformed" in caplog.text


def test_consumer_without_request_registry() -> None:
    results: ShardedRegistry = ShardedRegistry()
    quote = Quote.from_request(QuoteRequest.create("Widget"), Decimal("3.00"))
    assert ResultConsumer(results).handle(encode_quote(quote).encode("utf-8")) == quote
    assert results.get(quote.request_id) == quote
