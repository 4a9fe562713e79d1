"""
tests.correlation.test_submission

Purpose:
    Submission stage: fresh ids, registry write before emission, and
    fire-and-forget behavior when the broker is down.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from uuid import UUID

from quote_processor.broker.memory import MemoryBroker
from quote_processor.contracts.messages import QuoteRequest, decode_request

from backend.correlation.registry import ShardedRegistry
from backend.correlation.submission import SubmissionStage


class SpyBroker(MemoryBroker):
    """Records whether the request was already registered at publish time."""

    def __init__(self, registry: ShardedRegistry) -> None:
        super().__init__(poll_timeout_s=0.01)
        self._registry = registry
        self.registered_at_publish: list[bool] = []

    def publish(self, channel: str, body: str) -> None:
        self.registered_at_publish.append(decode_request(body).id in self._registry)
        super().publish(channel, body)


def _stage(broker=None, registry=None):
    registry = registry if registry is not None else ShardedRegistry()
    broker = broker if broker is not None else MemoryBroker(poll_timeout_s=0.01)
    return SubmissionStage(registry, broker, "quote-requests"), registry, broker


def test_submit_registers_and_emits() -> None:
    stage, registry, broker = _stage()

    rid = stage.submit("Widget")

    assert isinstance(rid, UUID)
    assert registry.get(rid) == QuoteRequest(id=rid, subject="Widget")

    bodies: list[str] = []
    broker.drain("quote-requests", bodies.append)
    assert [decode_request(b) for b in bodies] == [QuoteRequest(id=rid, subject="Widget")]


def test_each_submit_gets_a_fresh_id() -> None:
    stage, registry, _ = _stage()
    a = stage.submit("Widget")
    b = stage.submit("Widget")
    assert a != b
    assert len(registry) == 2


def test_registry_write_happens_before_publish() -> None:
    registry: ShardedRegistry = ShardedRegistry()
    spy = SpyBroker(registry)
    stage, _, _ = _stage(broker=spy, registry=registry)

    stage.submit("Widget")
    stage.submit("Gadget")

    assert spy.registered_at_publish == [True, True]


def test_broker_down_still_returns_id_and_keeps_entry(caplog) -> None:
    stage, registry, broker = _stage()
    broker.close()

    with caplog.at_level(logging.ERROR, logger="backend.correlation.submission"):
        rid = stage.submit("Widget")

    assert registry.get(rid) is not None
    assert "emission failed" in caplog.text


def test_custom_id_factory_is_used() -> None:
    fixed = UUID("12345678-1234-5678-1234-567812345678")
    registry: ShardedRegistry = ShardedRegistry()
    stage = SubmissionStage(registry, MemoryBroker(), "q", id_factory=lambda: fixed)
    assert stage.submit("Widget") == fixed


def test_concurrent_submits_get_distinct_ids() -> None:
    stage, registry, broker = _stage()

    with ThreadPoolExecutor(max_workers=32) as pool:
        ids = list(pool.map(lambda i: stage.submit(f"item-{i}"), range(1000)))

    assert len(set(ids)) == 1000
    assert len(registry) == 1000
    assert broker.pending("quote-requests") == 1000
    assert all(registry.get(rid) is not None for rid in ids)
