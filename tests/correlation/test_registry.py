"""
tests.correlation.test_registry

Purpose:
    ShardedRegistry behavior: last-write-wins put, snapshots, and concurrent access.
"""

from __future__ import annotations

import threading
from uuid import uuid4

import pytest

from backend.correlation.registry import ShardedRegistry


def test_put_get_and_overwrite_returns_previous() -> None:
    reg: ShardedRegistry[str, int] = ShardedRegistry(shards=4)

    assert reg.get("a") is None
    assert reg.put("a", 1) is None
    assert reg.get("a") == 1
    assert reg.put("a", 2) == 1
    assert reg.get("a") == 2
    assert len(reg) == 1


def test_list_all_and_contains() -> None:
    reg: ShardedRegistry[str, int] = ShardedRegistry(shards=3)
    for i in range(10):
        reg.put(f"k{i}", i)

    assert sorted(reg.list_all()) == sorted((f"k{i}", i) for i in range(10))
    assert "k3" in reg
    assert "missing" not in reg
    assert ["unhashable"] not in reg


def test_single_shard_is_valid() -> None:
    reg: ShardedRegistry[str, str] = ShardedRegistry(shards=1)
    reg.put("x", "y")
    assert reg.get("x") == "y"


@pytest.mark.parametrize("shards", [0, -1])
def test_invalid_shard_count(shards: int) -> None:
    with pytest.raises(ValueError):
        ShardedRegistry(shards=shards)


def test_concurrent_puts_and_reads_lose_nothing() -> None:
    reg = ShardedRegistry(shards=8)
    keys = [uuid4() for _ in range(2000)]
    start = threading.Barrier(8)
    errors: list[BaseException] = []

    def writer(chunk) -> None:
        try:
            start.wait()
            for k in chunk:
                reg.put(k, str(k))
                assert reg.get(k) == str(k)
        except BaseException as exc:  # surfaced in the main thread below
            errors.append(exc)

    def lister() -> None:
        try:
            start.wait()
            for _ in range(50):
                reg.list_all()
        except BaseException as exc:
            errors.append(exc)

    chunks = [keys[i::7] for i in range(7)]
    threads = [threading.Thread(target=writer, args=(c,)) for c in chunks]
    threads.append(threading.Thread(target=lister))
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert errors == []
    assert len(reg) == len(keys)
    assert all(reg.get(k) == str(k) for k in keys)
