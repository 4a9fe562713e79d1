"""
backend.correlation.registry

Purpose:
    In-memory key/value registry used for both pending quote requests and received quotes.
    Safe for concurrent put/get/list from any number of threads.

Design Notes:
    - Keys are split across a fixed number of shards, each guarded by its own lock.
      put/get on one key are atomic; there is no cross-key ordering or transaction.
    - put() is last-write-wins and returns the value it replaced (None if new).
    - list_all() is a point-in-time snapshot per shard; order is not guaranteed.
    - No eviction: entries live for the lifetime of the process.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import threading
from typing import Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_SHARDS = 16


class _Shard(Generic[K, V]):
    __slots__ = ("lock", "items")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.items: dict[K, V] = {}


class ShardedRegistry(Generic[K, V]):
    def __init__(self, shards: int = DEFAULT_SHARDS) -> None:
        if shards < 1:
            raise ValueError("shards must be >= 1")
        self._shards: tuple[_Shard[K, V], ...] = tuple(_Shard() for _ in range(shards))

    def _shard(self, key: K) -> _Shard[K, V]:
        return self._shards[hash(key) % len(self._shards)]

    def put(self, key: K, value: V) -> V | None:
        shard = self._shard(key)
        with shard.lock:
            previous = shard.items.get(key)
            shard.items[key] = value
        return previous

    def get(self, key: K) -> V | None:
        shard = self._shard(key)
        with shard.lock:
            return shard.items.get(key)

    def list_all(self) -> list[tuple[K, V]]:
        snapshot: list[tuple[K, V]] = []
        for shard in self._shards:
            with shard.lock:
                snapshot.extend(shard.items.items())
        return snapshot

    def __contains__(self, key: object) -> bool:
        try:
            shard = self._shard(key)  # type: ignore[arg-type]
        except TypeError:
            return False
        with shard.lock:
            return key in shard.items

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.items)
        return total
