"""A thread-safe string-keyed dictionary split into independently locked shards."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from tinyredis.utils import fnv32

_MAX_INT32 = 2**31 - 1


def compute_capacity(param: int) -> int:
    """Return the smallest power of two not below ``param``, and at least 16."""
    if param <= 16:
        return 16
    n = param - 1
    for shift in (1, 2, 4, 8, 16):
        n |= n >> shift
    if n < 0:
        return _MAX_INT32
    return n + 1


@dataclass
class _Shard:
    data: dict[str, Any] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)


class ConcurrentDict:
    """A dictionary whose keys are spread over shards by their FNV hash."""

    def __init__(self, shard_count: int = 16) -> None:
        size = compute_capacity(shard_count)
        self._shards = [_Shard() for _ in range(size)]
        self._count = 0
        self._count_lock = threading.Lock()

    def _shard(self, key: str) -> _Shard:
        return self._shards[fnv32(key) & (len(self._shards) - 1)]

    def _adjust_count(self, delta: int) -> None:
        with self._count_lock:
            self._count += delta

    def get(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, True)`` for a stored key, ``(None, False)`` otherwise."""
        shard = self._shard(key)
        with shard.lock:
            if key in shard.data:
                return shard.data[key], True
            return None, False

    def put(self, key: str, value: Any) -> int:
        """Store ``value``; return 1 if the key is new, 0 if it was replaced."""
        shard = self._shard(key)
        with shard.lock:
            existed = key in shard.data
            shard.data[key] = value
            if existed:
                return 0
            self._adjust_count(1)
            return 1

    def remove(self, key: str) -> tuple[Any, int]:
        """Delete ``key``; return its value and 1, or ``(None, 0)`` if absent."""
        shard = self._shard(key)
        with shard.lock:
            if key not in shard.data:
                return None, 0
            value = shard.data.pop(key)
            self._adjust_count(-1)
            return value, 1

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        shard = self._shard(key)
        with shard.lock:
            return key in shard.data

    def __len__(self) -> int:
        with self._count_lock:
            return self._count