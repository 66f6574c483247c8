"""A fixed table of reader-writer locks addressed by key hash."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from tinyredis.utils import fnv32


class _RWLock:
    """A reader-writer lock where a waiting writer holds back new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            self._cond.wait_for(lambda: not self._writer and self._waiting_writers == 0)
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("read unlock of unlocked lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("unlock of unlocked lock")
            self._writer = False
            self._cond.notify_all()


class Locks:
    """Reader-writer locks shared by keys that hash to the same slot.

    ``table_size`` should be a power of two.
    """

    def __init__(self, table_size: int) -> None:
        self._table = [_RWLock() for _ in range(table_size)]

    def _spread(self, key: str) -> int:
        return fnv32(key) & (len(self._table) - 1)

    def _indices(self, keys: Iterable[str]) -> list[int]:
        return sorted({self._spread(key) for key in keys})

    def lock(self, key: str) -> None:
        """Take the write lock guarding ``key``."""
        self._table[self._spread(key)].acquire_write()

    def unlock(self, key: str) -> None:
        """Release the write lock guarding ``key``."""
        self._table[self._spread(key)].release_write()

    def _plan(self, write_keys: Iterable[str], read_keys: Iterable[str]) -> list[tuple[_RWLock, bool]]:
        writes = list(write_keys)
        write_indices = set(self._indices(writes))
        indices = self._indices([*writes, *read_keys])
        return [(self._table[index], index in write_indices) for index in indices]

    def rw_locks(self, write_keys: Iterable[str], read_keys: Iterable[str]) -> None:
        """Lock every slot in ascending order: write for written keys, read otherwise.

        Keys may repeat within and across the two lists.
        """
        for lock, write in self._plan(write_keys, read_keys):
            if write:
                lock.acquire_write()
            else:
                lock.acquire_read()

    def rw_unlocks(self, write_keys: Iterable[str], read_keys: Iterable[str]) -> None:
        """Release what ``rw_locks`` took for the same keys."""
        for lock, write in self._plan(write_keys, read_keys):
            if write:
                lock.release_write()
            else:
                lock.release_read()