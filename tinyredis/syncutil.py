"""Thread-safe boolean flag and a wait group that can wait with a timeout."""

from __future__ import annotations

import threading
from datetime import timedelta


class AtomicBool:
    """A boolean whose reads and writes are thread safe."""

    __slots__ = ("_lock", "_value")

    def __init__(self, value: bool = False) -> None:
        self._lock = threading.Lock()
        self._value = bool(value)

    @property
    def value(self) -> bool:
        with self._lock:
            return self._value

    @value.setter
    def value(self, new_value: bool) -> None:
        with self._lock:
            self._value = bool(new_value)

    def __bool__(self) -> bool:
        return self.value

    def __repr__(self) -> str:
        return f"AtomicBool({self.value})"


class WaitGroup:
    """A counter that blocks waiters until it drops back to zero."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._count = 0

    def add(self, delta: int) -> None:
        """Add ``delta`` (which may be negative) to the counter."""
        with self._cond:
            count = self._count + delta
            if count < 0:
                raise ValueError("negative WaitGroup counter")
            self._count = count
            if count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        """Decrement the counter by one."""
        self.add(-1)

    def wait(self) -> None:
        """Block until the counter is zero."""
        with self._cond:
            self._cond.wait_for(lambda: self._count == 0)

    def wait_with_timeout(self, timeout: float | timedelta) -> bool:
        """Block until the counter is zero or ``timeout`` passes.

        Returns ``True`` if the wait timed out.
        """
        seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else timeout
        with self._cond:
            return not self._cond.wait_for(lambda: self._count == 0, timeout=seconds)