"""Small helpers shared by the server: command-line building, ranges and hashing."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_UINT32_MASK = 0xFFFFFFFF


def to_cmd_line(*args: str) -> list[bytes]:
    """Encode every string argument as UTF-8 bytes."""
    return [arg.encode() for arg in args]


def to_cmd_line2(command_name: str, *args: str) -> list[bytes]:
    """Build a command line from a command name and string arguments."""
    return [command_name.encode(), *(arg.encode() for arg in args)]


def to_cmd_line3(command_name: str, *args: bytes) -> list[bytes]:
    """Build a command line from a command name and byte arguments."""
    return [command_name.encode(), *args]


def bytes_equals(a: bytes | bytearray | None, b: bytes | bytearray | None) -> bool:
    """Compare two byte strings, treating ``None`` as distinct from empty."""
    if a is None or b is None:
        return a is b
    return bytes(a) == bytes(b)


def equals(a: Any, b: Any) -> bool:
    """Compare two values, byte strings by content."""
    if isinstance(a, (bytes, bytearray)) and isinstance(b, (bytes, bytearray)):
        return bytes_equals(a, b)
    return a == b


def convert_range(start: int, end: int, size: int) -> tuple[int, int]:
    """Turn an inclusive, possibly negative index range into slice bounds.

    Returns ``(-1, -1)`` when the range selects nothing.
    """
    if start < -size:
        return -1, -1
    if start < 0:
        start = size + start
    elif start >= size:
        return -1, -1

    if end < -size:
        return -1, -1
    if end < 0:
        end = size + end + 1
    elif end < size:
        end = end + 1
    else:
        end = size

    if start > end:
        return -1, -1
    return start, end


def remove_duplicates(items: Iterable[bytes]) -> list[bytes]:
    """Drop repeated byte strings, keeping the first occurrence of each."""
    seen: set[bytes] = set()
    result: list[bytes] = []
    for item in items:
        key = bytes(item)
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


def fnv32(key: str | bytes) -> int:
    """Return the 32-bit FNV-1 hash of ``key`` (strings are hashed as UTF-8)."""
    data = key.encode() if isinstance(key, str) else key
    value = _FNV_OFFSET_BASIS
    for byte in data:
        value = (value * _FNV_PRIME) & _UINT32_MASK
        value ^= byte
    return value