"""Streaming parser for the Redis serialization protocol."""

from __future__ import annotations

import io
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from tinyredis.protocol import (
    BulkReply,
    EmptyMultiBulkReply,
    IntReply,
    MultiBulkReply,
    NullBulkReply,
    Reply,
    StandardErrReply,
    StatusReply,
)

_INT_PATTERN = re.compile(rb"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class ProtocolError(ValueError):
    """Input that does not follow the protocol."""

    def __init__(self, msg: str) -> None:
        super().__init__("protocol error: " + msg)
        self.msg = msg


@dataclass(frozen=True)
class Payload:
    """One parsed item: either a reply or a recoverable protocol error."""

    data: Reply | None = None
    err: Exception | None = None


def _text(data: bytes) -> str:
    return data.decode(errors="replace")


def _parse_int(data: bytes) -> int | None:
    if not _INT_PATTERN.fullmatch(data):
        return None
    value = int(data)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            raise EOFError("unexpected end of stream")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _read_line(reader: BinaryIO) -> bytes:
    line = reader.readline()
    if not line.endswith(b"\n"):
        raise EOFError("unexpected end of stream")
    return line


def _error(msg: str) -> Payload:
    return Payload(err=ProtocolError(msg))


def _parse_bulk_string(header: bytes, reader: BinaryIO) -> Payload:
    length = _parse_int(header[1:])
    if length is None or length < -1:
        return _error("illegal bulk string header: " + _text(header))
    if length == -1:
        return Payload(NullBulkReply())
    body = _read_exact(reader, length + 2)
    return Payload(BulkReply(body[:-2]))


def _parse_array(header: bytes, reader: BinaryIO) -> Iterator[Payload]:
    count = _parse_int(header[1:])
    if count is None or count < 0:
        yield _error("illegal array header " + _text(header[1:]))
        return
    if count == 0:
        yield Payload(EmptyMultiBulkReply())
        return
    items: list[bytes | None] = []
    for _ in range(count):
        line = _read_line(reader)
        if len(line) < 4 or line[-2:-1] != b"\r" or line[:1] != b"$":
            yield _error("illegal bulk string header " + _text(line))
            break
        length = _parse_int(line[1:-2])
        if length is None or length < -1:
            yield _error("illegal bulk string length " + _text(line))
            break
        if length == -1:
            items.append(None)
        else:
            items.append(_read_exact(reader, length + 2)[:-2])
    yield Payload(MultiBulkReply(items))


def _parse_rdb_bulk_string(reader: BinaryIO) -> Payload:
    """Read a bulk string that has no trailing CRLF, as sent after FULLRESYNC."""
    header = reader.readline()
    if not header.endswith(b"\n"):
        raise EOFError("failed to read bytes")
    header = header.removesuffix(b"\r\n")
    if not header:
        raise ProtocolError("empty header")
    length = _parse_int(header[1:])
    if length is None or length <= 0:
        raise ProtocolError("illegal bulk header: " + _text(header))
    return Payload(BulkReply(_read_exact(reader, length)))


def parse_stream(reader: BinaryIO | bytes | bytearray) -> Iterator[Payload]:
    """Yield payloads parsed from a binary stream until it ends.

    Recoverable protocol errors are yielded as payloads carrying a
    ``ProtocolError``. A stream that ends inside a message raises
    ``EOFError``; a malformed replication header raises ``ProtocolError``.
    """
    stream: BinaryIO = (
        io.BytesIO(bytes(reader)) if isinstance(reader, (bytes, bytearray)) else reader
    )
    while True:
        line = stream.readline()
        if not line.endswith(b"\n"):
            return
        if len(line) <= 2 or line[-2:-1] != b"\r":
            # Empty lines appear within replication traffic; skip them.
            continue
        line = line[:-2]
        kind = line[:1]
        if kind == b"+":
            content = _text(line[1:])
            yield Payload(StatusReply(content))
            if content.startswith("FULLRESYNC"):
                yield _parse_rdb_bulk_string(stream)
        elif kind == b"-":
            yield Payload(StandardErrReply(_text(line[1:])))
        elif kind == b":":
            value = _parse_int(line[1:])
            if value is None:
                yield _error("illegal number: " + _text(line[1:]))
            else:
                yield Payload(IntReply(value))
        elif kind == b"$":
            yield _parse_bulk_string(line, stream)
        elif kind == b"*":
            yield from _parse_array(line, stream)
        else:
            yield Payload(MultiBulkReply(line.split(b" ")))


def parse_one(data: bytes) -> Reply:
    """Parse the first reply in ``data``.

    Raises ``ProtocolError`` for malformed input and ``EOFError`` if
    ``data`` holds no complete reply.
    """
    for payload in parse_stream(data):
        if payload.err is not None:
            raise payload.err
        if payload.data is None:
            break
        return payload.data
    raise EOFError("no reply")