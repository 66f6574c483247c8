"""Replies of the Redis serialization protocol and their wire encoding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

CRLF = b"\r\n"

_PONG_BYTES = b"+PONG\r\n"
_OK_BYTES = b"+OK\r\n"
_NULL_BULK_BYTES = b"$-1\r\n"
_EMPTY_MULTI_BULK_BYTES = b"*0\r\n"
_NO_BYTES = b""
_QUEUED_BYTES = b"+QUEUED\r\n"


class Reply(ABC):
    """A message that can be written to a client."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Return the wire encoding of the reply."""


@dataclass(frozen=True)
class PongReply(Reply):
    """The ``+PONG`` reply."""

    def to_bytes(self) -> bytes:
        return _PONG_BYTES


@dataclass(frozen=True)
class OkReply(Reply):
    """The ``+OK`` reply."""

    def to_bytes(self) -> bytes:
        return _OK_BYTES


@dataclass(frozen=True)
class NullBulkReply(Reply):
    """The null bulk string."""

    def to_bytes(self) -> bytes:
        return _NULL_BULK_BYTES


@dataclass(frozen=True)
class EmptyMultiBulkReply(Reply):
    """An empty array."""

    def to_bytes(self) -> bytes:
        return _EMPTY_MULTI_BULK_BYTES


@dataclass(frozen=True)
class NoReply(Reply):
    """Nothing at all, for commands such as subscribe."""

    def to_bytes(self) -> bytes:
        return _NO_BYTES


@dataclass(frozen=True)
class QueuedReply(Reply):
    """The ``+QUEUED`` reply."""

    def to_bytes(self) -> bytes:
        return _QUEUED_BYTES


@dataclass(frozen=True)
class BulkReply(Reply):
    """A binary-safe string; ``None`` encodes as the null bulk string."""

    arg: bytes | None

    def to_bytes(self) -> bytes:
        if self.arg is None:
            return _NULL_BULK_BYTES
        return b"".join((b"$", str(len(self.arg)).encode(), CRLF, self.arg, CRLF))


def _encode_bulk(arg: bytes | None) -> bytes:
    if arg is None:
        return b"$-1" + CRLF
    return b"".join((b"$", str(len(arg)).encode(), CRLF, arg, CRLF))


@dataclass
class MultiBulkReply(Reply):
    """An array of binary-safe strings; ``None`` items encode as null."""

    args: Sequence[bytes | None]

    def to_bytes(self) -> bytes:
        header = b"*" + str(len(self.args)).encode() + CRLF
        return header + b"".join(_encode_bulk(arg) for arg in self.args)


@dataclass
class MultiRawReply(Reply):
    """An array whose items are arbitrary replies."""

    replies: Sequence[Reply]

    def to_bytes(self) -> bytes:
        header = b"*" + str(len(self.replies)).encode() + CRLF
        return header + b"".join(reply.to_bytes() for reply in self.replies)


@dataclass(frozen=True)
class StatusReply(Reply):
    """A simple status string."""

    status: str

    def to_bytes(self) -> bytes:
        return b"+" + self.status.encode() + CRLF


@dataclass(frozen=True)
class IntReply(Reply):
    """A signed integer."""

    code: int

    def to_bytes(self) -> bytes:
        return b":" + str(self.code).encode() + CRLF


class ErrorReply(Reply, Exception):
    """A reply that is also a raisable error; ``str()`` gives its message."""

    def to_bytes(self) -> bytes:
        return b"-" + str(self).encode() + CRLF

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class StandardErrReply(ErrorReply):
    """A server error with a free-form status line."""

    def __init__(self, status: str) -> None:
        super().__init__(status)
        self.status = status


class UnknownErrReply(ErrorReply):
    """An unknown error."""

    def __init__(self) -> None:
        super().__init__("Err unknown")


class ArgNumErrReply(ErrorReply):
    """Wrong number of arguments for a command."""

    def __init__(self, cmd: str) -> None:
        super().__init__("ERR wrong number of arguments for '" + cmd + "' command")
        self.cmd = cmd


class SyntaxErrReply(ErrorReply):
    """Unexpected arguments."""

    def __init__(self) -> None:
        super().__init__("Err syntax error")


class WrongTypeErrReply(ErrorReply):
    """An operation against a key holding the wrong kind of value."""

    def __init__(self) -> None:
        super().__init__("WRONGTYPE Operation against a key holding the wrong kind of value")


class ProtocolErrReply(ErrorReply):
    """An unexpected byte met while parsing a request."""

    def __init__(self, msg: str) -> None:
        super().__init__("ERR Protocol error '" + msg + "' command")
        self.msg = msg

    def to_bytes(self) -> bytes:
        return b"-ERR Protocol error: '" + self.msg.encode() + b"'" + CRLF


_OK_REPLY = OkReply()
_QUEUED_REPLY = QueuedReply()
_SYNTAX_ERR_REPLY = SyntaxErrReply()


def make_ok_reply() -> OkReply:
    """Return the shared ``+OK`` reply."""
    return _OK_REPLY


def make_queued_reply() -> QueuedReply:
    """Return the shared ``+QUEUED`` reply."""
    return _QUEUED_REPLY


def make_syntax_err_reply() -> SyntaxErrReply:
    """Return the shared syntax error reply."""
    return _SYNTAX_ERR_REPLY


def is_empty_multi_bulk_reply(reply: Reply) -> bool:
    """Tell whether ``reply`` encodes as an empty array."""
    return reply.to_bytes() == _EMPTY_MULTI_BULK_BYTES


def is_ok_reply(reply: Reply) -> bool:
    """Tell whether ``reply`` encodes as ``+OK``."""
    return reply.to_bytes() == _OK_BYTES


def is_error_reply(reply: Reply) -> bool:
    """Tell whether ``reply`` encodes as an error."""
    return reply.to_bytes().startswith(b"-")


def try_to_error_reply(reply: Reply) -> StandardErrReply | None:
    """Return the error carried by ``reply``, or ``None`` if it is not an error.

    Raises ``ValueError`` if the reply encodes to nothing.
    """
    data = reply.to_bytes()
    if not data:
        raise ValueError("empty reply")
    if not data.startswith(b"-"):
        return None
    message = data[1:]
    if message.endswith(CRLF):
        message = message[: -len(CRLF)]
    return StandardErrReply(message.decode(errors="replace"))