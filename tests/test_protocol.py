import pytest

from tinyredis.protocol import (
    CRLF,
    ArgNumErrReply,
    BulkReply,
    EmptyMultiBulkReply,
    ErrorReply,
    IntReply,
    MultiBulkReply,
    MultiRawReply,
    NoReply,
    NullBulkReply,
    OkReply,
    PongReply,
    ProtocolErrReply,
    QueuedReply,
    Reply,
    StandardErrReply,
    StatusReply,
    SyntaxErrReply,
    UnknownErrReply,
    WrongTypeErrReply,
    is_empty_multi_bulk_reply,
    is_error_reply,
    is_ok_reply,
    make_ok_reply,
    make_queued_reply,
    make_syntax_err_reply,
    try_to_error_reply,
)


@pytest.mark.parametrize(
    "reply, wire",
    [
        (PongReply(), b"+PONG\r\n"),
        (OkReply(), b"+OK\r\n"),
        (NullBulkReply(), b"$-1\r\n"),
        (EmptyMultiBulkReply(), b"*0\r\n"),
        (NoReply(), b""),
        (QueuedReply(), b"+QUEUED\r\n"),
        (UnknownErrReply(), b"-Err unknown\r\n"),
        (SyntaxErrReply(), b"-Err syntax error\r\n"),
        (
            WrongTypeErrReply(),
            b"-WRONGTYPE Operation against a key holding the wrong kind of value\r\n",
        ),
    ],
)
def test_constant_replies(reply, wire):
    assert reply.to_bytes() == wire


def test_crlf_terminates_status_line():
    assert StatusReply("").to_bytes() == b"+" + CRLF
    assert CRLF == b"\r\n"


def test_bulk_reply_is_binary_safe():
    assert BulkReply(b"a\r\nb").to_bytes() == b"$4\r\na\r\nb\r\n"


def test_bulk_reply_none_is_null():
    assert BulkReply(None).to_bytes() == NullBulkReply().to_bytes()


@pytest.mark.parametrize("arg", [b"", b"x", b"hello world", bytes(range(256))])
def test_bulk_reply_framing(arg):
    wire = BulkReply(arg).to_bytes()
    assert wire.startswith(b"$" + str(len(arg)).encode() + CRLF)
    assert wire.endswith(arg + CRLF)


def test_int_reply():
    assert IntReply(1).to_bytes() == b":1\r\n"


def test_status_reply():
    assert StatusReply("OK").to_bytes() == b"+OK\r\n"


def test_multi_bulk_reply_with_null():
    assert MultiBulkReply([b"a", None]).to_bytes() == b"*2\r\n$1\r\na\r\n$-1\r\n"


def test_multi_bulk_reply_is_concatenation_of_bulks():
    args = [b"set", b"key", b"\r\n"]
    wire = MultiBulkReply(args).to_bytes()
    expected_body = b"".join(BulkReply(arg).to_bytes() for arg in args)
    assert wire == b"*" + str(len(args)).encode() + CRLF + expected_body


def test_empty_multi_bulk_matches_empty_array():
    assert is_empty_multi_bulk_reply(MultiBulkReply([]))
    assert is_empty_multi_bulk_reply(EmptyMultiBulkReply())
    assert not is_empty_multi_bulk_reply(MultiBulkReply([b"a"]))


def test_multi_raw_reply_concatenates_items():
    replies = [IntReply(1), StatusReply("OK"), NullBulkReply()]
    wire = MultiRawReply(replies).to_bytes()
    body = b"".join(reply.to_bytes() for reply in replies)
    assert wire == b"*" + str(len(replies)).encode() + CRLF + body


def test_standard_error_reply():
    err = StandardErrReply("ERR unknown")
    assert err.to_bytes() == b"-ERR unknown\r\n"
    assert str(err) == "ERR unknown"
    assert err.status == "ERR unknown"


def test_arg_num_error_reply():
    err = ArgNumErrReply("get")
    assert err.to_bytes() == b"-ERR wrong number of arguments for 'get' command\r\n"
    assert str(err) == "ERR wrong number of arguments for 'get' command"


def test_protocol_error_reply_message_and_wire_differ():
    err = ProtocolErrReply("x")
    assert str(err) == "ERR Protocol error 'x' command"
    assert err.to_bytes() == b"-ERR Protocol error: 'x'\r\n"


def test_error_replies_can_be_raised():
    err = WrongTypeErrReply()
    with pytest.raises(ErrorReply) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "WRONGTYPE Operation against a key holding the wrong kind of value"
    assert info.value.to_bytes() == (
        b"-WRONGTYPE Operation against a key holding the wrong kind of value\r\n"
    )
    assert isinstance(info.value, Reply)


def test_error_reply_equality():
    assert StandardErrReply("ERR a") == StandardErrReply("ERR a")
    assert StandardErrReply("ERR a") != StandardErrReply("ERR b")
    assert ArgNumErrReply("set") == ArgNumErrReply("set")


def test_value_replies_compare_by_content():
    assert BulkReply(b"a") == BulkReply(b"a")
    assert BulkReply(b"a") != BulkReply(b"b")
    assert BulkReply(b"a").to_bytes() == b"$1\r\na\r\n"
    assert IntReply(3) == IntReply(3)
    assert IntReply(3) != IntReply(4)
    assert MultiBulkReply([b"a"]) == MultiBulkReply([b"a"])
    assert MultiBulkReply([b"a"]).to_bytes() == b"*1\r\n$1\r\na\r\n"
    assert PongReply() == PongReply()


def test_shared_replies_are_singletons():
    assert make_ok_reply() is make_ok_reply()
    assert make_queued_reply() is make_queued_reply()
    assert make_syntax_err_reply() is make_syntax_err_reply()
    assert make_queued_reply().to_bytes() == b"+QUEUED\r\n"


def test_is_ok_reply():
    assert is_ok_reply(make_ok_reply())
    assert is_ok_reply(StatusReply("OK"))
    assert not is_ok_reply(StatusReply("PONG"))


def test_is_error_reply():
    assert is_error_reply(StandardErrReply("ERR x"))
    assert is_error_reply(ProtocolErrReply("bad"))
    assert not is_error_reply(IntReply(1))
    assert not is_error_reply(NoReply())


def test_try_to_error_reply_returns_error():
    err = try_to_error_reply(StandardErrReply("ERR unknown"))
    assert isinstance(err, StandardErrReply)
    assert str(err) == "ERR unknown"


def test_try_to_error_reply_non_error_is_none():
    assert try_to_error_reply(StatusReply("OK")) is None


def test_try_to_error_reply_empty_raises():
    with pytest.raises(ValueError):
        try_to_error_reply(NoReply())