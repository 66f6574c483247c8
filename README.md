# tinyredis

Building blocks for a Redis-style server, in pure Python with no
third-party dependencies:

- **RESP replies** (`tinyredis.protocol`): `StatusReply`, `IntReply`,
  `BulkReply`, `MultiBulkReply`, `MultiRawReply`, `NullBulkReply`,
  `EmptyMultiBulkReply`, `PongReply`, `OkReply`, `QueuedReply`, `NoReply`,
  and the error replies (`StandardErrReply`, `ArgNumErrReply`,
  `SyntaxErrReply`, `WrongTypeErrReply`, `ProtocolErrReply`,
  `UnknownErrReply`). Error replies are also exceptions and can be raised.
  Every reply serialises itself with `to_bytes()`. Helpers:
  `make_ok_reply`, `make_queued_reply`, `make_syntax_err_reply`,
  `is_ok_reply`, `is_error_reply`, `is_empty_multi_bulk_reply` and
  `try_to_error_reply`.
- **A streaming parser** (`tinyredis.parser`): `parse_stream` reads RESP
  from a binary stream (or bytes) and yields `Payload` objects, each
  carrying either a reply (`data`) or a recoverable `ProtocolError`
  (`err`). `parse_one` returns the first reply in a byte string, raising
  `ProtocolError` for malformed input and `EOFError` when there is no
  complete reply. Plain text lines such as `set a a` are returned as a
  `MultiBulkReply` of the space-separated words.
- **A sharded dictionary** (`tinyredis.concurrent_dict.ConcurrentDict`),
  safe to share between threads, with string keys spread over shards by
  their 32-bit FNV-1 hash. The shard count is rounded up to a power of
  two, at least 16 (`compute_capacity`).
- **Key locks** (`tinyredis.locks.Locks`): a table of reader-writer locks
  addressed by key hash. `rw_locks(write_keys, read_keys)` takes every
  needed slot in ascending order, write locks for written keys and read
  locks for the rest; `rw_unlocks` releases them.
- **A TCP server** (`tinyredis.server`): `listen_and_serve` serves each
  connection with a `Handler` in its own thread until a
  `threading.Event` is set; `listen_and_serve_with_signal` binds a
  `Config.address` and stops on `SIGHUP`, `SIGQUIT`, `SIGTERM` or
  `SIGINT` (where the platform has them).
- **An echo handler** (`tinyredis.echo.EchoHandler`) that writes each
  line back to the client that sent it.
- **A logger** (`tinyredis.logger`) with levels (`LogLevel`), optional
  colour, and the caller's file and line in every record:
  `debug`, `info`, `warn`, `error`, `fatal`, `set_level`, `set_output`,
  `set_colorful`.
- **Helpers** (`tinyredis.utils`): `fnv32`, `convert_range`,
  `remove_duplicates`, `equals`, `bytes_equals`, `to_cmd_line`,
  `to_cmd_line2`, `to_cmd_line3`; and (`tinyredis.syncutil`) `AtomicBool`
  and a `WaitGroup` with `wait_with_timeout`.

## Installation

```
pip install .
```

Python 3.10 or later is required.

## Running the echo server

```
tinyredis
```

This listens on port 8000 on all interfaces. Use `--address host:port`
to listen elsewhere, for example `tinyredis --address 127.0.0.1:9000`.
Every newline-terminated line a client sends is written straight back.
Stop the server with Ctrl-C or a termination signal; each open connection
is given up to ten seconds to finish a send in progress before it is
closed.

## Using the library

Serialising replies:

```python
from tinyredis.protocol import BulkReply, IntReply, MultiBulkReply

assert IntReply(1).to_bytes() == b":1\r\n"
assert BulkReply(b"hello").to_bytes() == b"$5\r\nhello\r\n"
assert MultiBulkReply([b"a", None]).to_bytes() == b"*2\r\n$1\r\na\r\n$-1\r\n"
```

Parsing:

```python
import io

from tinyredis.parser import parse_one, parse_stream

reply = parse_one(b"+OK\r\n")
assert reply.to_bytes() == b"+OK\r\n"

for payload in parse_stream(io.BytesIO(b":1\r\nset a a\r\n")):
    print(payload)
```

A shared dictionary:

```python
from tinyredis.concurrent_dict import ConcurrentDict

d = ConcurrentDict(16)
assert d.put("k1", 1) == 1   # new key
assert d.put("k1", 2) == 0   # existing key updated
assert d.get("k1") == (2, True)
assert d.remove("k1") == (2, 1)
assert len(d) == 0
```

## What it does not do

The server that ships with the package is a line echo server. It does not
parse requests as RESP commands, does not execute commands such as `GET`
or `SET`, and keeps no data; nothing is stored or persisted. The reply
types, parser, dictionary and locks are provided for building such a
server, but the package does not put them together into one.

## Tests

```
pip install .[test]
pytest
```