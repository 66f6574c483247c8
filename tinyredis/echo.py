"""A handler that sends every received line back to its client."""

from __future__ import annotations

import socket
import threading
from contextlib import suppress
from dataclasses import dataclass, field

from tinyredis import logger
from tinyredis.server import Handler
from tinyredis.syncutil import AtomicBool, WaitGroup

_CLOSE_GRACE_SECONDS = 10.0


def _peer_name(conn: socket.socket) -> str:
    try:
        peer = conn.getpeername()
    except OSError:
        return "?"
    if isinstance(peer, tuple):
        return f"{peer[0]}:{peer[1]}"
    return str(peer)


@dataclass(eq=False)
class Client:
    """A client connection; ``waiting`` counts replies still being sent."""

    conn: socket.socket
    waiting: WaitGroup = field(default_factory=WaitGroup)

    def close(self) -> None:
        """Close the connection once pending sends finish or ten seconds pass."""
        self.waiting.wait_with_timeout(_CLOSE_GRACE_SECONDS)
        with suppress(OSError):
            self.conn.shutdown(socket.SHUT_RDWR)
        self.conn.close()


class EchoHandler(Handler):
    """Echoes each newline-terminated line back to the sender."""

    def __init__(self) -> None:
        self._active: set[Client] = set()
        self._lock = threading.Lock()
        self._closing = AtomicBool()

    def handle(self, conn: socket.socket) -> None:
        """Echo lines from ``conn`` until the client disconnects."""
        if self._closing:
            conn.close()
            return

        client = Client(conn)
        with self._lock:
            self._active.add(client)
        peer = _peer_name(conn)

        try:
            with conn.makefile("rb") as reader:
                while True:
                    line = reader.readline()
                    if not line.endswith(b"\n"):
                        logger.info(f"client {peer} connection close")
                        with self._lock:
                            self._active.discard(client)
                        conn.close()
                        return
                    client.waiting.add(1)
                    try:
                        with suppress(OSError):
                            conn.sendall(line)
                    finally:
                        client.waiting.done()
        except OSError as exc:
            logger.warn(exc)

    def close(self) -> None:
        """Refuse new connections and close every active one."""
        logger.info("server handler shutting down...")
        self._closing.value = True
        with self._lock:
            clients = list(self._active)
        for client in clients:
            client.close()