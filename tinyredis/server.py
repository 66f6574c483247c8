"""TCP server loop with graceful shutdown on request or on termination signals."""

from __future__ import annotations

import signal
import socket
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

from tinyredis import logger
from tinyredis.syncutil import WaitGroup

_ACCEPT_POLL_SECONDS = 0.2
_SHUTDOWN_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGHUP", "SIGQUIT", "SIGTERM", "SIGINT")
    if hasattr(signal, name)
)


class Handler(ABC):
    """An application served over TCP connections."""

    @abstractmethod
    def handle(self, conn: socket.socket) -> None:
        """Serve one accepted connection until it ends."""

    @abstractmethod
    def close(self) -> None:
        """Stop serving and close every open connection."""


@dataclass
class Config:
    """Listening address and limits of a TCP server."""

    address: str
    max_connect: int = 0
    timeout: float = 0.0


def _peer_name(conn: socket.socket) -> str:
    try:
        peer = conn.getpeername()
    except OSError:
        return "?"
    if isinstance(peer, tuple):
        return f"{peer[0]}:{peer[1]}"
    return str(peer)


def _split_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (host may be empty or bracketed) into its parts."""
    host, sep, port_text = address.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not port_text.isdigit() or int(port_text) > 65535:
        raise ValueError(f"invalid port in address {address!r}")
    return host, int(port_text)


def _open_listener(host: str, port: int) -> socket.socket:
    if not host and socket.has_dualstack_ipv6():
        return socket.create_server(
            ("", port), family=socket.AF_INET6, dualstack_ipv6=True
        )
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    return socket.create_server((host, port), family=family)


def listen_and_serve(
    listener: socket.socket,
    handler: Handler,
    close_event: threading.Event,
    address: str,
) -> None:
    """Accept connections on ``listener`` until ``close_event`` is set or it fails.

    Each connection is served by ``handler`` in its own thread. Once the
    event is set the handler is closed; the call returns after every
    connection thread has finished, leaving listener and handler closed.
    """

    def watch() -> None:
        close_event.wait()
        logger.info(f"server {address} shutting down...")
        handler.close()

    threading.Thread(target=watch, name="shutdown-watcher", daemon=True).start()

    workers = WaitGroup()

    def serve(conn: socket.socket) -> None:
        try:
            handler.handle(conn)
        finally:
            workers.done()

    try:
        try:
            listener.settimeout(_ACCEPT_POLL_SECONDS)
        except OSError:
            pass  # a closed listener makes accept fail below
        while not close_event.is_set():
            try:
                conn, _ = listener.accept()
            except TimeoutError:
                continue
            except OSError:
                break
            logger.info(f"client {_peer_name(conn)} accept link")
            workers.add(1)
            threading.Thread(target=serve, args=(conn,), daemon=True).start()
        workers.wait()
    finally:
        listener.close()
        handler.close()


def listen_and_serve_with_signal(cfg: Config, handler: Handler) -> None:
    """Listen on ``cfg.address`` and serve until a termination signal arrives.

    Signals are watched only when called from the main thread; the previous
    signal handlers are restored on return. Raises ``ValueError`` for a
    malformed address and ``OSError`` if the address cannot be bound.
    """
    close_event = threading.Event()
    previous: dict[int, object] = {}

    def on_signal(signum: int, frame: object) -> None:
        close_event.set()

    if threading.current_thread() is threading.main_thread():
        for signum in _SHUTDOWN_SIGNALS:
            previous[signum] = signal.signal(signum, on_signal)
    try:
        host, port = _split_address(cfg.address)
        listener = _open_listener(host, port)
        logger.info(f"bind: {cfg.address}, start listening...")
        listen_and_serve(listener, handler, close_event, cfg.address)
    finally:
        for signum, old in previous.items():
            signal.signal(signum, old if old is not None else signal.SIG_DFL)