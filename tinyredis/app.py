"""Command that runs the line echo server."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from tinyredis.echo import EchoHandler
from tinyredis.server import Config, listen_and_serve_with_signal

DEFAULT_ADDRESS = ":8000"


def main(argv: Sequence[str] | None = None) -> int:
    """Serve the echo handler until interrupted; return the exit status."""
    parser = argparse.ArgumentParser(prog="tinyredis", description="Run the echo server.")
    parser.add_argument(
        "--address",
        default=DEFAULT_ADDRESS,
        help=f"host:port to listen on (default {DEFAULT_ADDRESS})",
    )
    args = parser.parse_args(argv)
    listen_and_serve_with_signal(Config(address=args.address), EchoHandler())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())