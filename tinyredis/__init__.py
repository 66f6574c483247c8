"""Redis-style protocol replies, parser, sharded dictionary, key locks and a TCP echo server."""

__version__ = "0.1.0"