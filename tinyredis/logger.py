"""Levelled, optionally coloured logging with caller location."""

from __future__ import annotations

import inspect
import os
import sys
import threading
import time
from enum import IntEnum
from typing import Any, TextIO


class LogLevel(IntEnum):
    """Severity of a log record; records below the logger's level are dropped."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    @property
    def label(self) -> str:
        return _LABELS[self]


_RESET = "\033[0m"
_RED = "\033[31m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_PURPLE = "\033[35m"
_CYAN = "\033[36m"

_LABELS = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERROR",
    LogLevel.FATAL: "FATAL",
}

_COLORS = {
    LogLevel.DEBUG: _CYAN,
    LogLevel.INFO: _GREEN,
    LogLevel.WARNING: _YELLOW,
    LogLevel.ERROR: _RED,
    LogLevel.FATAL: _PURPLE,
}


def _caller_location(depth: int) -> tuple[str, int]:
    """Return file name and line of the frame ``depth`` levels above the caller."""
    frame = inspect.currentframe()
    for _ in range(depth + 1):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return "???", 0
    return os.path.basename(frame.f_code.co_filename), frame.f_lineno


def _sprint(args: tuple[Any, ...]) -> str:
    """Join operands, putting a space only between two non-string operands."""
    parts: list[str] = []
    previous: Any = ""
    for position, arg in enumerate(args):
        if position and not isinstance(arg, str) and not isinstance(previous, str):
            parts.append(" ")
        parts.append(str(arg))
        previous = arg
    return "".join(parts)


class Logger:
    """Writes timestamped records to a text stream.

    With ``output`` left as ``None`` records go to the current ``sys.stdout``.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        level: LogLevel = LogLevel.INFO,
        colorful: bool = True,
    ) -> None:
        self.output = output
        self.level = level
        self.colorful = colorful
        self._lock = threading.Lock()

    def log(self, level: LogLevel, message: str, depth: int = 1) -> None:
        """Write ``message`` at ``level``, tagged with the location ``depth`` frames up."""
        if level < self.level:
            return
        file_name, line_no = _caller_location(depth)
        text = f"[{level.label}] {file_name}:{line_no}: {message}"
        if self.colorful:
            text = f"{_COLORS[level]}{text}{_RESET}"
        stamp = time.strftime("%Y/%m/%d %H:%M:%S")
        with self._lock:
            stream = self.output if self.output is not None else sys.stdout
            stream.write(f"{stamp} {text}\n")
            flush = getattr(stream, "flush", None)
            if flush is not None:
                flush()


_std = Logger()


def set_level(level: LogLevel) -> None:
    """Set the minimum level of the shared logger."""
    _std.level = level


def set_output(stream: TextIO | None) -> None:
    """Send the shared logger's records to ``stream`` (``None`` means stdout)."""
    with _std._lock:
        _std.output = stream


def set_colorful(flag: bool) -> None:
    """Turn colouring of the shared logger's records on or off."""
    _std.colorful = flag


def debug(*args: Any) -> None:
    """Log at DEBUG level."""
    _std.log(LogLevel.DEBUG, _sprint(args), depth=2)


def info(*args: Any) -> None:
    """Log at INFO level."""
    _std.log(LogLevel.INFO, _sprint(args), depth=2)


def warn(*args: Any) -> None:
    """Log at WARNING level."""
    _std.log(LogLevel.WARNING, _sprint(args), depth=2)


def error(*args: Any) -> None:
    """Log at ERROR level."""
    _std.log(LogLevel.ERROR, _sprint(args), depth=2)


def fatal(*args: Any) -> None:
    """Log at FATAL level and exit with status 1."""
    _std.log(LogLevel.FATAL, _sprint(args), depth=2)
    raise SystemExit(1)