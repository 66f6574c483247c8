import io
import re

import pytest

from tinyredis import logger
from tinyredis.logger import Logger, LogLevel

_STAMP = re.compile(r"^\d{4}/\d\d/\d\d \d\d:\d\d:\d\d ")


@pytest.fixture
def stream():
    buffer = io.StringIO()
    logger.set_output(buffer)
    yield buffer
    logger.set_output(None)
    logger.set_level(LogLevel.INFO)
    logger.set_colorful(True)


def test_info_and_error_are_written(stream):
    logger.info("ceshi1")
    logger.error("ceshi1")
    lines = stream.getvalue().splitlines()
    assert len(lines) == 2
    assert "[INFO] test_logger.py:" in lines[0]
    assert "[ERROR] test_logger.py:" in lines[1]
    assert all("ceshi1" in line for line in lines)
    assert all(_STAMP.match(line) for line in lines)


def test_colours_wrap_the_record(stream):
    logger.info("hello")
    line = stream.getvalue().rstrip("\n")
    assert "\033[32m[INFO]" in line
    assert line.endswith("hello\033[0m")


def test_colourless_output(stream):
    logger.set_colorful(False)
    logger.warn("careful")
    line = stream.getvalue().rstrip("\n")
    assert "\033[" not in line
    assert "[WARN] test_logger.py:" in line
    assert line.endswith(": careful")


def test_records_below_level_are_dropped(stream):
    logger.debug("hidden")
    assert stream.getvalue() == ""
    logger.set_level(LogLevel.ERROR)
    logger.info("hidden")
    logger.warn("hidden")
    assert stream.getvalue() == ""
    logger.error("shown")
    assert "shown" in stream.getvalue()


def test_debug_shown_at_debug_level(stream):
    logger.set_level(LogLevel.DEBUG)
    logger.debug("trace")
    assert "\033[36m[DEBUG]" in stream.getvalue()


def test_operands_joined_like_sprint(stream):
    logger.set_colorful(False)
    logger.info(1, 2)
    logger.info("a", "b")
    logger.info("n=", 3)
    lines = stream.getvalue().splitlines()
    assert lines[0].endswith(": 1 2")
    assert lines[1].endswith(": ab")
    assert lines[2].endswith(": n=3")


def test_fatal_exits_with_status_one(stream):
    with pytest.raises(SystemExit) as excinfo:
        logger.fatal("boom")
    assert excinfo.value.code == 1
    assert "[FATAL]" in stream.getvalue()


def test_logger_instance_reports_caller_line():
    buffer = io.StringIO()
    log = Logger(buffer, LogLevel.DEBUG, colorful=False)
    log.log(LogLevel.WARNING, "hello")
    line = buffer.getvalue()
    assert "[WARN] test_logger.py:" in line
    assert line.endswith(": hello\n")
    assert re.search(r"test_logger\.py:\d+: hello", line)


def test_logger_instance_level_filter():
    buffer = io.StringIO()
    log = Logger(buffer, LogLevel.ERROR, colorful=False)
    log.log(LogLevel.INFO, "dropped")
    assert buffer.getvalue() == ""
    log.level = LogLevel.INFO
    log.log(LogLevel.INFO, "kept")
    assert "kept" in buffer.getvalue()


@pytest.mark.parametrize(
    "level, label",
    [
        (LogLevel.DEBUG, "DEBUG"),
        (LogLevel.INFO, "INFO"),
        (LogLevel.WARNING, "WARN"),
        (LogLevel.ERROR, "ERROR"),
    ],
)
def test_level_labels_appear_in_records(level, label):
    buffer = io.StringIO()
    log = Logger(buffer, LogLevel.DEBUG, colorful=False)
    log.log(level, "msg")
    assert f"[{label}] test_logger.py:" in buffer.getvalue()
    assert level.label == label