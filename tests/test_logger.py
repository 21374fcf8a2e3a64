"""
Tests for the logging setup.
"""

import logging
from pathlib import Path

import orjson
import pytest

from forwarded.logger import get_logger
from forwarded.logger._json_formatter import JSONFormatter
from forwarded.logger._console_formatter import ConsoleFormatter


def make_record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord("forwarded.test", logging.WARNING, __file__, 10, msg, args, None)


def test_json_formatter_renders_message():
    line = JSONFormatter().format(make_record("Discarding for=%s", "999.0.2.60"))
    data = orjson.loads(line)

    assert data["name"] == "forwarded.test"
    assert data["levelname"] == "WARNING"
    assert data["message"] == "Discarding for=999.0.2.60"
    assert data["exc_info"] is None
    assert data["capture"] is None


def test_json_formatter_keeps_capture():
    record = make_record("Discarding for=%s", "999.0.2.60")
    record.capture = {"kind": "ipv4", "value": "999.0.2.60", "start": 5, "end": 20}

    data = orjson.loads(JSONFormatter().format(record))

    assert data["capture"] == {"kind": "ipv4", "value": "999.0.2.60", "start": 5, "end": 20}


def test_console_formatter_without_colors():
    formatted = ConsoleFormatter(colors=None).format(make_record("first\nsecond"))

    assert formatted.startswith("[forwarded.test]-[WARNING]-[")
    assert formatted.endswith("first\n    second")
    assert "\033[" not in formatted


def test_get_logger_without_path_has_no_file_handler():
    log = get_logger("forwarded.test.nofile", log_path=None)

    assert log.name == "forwarded.test.nofile"
    assert log.handlers == []


def test_get_logger_writes_json_lines(tmp_path: Path):
    log = get_logger("forwarded.test.file", log_path=tmp_path / "logs")
    log.setLevel(logging.INFO)
    try:
        log.info("Parsed %d hop(s)", 2)
    finally:
        for handler in list(log.handlers):
            handler.close()
            log.removeHandler(handler)

    (log_file,) = (tmp_path / "logs").glob("*.jsonl")
    records = [orjson.loads(line) for line in log_file.read_text("utf8").splitlines()]
    assert [record["message"] for record in records] == ["Parsed 2 hop(s)"]


def test_get_logger_rejects_file_path(tmp_path: Path):
    not_a_dir = tmp_path / "file"
    not_a_dir.write_text("")

    with pytest.raises(NotADirectoryError):
        get_logger("forwarded.test.bad", log_path=not_a_dir)
