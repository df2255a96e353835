"""Tests for log formatters."""

import json
import logging
import sys

import pytest

from src.beeper_desktop.core.logging.formatters import (
    ColoredFormatter,
    JSONFormatter,
    TextFormatter,
    extra_fields,
    get_formatter,
)


def make_record(level=logging.INFO, **extra):
    record = logging.LogRecord("beeper_desktop", level, __file__, 10, "Request completed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_extra_fields_skip_reserved():
    record = make_record(method="GET", status_code=200)
    assert extra_fields(record) == {"method": "GET", "status_code": 200}


def test_json_formatter():
    output = JSONFormatter().format(make_record(method="GET", attempt=1))
    data = json.loads(output)

    assert data["level"] == "INFO"
    assert data["logger"] == "beeper_desktop"
    assert data["message"] == "Request completed"
    assert data["method"] == "GET"
    assert data["attempt"] == 1
    assert data["timestamp"].endswith("Z")


def test_json_formatter_non_serializable_values():
    data = json.loads(JSONFormatter().format(make_record(value=object())))
    assert data["value"].startswith("<object")


def test_json_formatter_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = make_record()
        record.exc_info = sys.exc_info()

    data = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in data["exception"]


def test_text_formatter():
    output = TextFormatter().format(make_record(method="GET", status_code=200))
    assert "[INFO] [beeper_desktop] Request completed" in output
    assert output.endswith("method=GET status_code=200")


def test_colored_formatter_restores_levelname():
    record = make_record(level=logging.ERROR)
    output = ColoredFormatter().format(record)
    assert "\033[31mERROR\033[0m" in output
    assert record.levelname == "ERROR"


@pytest.mark.parametrize("name,cls", [
    ("json", JSONFormatter),
    ("text", TextFormatter),
    ("COLORED", ColoredFormatter),
])
def test_get_formatter(name, cls):
    assert type(get_formatter(name)) is cls


def test_get_formatter_unknown():
    with pytest.raises(ValueError, match="Unknown format type"):
        get_formatter("xml")
