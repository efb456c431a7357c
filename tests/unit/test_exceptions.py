"""Unit tests for the error taxonomy and helpers."""
from __future__ import annotations

import logging

import pytest

from hostman.exceptions import (
    ErrorHandler,
    HostmanError,
    NetworkError,
    ParseError,
    PersistenceError,
    RegionError,
    format_error_message,
)

pytestmark = pytest.mark.unit


def test_all_errors_share_base():
    for cls in (ParseError, RegionError, NetworkError, PersistenceError):
        assert issubclass(cls, HostmanError)


def test_parse_error_message():
    error = ParseError(3, "blank line")
    assert str(error) == "line 3: blank line"
    assert error.line_number == 3
    assert error.reason == "blank line"
    assert ParseError(0, "cannot read").message == "cannot read"


def test_log_and_raise_records_original(caplog):
    handler = ErrorHandler(logging.getLogger("hostman.test"))
    original = ConnectionError("refused")

    with caplog.at_level(logging.ERROR, logger="hostman.test"):
        with pytest.raises(NetworkError) as exc_info:
            handler.log_and_raise(NetworkError, "Request failed", original, {"url": "http://hub"})

    assert exc_info.value.__cause__ is original
    assert exc_info.value.details == {
        "url": "http://hub",
        "original_error": "refused",
        "original_type": "ConnectionError",
    }
    assert "Request failed" in caplog.text


def test_format_error_message():
    assert format_error_message(ParseError(2, "blank line")) == "ParseError: line 2: blank line"
    assert (
        format_error_message(NetworkError("Request failed", {"url": "http://hub"}))
        == "NetworkError: Request failed (url=http://hub)"
    )
    assert format_error_message(ValueError("bad")) == "ValueError: bad"
