# topmark:header:start
#
#   project      : SrcTrim
#   file         : test_logging_setup.py
#   file_relpath : tests/config/test_logging_setup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE level and environment-driven log level."""

from __future__ import annotations

import logging as std_logging

import pytest

from srctrim.config import logging


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("trace", logging.TRACE_LEVEL),
        (" Debug ", std_logging.DEBUG),
        ("WARN", std_logging.WARNING),
        ("15", 15),
        ("bogus", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int | None
) -> None:
    monkeypatch.setenv(logging.LOG_LEVEL_ENV, raw)
    assert logging.resolve_env_log_level() == expected


def test_resolve_env_log_level_unset() -> None:
    assert logging.resolve_env_log_level() is None


def test_trace_level_is_registered() -> None:
    assert std_logging.getLevelName(logging.TRACE_LEVEL) == "TRACE"
    assert isinstance(logging.get_logger("srctrim.test"), logging.SrctrimLogger)


def test_trace_records_are_emitted(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.get_logger("srctrim.test.trace")
    with caplog.at_level(logging.TRACE_LEVEL, logger="srctrim.test.trace"):
        logger.trace("depth %d", 3)
    assert [r.getMessage() for r in caplog.records] == ["depth 3"]
    assert caplog.records[0].levelname == "TRACE"
