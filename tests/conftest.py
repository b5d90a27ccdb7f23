# topmark:header:start
#
#   project      : SrcTrim
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the SrcTrim test suite.

Sets up global fixtures, registers Hypothesis profiles and raises the log level
to TRACE so diagnostics are captured during test runs.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, cast

import pytest
from hypothesis import HealthCheck, settings

from srctrim.config import logging

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]

settings.register_profile("srctrim", deadline=None, max_examples=100)
settings.register_profile(
    "thorough",
    deadline=None,
    max_examples=1000,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("srctrim")


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


@pytest.fixture(autouse=True)
def silence_srctrim_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure SRCTRIM_LOG_LEVEL exported in the developer's shell does not leak into tests."""
    monkeypatch.delenv(logging.LOG_LEVEL_ENV, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level so failing tests show the scanner's decisions."""
    logging.setup_logging(level=logging.TRACE_LEVEL)

