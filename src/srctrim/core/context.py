# topmark:header:start
#
#   project      : SrcTrim
#   file         : context.py
#   file_relpath : src/srctrim/core/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Numbered context windows around a line of interest."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class ContextLine:
    """One numbered line of a context window."""

    number: int
    text: str
    is_target: bool = False


def context_window(lines: Sequence[str], line_no: int, radius: int = 5) -> list[ContextLine]:
    """Return lines ``line_no - radius`` through ``line_no + radius`` (1-based, clamped).

    Raises:
        ValueError: If ``line_no`` is outside the buffer or ``radius`` is negative.
    """
    if radius < 0:
        raise ValueError("radius must not be negative")
    if not 1 <= line_no <= len(lines):
        raise ValueError(f"line {line_no} is outside 1..{len(lines)}")
    lo = max(1, line_no - radius)
    hi = min(len(lines), line_no + radius)
    return [ContextLine(n, lines[n - 1], n == line_no) for n in range(lo, hi + 1)]
