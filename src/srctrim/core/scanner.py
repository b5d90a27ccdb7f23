# topmark:header:start
#
#   project      : SrcTrim
#   file         : scanner.py
#   file_relpath : src/srctrim/core/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Delimiter scanning over source text.

Two scanners share one contract: yield ``(offset, char)`` for every brace that
counts towards the delimiter depth.

- ``ScanMode.NAIVE`` counts every ``{`` and ``}`` character. It has no notion of
  string literals or comments, so a marker followed by an unbalanced brace in a
  string silently desynchronizes the scan.
- ``ScanMode.LEXICAL`` skips braces inside ``'...'``, ``"..."`` and
  `` `...` `` literals, ``//`` line comments and ``/* */`` block comments.
  Backslash escapes are honored. Template interpolation (``${...}``) is treated
  as literal text.

Everything here is pure: no I/O, no logging side effects beyond TRACE.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from srctrim.config.logging import SrctrimLogger, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

logger: SrctrimLogger = get_logger(__name__)

OPEN_BRACE = "{"
CLOSE_BRACE = "}"

_QUOTES = frozenset("'\"`")


class ScanMode(str, Enum):
    """How braces are recognized while scanning."""

    NAIVE = "naive"
    LEXICAL = "lexical"


def _iter_braces_naive(text: str, start: int) -> Iterator[tuple[int, str]]:
    for i in range(start, len(text)):
        ch = text[i]
        if ch == OPEN_BRACE or ch == CLOSE_BRACE:
            yield i, ch


def _iter_braces_lexical(text: str, start: int) -> Iterator[tuple[int, str]]:
    n = len(text)
    i = start
    quote: str | None = None
    while i < n:
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
            elif ch == "\n" and quote != "`":
                # Unterminated single-line literal: resync at end of line
                quote = None
            i += 1
            continue
        nxt = text[i + 1] if i + 1 < n else ""
        if ch == "/" and nxt == "/":
            eol = text.find("\n", i)
            i = n if eol == -1 else eol + 1
            continue
        if ch == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        if ch in _QUOTES:
            quote = ch
        elif ch == OPEN_BRACE or ch == CLOSE_BRACE:
            yield i, ch
        i += 1


def iter_braces(
    text: str, start: int = 0, mode: ScanMode = ScanMode.NAIVE
) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, brace)`` pairs that count towards delimiter depth.

    Args:
        text (str): Source buffer.
        start (int): Offset to start scanning from.
        mode (ScanMode): Scanner flavor.

    Returns:
        Iterator[tuple[int, str]]: Offsets and brace characters in buffer order.
    """
    if mode is ScanMode.LEXICAL:
        return _iter_braces_lexical(text, start)
    return _iter_braces_naive(text, start)


def find_block_end(
    text: str, start: int, mode: ScanMode = ScanMode.NAIVE
) -> tuple[int | None, int]:
    """Find the end of the first balanced brace block at or after ``start``.

    Depth starts at 0 at ``start``. The scan stops the instant depth returns to 0
    after having been positive; the returned cut point is one past that brace.

    A ``}`` seen before any ``{`` drives the depth negative. The marker then sits
    inside an enclosing block rather than before one, so the scan gives up.

    Args:
        text (str): Source buffer.
        start (int): Offset of the marker.
        mode (ScanMode): Scanner flavor.

    Returns:
        tuple[int | None, int]: ``(cut_point, depth)``. ``cut_point`` is None when
        the block never closes; ``depth`` is then the residual depth where the scan
        stopped.
    """
    depth = 0
    for offset, ch in iter_braces(text, start, mode):
        depth += 1 if ch == OPEN_BRACE else -1
        logger.trace("brace %r at %d -> depth %d", ch, offset, depth)
        if depth == 0:
            return offset + 1, 0
        if depth < 0:
            logger.debug("stray %r at %d before any opening brace", ch, offset)
            return None, depth
    return None, depth


@dataclass
class BalanceReport:
    """Brace balance analysis of a whole buffer.

    Attributes:
        balance (int): Final depth (opens minus closes).
        line_depths (list[int]): Running depth at the end of each line.
        first_negative_line (int | None): 1-based line where depth first drops below 0.
        unclosed_lines (list[int]): 1-based lines of ``{`` still open at end of input,
            outermost first.
    """

    balance: int = 0
    line_depths: list[int] = field(default_factory=list)
    first_negative_line: int | None = None
    unclosed_lines: list[int] = field(default_factory=list)

    @property
    def is_balanced(self) -> bool:
        """True if every ``{`` has a matching ``}`` and depth never went negative."""
        return self.balance == 0 and self.first_negative_line is None


def brace_balance(text: str, mode: ScanMode = ScanMode.NAIVE) -> BalanceReport:
    """Analyze brace balance across the whole buffer.

    Args:
        text (str): Source buffer.
        mode (ScanMode): Scanner flavor.

    Returns:
        BalanceReport: Final balance, per-line depths and the first problem lines.
    """
    report = BalanceReport()
    line_starts: list[int] = [0]
    for i, ch in enumerate(text):
        if ch == "\n":
            line_starts.append(i + 1)

    depth = 0
    open_stack: list[int] = []
    line_no = 1
    depths = [0] * len(line_starts)
    for offset, ch in iter_braces(text, 0, mode):
        while line_no < len(line_starts) and line_starts[line_no] <= offset:
            depths[line_no - 1] = depth
            line_no += 1
        if ch == OPEN_BRACE:
            depth += 1
            open_stack.append(line_no)
        else:
            depth -= 1
            if open_stack:
                open_stack.pop()
            if depth < 0 and report.first_negative_line is None:
                report.first_negative_line = line_no
    for idx in range(line_no - 1, len(line_starts)):
        depths[idx] = depth

    report.balance = depth
    report.line_depths = depths
    report.unclosed_lines = open_stack[len(open_stack) - depth :] if depth > 0 else []
    return report
