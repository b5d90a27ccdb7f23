# topmark:header:start
#
#   project      : SrcTrim
#   file         : diff.py
#   file_relpath : src/srctrim/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized rendering."""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Sequence


def unified_diff(before: str, after: str, name: str) -> list[str]:
    """Return a unified diff between two buffers as a list of lines (no newlines)."""
    return list(
        difflib.unified_diff(
            before.splitlines(),
            after.splitlines(),
            fromfile=f"{name} (original)",
            tofile=f"{name} (patched)",
            lineterm="",
        )
    )


def render_patch(patch: Sequence[str] | str, *, color: bool = True) -> str:
    """Render a unified diff, colorized when ``color`` is True.

    Args:
        patch (Sequence[str] | str): Diff lines or a single multiline string.
        color (bool): Apply ANSI colors.

    Returns:
        str: The rendered diff, one line per entry, each ending in a newline.
    """
    lines: list[str] = patch.splitlines() if isinstance(patch, str) else list(patch)
    if not color:
        return "".join(f"{line}\n" for line in lines)

    def process_line(line: str) -> str:
        match line[:1]:
            case "-":
                return chalk.bold.red(line)
            case "+":
                return chalk.bold.green(line)
            case "@":
                return chalk.cyan(line)
            case _:
                return chalk.white(line)

    return "".join(f"{process_line(line)}\n" for line in lines)
