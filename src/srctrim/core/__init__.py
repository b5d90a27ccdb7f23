# topmark:header:start
#
#   project      : SrcTrim
#   file         : __init__.py
#   file_relpath : src/srctrim/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure, I/O-free core of SrcTrim: scanners, transforms and domain errors."""

from __future__ import annotations

from srctrim.core.context import ContextLine, context_window
from srctrim.core.errors import (
    ConfigError,
    MalformedInputError,
    MarkerNotFoundError,
    NothingToDoError,
    SrctrimError,
    TrailerConflictError,
)
from srctrim.core.patcher import (
    Anchor,
    MarkerPolicy,
    Occurrences,
    PatchResult,
    dedupe_sections,
    ensure_terminal_statement,
    find_second_occurrence_line,
    truncate_at_balanced_block,
    truncate_before_line,
)
from srctrim.core.scanner import BalanceReport, ScanMode, brace_balance, find_block_end

__all__ = [
    "Anchor",
    "BalanceReport",
    "ConfigError",
    "ContextLine",
    "MalformedInputError",
    "MarkerNotFoundError",
    "MarkerPolicy",
    "NothingToDoError",
    "Occurrences",
    "PatchResult",
    "ScanMode",
    "SrctrimError",
    "TrailerConflictError",
    "brace_balance",
    "context_window",
    "dedupe_sections",
    "ensure_terminal_statement",
    "find_block_end",
    "find_second_occurrence_line",
    "truncate_at_balanced_block",
    "truncate_before_line",
]
