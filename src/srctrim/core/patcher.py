# topmark:header:start
#
#   project      : SrcTrim
#   file         : patcher.py
#   file_relpath : src/srctrim/core/patcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure truncation transforms.

Each transform maps ``(old buffer, anchor, trailer)`` to a new buffer and never
touches the filesystem; the CLI owns reading and writing. All transforms are
idempotent: applying one to its own output yields the same text, reported with
``PatchResult.changed == False``.

Block mode:
    [`truncate_at_balanced_block`][srctrim.core.patcher.truncate_at_balanced_block]
    cuts after the brace block that follows a marker.

Line mode:
    [`find_second_occurrence_line`][srctrim.core.patcher.find_second_occurrence_line]
    and [`truncate_before_line`][srctrim.core.patcher.truncate_before_line], driven by
    [`dedupe_sections`][srctrim.core.patcher.dedupe_sections], cut before the second
    occurrence of a phrase.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

from srctrim.config.logging import SrctrimLogger, get_logger
from srctrim.core.errors import (
    MalformedInputError,
    MarkerNotFoundError,
    NothingToDoError,
    TrailerConflictError,
)
from srctrim.core.scanner import ScanMode, find_block_end

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: SrctrimLogger = get_logger(__name__)

TRAILER_SEPARATOR = "\n\n"


class MarkerPolicy(str, Enum):
    """Which marker occurrence is authoritative.

    ``LAST`` assumes code appended later supersedes earlier duplicates.
    """

    LAST = "last"
    FIRST = "first"


@dataclass(frozen=True)
class Anchor:
    """A marker occurrence located in a buffer.

    Attributes:
        offset (int): 0-based character offset.
        line (int): 1-based line number.
    """

    offset: int
    line: int


@dataclass(frozen=True)
class PatchResult:
    """Outcome of a pure transform.

    Attributes:
        original (str): The input buffer.
        text (str): The transformed buffer.
        anchors (tuple[Anchor, ...]): Marker/phrase occurrences found, in buffer order.
        selected (Anchor | None): The occurrence the transform acted on.
        cut_point (int | None): Offset in ``original`` where content was cut.
    """

    original: str
    text: str
    anchors: tuple[Anchor, ...] = field(default_factory=tuple)
    selected: Anchor | None = None
    cut_point: int | None = None

    @property
    def changed(self) -> bool:
        """True if the transform produced different text."""
        return self.text != self.original


class Occurrences(NamedTuple):
    """First and second line indices (0-based) of a phrase; None means not found."""

    first: int | None
    second: int | None


def _line_of(buffer: str, offset: int) -> int:
    return buffer.count("\n", 0, offset) + 1


def _with_trailer(head: str, trailer: str) -> str:
    return head.rstrip() + TRAILER_SEPARATOR + trailer


def find_marker_offsets(buffer: str, marker: str) -> list[int]:
    """Return the start offset of every occurrence of ``marker``, overlapping ones included."""
    if not marker:
        raise ValueError("marker must not be empty")
    offsets: list[int] = []
    pos = buffer.find(marker)
    while pos != -1:
        offsets.append(pos)
        pos = buffer.find(marker, pos + 1)
    return offsets


def truncate_at_balanced_block(
    buffer: str,
    marker: str,
    trailer: str,
    *,
    policy: MarkerPolicy = MarkerPolicy.LAST,
    scan_mode: ScanMode = ScanMode.NAIVE,
) -> PatchResult:
    """Keep ``buffer`` up to the end of the block following ``marker``, then add ``trailer``.

    Args:
        buffer (str): Source text.
        marker (str): Literal anchor substring.
        trailer (str): Replacement text appended after the cut.
        policy (MarkerPolicy): Which occurrence of ``marker`` to anchor on.
        scan_mode (ScanMode): Brace scanner flavor.

    Returns:
        PatchResult: ``buffer[:cut].rstrip() + "\\n\\n" + trailer`` with the anchors found.

    Raises:
        TrailerConflictError: If ``trailer`` contains ``marker``.
        MarkerNotFoundError: If ``marker`` does not occur in ``buffer``.
        MalformedInputError: If the block after the marker never balances.
    """
    offsets = find_marker_offsets(buffer, marker)
    if marker in trailer:
        raise TrailerConflictError(f"Trailer contains the marker text {marker!r}")

    anchors = tuple(Anchor(offset=o, line=_line_of(buffer, o)) for o in offsets)
    logger.debug("marker %r found at offsets %s", marker, offsets)
    if not anchors:
        raise MarkerNotFoundError(marker)

    selected = anchors[-1] if policy is MarkerPolicy.LAST else anchors[0]
    cut_point, depth = find_block_end(buffer, selected.offset, scan_mode)
    if cut_point is None:
        raise MalformedInputError(selected.offset, depth, anchors=anchors)

    logger.info("cutting at offset %d (line %d)", cut_point, _line_of(buffer, cut_point))
    return PatchResult(
        original=buffer,
        text=_with_trailer(buffer[:cut_point], trailer),
        anchors=anchors,
        selected=selected,
        cut_point=cut_point,
    )


def _phrases(phrase: str | Sequence[str]) -> tuple[str, ...]:
    items = (phrase,) if isinstance(phrase, str) else tuple(phrase)
    if not items or any(not p for p in items):
        raise ValueError("phrase must be a non-empty string or a sequence of them")
    return items


def find_second_occurrence_line(
    lines: Sequence[str], phrase: str | Sequence[str]
) -> Occurrences:
    """Locate the first two lines containing ``phrase``.

    Scanning stops at the second match; later duplicates are ignored.

    Args:
        lines (Sequence[str]): Buffer split into lines.
        phrase (str | Sequence[str]): Phrase, or alternatives any of which may match.

    Returns:
        Occurrences: 0-based ``(first, second)`` indices; missing ones are None.
    """
    needles = _phrases(phrase)
    first: int | None = None
    for idx, line in enumerate(lines):
        if any(n in line for n in needles):
            if first is None:
                first = idx
            else:
                return Occurrences(first, idx)
    return Occurrences(first, None)


def truncate_before_line(lines: Sequence[str], second_index: int | None, trailer: str) -> str:
    """Join ``lines[:second_index]`` and append ``trailer``.

    The line at ``second_index`` and everything after it are dropped.

    Raises:
        NothingToDoError: If ``second_index`` is None.
    """
    if second_index is None:
        raise NothingToDoError("No second occurrence: refusing to truncate")
    return _with_trailer("\n".join(lines[:second_index]), trailer)


def _split_trailer(buffer: str, trailer: str) -> str:
    """Return ``buffer`` without an already-applied trailer."""
    stripped_trailer = trailer.strip()
    body = buffer.rstrip()
    if stripped_trailer and body.endswith(stripped_trailer):
        logger.debug("buffer already ends with the trailer; scanning the body only")
        return body[: -len(stripped_trailer)]
    return buffer


def dedupe_sections(buffer: str, phrase: str | Sequence[str], trailer: str) -> PatchResult:
    """Drop everything from the second occurrence of ``phrase`` and append ``trailer``.

    A trailer already present at the end of ``buffer`` is set aside before scanning,
    so a trailer that itself mentions the phrase is not mistaken for a duplicate.

    Raises:
        MarkerNotFoundError: If the phrase never occurs.
        NothingToDoError: If the phrase occurs only once, or the buffer already
            ends with ``trailer`` and has no duplicate before it.
    """
    body = _split_trailer(buffer, trailer)
    lines = body.split("\n")
    occ = find_second_occurrence_line(lines, phrase)
    anchors = tuple(
        Anchor(offset=sum(len(ln) + 1 for ln in lines[:idx]), line=idx + 1)
        for idx in occ
        if idx is not None
    )
    logger.debug("phrase occurrences: %s", occ)
    if occ.second is None and len(body) < len(buffer):
        raise NothingToDoError(
            "Already ends with the trailer and has no duplicate section", anchors=anchors
        )
    if occ.first is None:
        raise MarkerNotFoundError(" | ".join(_phrases(phrase)))
    if occ.second is None:
        raise NothingToDoError(
            f"Only one occurrence (line {occ.first + 1}); nothing to remove", anchors=anchors
        )

    return PatchResult(
        original=buffer,
        text=truncate_before_line(lines, occ.second, trailer),
        anchors=anchors,
        selected=anchors[-1],
        cut_point=anchors[-1].offset,
    )


def ensure_terminal_statement(buffer: str, terminal: str) -> PatchResult:
    """Make ``buffer`` end with ``terminal``.

    A buffer that already ends with ``terminal`` (ignoring surrounding whitespace)
    is returned unchanged. Otherwise content after the last occurrence of
    ``terminal`` is dropped, or ``terminal`` is appended after a blank line when it
    never occurs; the result is trimmed.
    """
    if not terminal.strip():
        raise ValueError("terminal statement must not be blank")
    terminal = terminal.strip()
    body = buffer.strip()
    last = body.rfind(terminal)
    if last == -1:
        text = _with_trailer(body, terminal) if body else terminal
        return PatchResult(original=buffer, text=text)

    offset = len(buffer) - len(buffer.lstrip()) + last
    anchor = Anchor(offset=offset, line=_line_of(buffer, offset))
    if body.endswith(terminal):
        return PatchResult(original=buffer, text=buffer, anchors=(anchor,), selected=anchor)
    return PatchResult(
        original=buffer,
        text=body[: last + len(terminal)],
        anchors=(anchor,),
        selected=anchor,
        cut_point=offset + len(terminal),
    )
