# topmark:header:start
#
#   project      : SrcTrim
#   file         : errors.py
#   file_relpath : src/srctrim/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Domain exceptions raised by the SrcTrim core.

These are framework-agnostic; the CLI maps each of them onto a Click exception
carrying a dedicated exit code (see `srctrim.cli.errors`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from srctrim.core.patcher import Anchor


class SrctrimError(Exception):
    """Base class for all SrcTrim domain errors.

    Attributes:
        anchors (tuple[Anchor, ...]): Occurrences located before the transform gave up,
            so callers can still report them. Empty when nothing was found.
    """

    anchors: tuple[Anchor, ...] = ()


class MarkerNotFoundError(SrctrimError):
    """The anchor marker or phrase does not occur in the buffer."""

    def __init__(self, marker: str) -> None:
        super().__init__(f"Marker not found: {marker!r}")
        self.marker = marker


class MalformedInputError(SrctrimError):
    """Brace scanning reached end of buffer without balancing to zero.

    Attributes:
        marker_offset (int): Offset of the marker the scan started from.
        depth (int): Residual delimiter depth at end of buffer.
    """

    def __init__(
        self, marker_offset: int, depth: int, *, anchors: tuple[Anchor, ...] = ()
    ) -> None:
        super().__init__(
            f"Block starting at offset {marker_offset} never closes "
            f"(depth {depth} at end of input)"
        )
        self.marker_offset = marker_offset
        self.depth = depth
        self.anchors = anchors


class NothingToDoError(SrctrimError):
    """The transform has no work to do (e.g. fewer than two occurrences)."""

    def __init__(self, message: str, *, anchors: tuple[Anchor, ...] = ()) -> None:
        super().__init__(message)
        self.anchors = anchors


class TrailerConflictError(SrctrimError):
    """The trailer contains the anchor text and would duplicate it in the output."""


class ConfigError(SrctrimError):
    """Configuration is missing, malformed or invalid."""
