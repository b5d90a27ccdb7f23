# topmark:header:start
#
#   project      : SrcTrim
#   file         : cmd_common.py
#   file_relpath : src/srctrim/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared plumbing for SrcTrim commands.

Every mutating command follows the same shape: read the file once, run a pure
transform, report what was found, then either preview (dry run) or write the
result atomically. No file is written when the transform fails.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

import click

from srctrim.cli.errors import SrctrimUsageError, from_core_error, from_os_error
from srctrim.cli.exit_codes import ExitCode
from srctrim.config.logging import SrctrimLogger, get_logger
from srctrim.core.errors import SrctrimError
from srctrim.io.files import backup_file, read_source, write_atomic
from srctrim.utils.diff import render_patch, unified_diff

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from srctrim.cli.console import ConsoleLike
    from srctrim.core.patcher import Anchor, PatchResult

logger: SrctrimLogger = get_logger(__name__)


def get_console(ctx: click.Context | None = None) -> ConsoleLike:
    """Return the console stored on the (current) Click context."""
    ctx = ctx or click.get_current_context()
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context | None = None) -> int:
    """Return the program-output level resolved by the group (default WARNING)."""
    ctx = ctx or click.get_current_context()
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", logging.WARNING))


def is_quiet(ctx: click.Context | None = None) -> bool:
    """True when ``-q`` asked for the essentials only."""
    return get_effective_verbosity(ctx) >= logging.ERROR


def is_verbose(ctx: click.Context | None = None) -> bool:
    """True when at least one ``-v`` was given."""
    return get_effective_verbosity(ctx) <= logging.INFO


def load_buffer(path: Path) -> str:
    """Read ``path``, translating OS/decoding errors into CLI errors."""
    try:
        return read_source(path)
    except (OSError, UnicodeDecodeError) as e:
        raise from_os_error(e, path) from e


def report_anchors(
    console: ConsoleLike,
    anchors: Sequence[Anchor],
    label: str,
    *,
    selected: Anchor | None = None,
) -> None:
    """Print every anchor occurrence, flagging the one a transform acted on."""
    for n, anchor in enumerate(anchors, start=1):
        tag = console.styled("  <- selected", fg="cyan") if anchor == selected else ""
        console.print(f"  {label} #{n}: offset {anchor.offset}, line {anchor.line}{tag}")


def _failed_anchor(exc: SrctrimError) -> Anchor | None:
    offset = getattr(exc, "marker_offset", None)
    return next((a for a in exc.anchors if a.offset == offset), None)


def _outcome(console: ConsoleLike, path: Path, message: str, *, quiet: bool, fg: str) -> None:
    # quiet runs skip the path header, so the outcome line names the file
    text = f"{path}: {message}" if quiet else f"  {message}"
    console.print(console.styled(text, fg=fg))


def run_patch(
    path: Path,
    transform: Callable[[str], PatchResult],
    *,
    label: str,
    apply_changes: bool,
    diff: bool,
    backup: bool,
) -> ExitCode:
    """Read ``path``, transform it, report, then preview or write.

    With ``-q`` only the outcome line (and a requested diff) is printed; ``-v``
    adds line counts before and after the cut.

    Args:
        path (Path): File to patch.
        transform (Callable[[str], PatchResult]): Pure transform to run.
        label (str): Noun used when reporting anchors ("marker", "phrase", ...).
        apply_changes (bool): Write the result; otherwise dry run.
        diff (bool): Print a unified diff of the change.
        backup (bool): Copy the original aside before writing.

    Returns:
        ExitCode: ``SUCCESS`` when written or already up to date,
        ``WOULD_CHANGE`` for a dry run with pending changes.

    Raises:
        SrctrimCliError: On any transform, read or write failure. The file is
            left untouched.
    """
    console = get_console()
    quiet = is_quiet()
    buffer = load_buffer(path)
    if not quiet:
        console.print(console.styled(f"{path}", bold=True))
    try:
        result = transform(buffer)
    except SrctrimError as e:
        logger.debug("transform failed on %s: %s", path, e)
        if not quiet:
            report_anchors(console, e.anchors, label, selected=_failed_anchor(e))
        raise from_core_error(e) from e
    except ValueError as e:
        raise SrctrimUsageError(str(e)) from e

    if not quiet:
        report_anchors(console, result.anchors, label, selected=result.selected)
        if result.cut_point is not None:
            line = result.original.count("\n", 0, result.cut_point) + 1
            console.print(f"  cut point: offset {result.cut_point}, line {line}")

    if not result.changed:
        _outcome(console, path, "already up to date; nothing written", quiet=quiet, fg="green")
        return ExitCode.SUCCESS

    if is_verbose():
        lines_before = result.original.count("\n") + 1
        lines_after = result.text.count("\n") + 1
        console.print(f"  lines: {lines_before} -> {lines_after}")

    if diff:
        console.print(
            render_patch(
                unified_diff(result.original, result.text, path.name),
                color=console.enable_color,
            ),
            nl=False,
        )

    before = len(result.original.encode("utf-8"))
    after = len(result.text.encode("utf-8"))
    if not apply_changes:
        _outcome(
            console,
            path,
            f"would change ({before} -> {after} bytes); re-run with --apply to write",
            quiet=quiet,
            fg="yellow",
        )
        return ExitCode.WOULD_CHANGE

    try:
        if backup:
            saved = backup_file(path)
            if not quiet:
                console.print(f"  backup: {saved}")
        written = write_atomic(path, result.text)
    except OSError as e:
        raise from_os_error(e, path) from e
    _outcome(console, path, f"wrote {written} bytes (was {before})", quiet=quiet, fg="green")
    return ExitCode.SUCCESS
