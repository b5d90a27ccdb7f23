# topmark:header:start
#
#   project      : SrcTrim
#   file         : show.py
#   file_relpath : src/srctrim/cli/commands/show.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim ``show`` command: print numbered lines around a line of interest."""

from __future__ import annotations

from pathlib import Path

import click

from srctrim.cli.cmd_common import get_console, is_quiet, load_buffer
from srctrim.cli.errors import SrctrimUsageError
from srctrim.cli.options import CONTEXT_SETTINGS
from srctrim.core.context import context_window


@click.command(
    name="show",
    help="Print the lines around LINE (1-based) with line numbers.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--line", "-l", "line_no", type=int, required=True, help="Line to center on.")
@click.option(
    "--radius",
    "-r",
    type=click.IntRange(min=0),
    default=5,
    show_default=True,
    help="Lines of context on each side.",
)
@click.pass_context
def show_command(ctx: click.Context, *, path: Path, line_no: int, radius: int) -> None:
    """Print the context window; the target line is flagged with ``>>>``.

    With ``-q`` only the target line is printed.
    """
    console = get_console(ctx)
    lines = load_buffer(path).split("\n")
    try:
        window = context_window(lines, line_no, radius)
    except ValueError as e:
        raise SrctrimUsageError(str(e)) from e
    width = len(str(window[-1].number))
    if is_quiet(ctx):
        window = [entry for entry in window if entry.is_target]
    for entry in window:
        prefix = ">>>" if entry.is_target else "   "
        row = f"{prefix} {entry.number:>{width}}: {entry.text}"
        console.print(console.styled(row, bold=True) if entry.is_target else row)
