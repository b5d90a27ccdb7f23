# topmark:header:start
#
#   project      : SrcTrim
#   file         : tail.py
#   file_relpath : src/srctrim/cli/commands/tail.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim ``tail`` command: make a file end with a terminal statement."""

from __future__ import annotations

from functools import partial
from pathlib import Path

import click

from srctrim.cli.cmd_common import run_patch
from srctrim.cli.options import CONTEXT_SETTINGS, common_write_options
from srctrim.core.patcher import ensure_terminal_statement


@click.command(
    name="tail",
    help="Drop anything after the last terminal statement, or append it if missing.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--terminal",
    "-t",
    default="module.exports = app;",
    show_default=True,
    help="Statement the file must end with.",
)
@common_write_options
@click.pass_context
def tail_command(
    ctx: click.Context,
    *,
    path: Path,
    terminal: str,
    apply_changes: bool,
    diff: bool,
    backup: bool,
) -> None:
    """Ensure ``path`` ends with ``terminal``."""
    code = run_patch(
        path,
        partial(ensure_terminal_statement, terminal=terminal),
        label="terminal",
        apply_changes=apply_changes,
        diff=diff,
        backup=backup,
    )
    ctx.exit(int(code))
