# topmark:header:start
#
#   project      : SrcTrim
#   file         : block.py
#   file_relpath : src/srctrim/cli/commands/block.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim ``block`` command.

Keeps a file up to the end of the brace block that follows a marker and
appends a trailer. Performs a dry run by default and writes with ``--apply``.

Examples:
  Preview the cut:

    $ srctrim block server.js --marker "app.use('/api/*'" --trailer-file tail.js

  Apply it, keeping a backup:

    $ srctrim block server.js --marker "app.use('/api/*'" --trailer-file tail.js \\
        --apply --backup
"""

from __future__ import annotations

from functools import partial
from pathlib import Path

import click

from srctrim.cli.cmd_common import run_patch
from srctrim.cli.options import (
    CONTEXT_SETTINGS,
    common_scan_options,
    common_trailer_options,
    common_write_options,
    resolve_trailer,
)
from srctrim.core.patcher import MarkerPolicy, truncate_at_balanced_block
from srctrim.core.scanner import ScanMode


@click.command(
    name="block",
    help="Truncate after the brace block that follows a marker, then append a trailer.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--marker", "-m", required=True, help="Literal text that anchors the block.")
@click.option(
    "--first",
    "use_first",
    is_flag=True,
    help="Anchor on the first marker occurrence instead of the last.",
)
@common_trailer_options
@common_scan_options
@common_write_options
@click.pass_context
def block_command(
    ctx: click.Context,
    *,
    path: Path,
    marker: str,
    use_first: bool,
    trailer: str | None,
    trailer_file: Path | None,
    scan_mode: str,
    apply_changes: bool,
    diff: bool,
    backup: bool,
) -> None:
    """Run brace-balanced truncation on ``path``."""
    transform = partial(
        truncate_at_balanced_block,
        marker=marker,
        trailer=resolve_trailer(trailer, trailer_file),
        policy=MarkerPolicy.FIRST if use_first else MarkerPolicy.LAST,
        scan_mode=ScanMode(scan_mode),
    )
    code = run_patch(
        path,
        transform,
        label="marker",
        apply_changes=apply_changes,
        diff=diff,
        backup=backup,
    )
    ctx.exit(int(code))
