# topmark:header:start
#
#   project      : SrcTrim
#   file         : dedupe.py
#   file_relpath : src/srctrim/cli/commands/dedupe.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim ``dedupe`` command.

Drops everything from the second line containing a phrase and appends a
trailer. Exits with ``NOTHING_TO_DO`` (3) when the phrase occurs only once.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path

import click

from srctrim.cli.cmd_common import run_patch
from srctrim.cli.options import (
    CONTEXT_SETTINGS,
    common_trailer_options,
    common_write_options,
    resolve_trailer,
)
from srctrim.core.patcher import dedupe_sections


@click.command(
    name="dedupe",
    help="Remove a duplicated trailing section, starting at the second phrase occurrence.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--phrase",
    "-p",
    "phrases",
    multiple=True,
    required=True,
    help="Phrase that marks the section; repeat for alternatives.",
)
@common_trailer_options
@common_write_options
@click.pass_context
def dedupe_command(
    ctx: click.Context,
    *,
    path: Path,
    phrases: tuple[str, ...],
    trailer: str | None,
    trailer_file: Path | None,
    apply_changes: bool,
    diff: bool,
    backup: bool,
) -> None:
    """Run line-based duplicate removal on ``path``."""
    transform = partial(
        dedupe_sections,
        phrase=phrases,
        trailer=resolve_trailer(trailer, trailer_file),
    )
    code = run_patch(
        path,
        transform,
        label="phrase",
        apply_changes=apply_changes,
        diff=diff,
        backup=backup,
    )
    ctx.exit(int(code))
