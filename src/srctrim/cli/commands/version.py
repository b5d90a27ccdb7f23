# topmark:header:start
#
#   project      : SrcTrim
#   file         : version.py
#   file_relpath : src/srctrim/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim ``version`` command."""

from __future__ import annotations

import click

from srctrim.cli.cmd_common import get_console
from srctrim.constants import SRCTRIM_VERSION


@click.command(name="version", help="Show the current version of SrcTrim.")
def version_command() -> None:
    """Print the installed SrcTrim version."""
    console = get_console()
    console.print(console.styled(SRCTRIM_VERSION, bold=True))
