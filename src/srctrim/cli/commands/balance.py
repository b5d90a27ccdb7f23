# topmark:header:start
#
#   project      : SrcTrim
#   file         : balance.py
#   file_relpath : src/srctrim/cli/commands/balance.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim ``balance`` command.

Read-only brace balance report. Exits 0 when balanced and
``MALFORMED_INPUT`` (5) otherwise, so it can gate a ``block`` run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from srctrim.cli.cmd_common import get_console, get_effective_verbosity, load_buffer
from srctrim.cli.exit_codes import ExitCode
from srctrim.cli.options import CONTEXT_SETTINGS, common_scan_options
from srctrim.core.scanner import ScanMode, brace_balance


@click.command(
    name="balance",
    help="Report the brace balance of a file.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@common_scan_options
@click.pass_context
def balance_command(ctx: click.Context, *, path: Path, scan_mode: str) -> None:
    """Print the final balance and the first problem lines of ``path``."""
    console = get_console(ctx)
    text = load_buffer(path)
    report = brace_balance(text, ScanMode(scan_mode))
    verbosity = get_effective_verbosity(ctx)

    if verbosity >= logging.ERROR:
        verdict = "balanced" if report.is_balanced else f"unbalanced ({report.balance:+d})"
        console.print(f"{path}: {verdict}")
        ctx.exit(int(ExitCode.SUCCESS if report.is_balanced else ExitCode.MALFORMED_INPUT))

    console.print(console.styled(f"{path}", bold=True))
    console.print(f"  balance: {report.balance:+d} ({scan_mode} scan)")
    if report.first_negative_line is not None:
        console.print(f"  first unmatched '}}': line {report.first_negative_line}")
    if report.unclosed_lines:
        limit = None if verbosity <= logging.INFO else 10
        shown = ", ".join(str(n) for n in report.unclosed_lines[:limit])
        console.print(f"  unclosed '{{' opened at line(s): {shown}")
    if verbosity <= logging.DEBUG:
        for n, depth in enumerate(report.line_depths, start=1):
            console.print(f"  {n:>6}: {depth}")

    if report.is_balanced:
        console.print(console.styled("  balanced", fg="green"))
        ctx.exit(int(ExitCode.SUCCESS))
    console.print(console.styled("  unbalanced", fg="yellow"))
    ctx.exit(int(ExitCode.MALFORMED_INPUT))
