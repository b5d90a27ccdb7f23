# topmark:header:start
#
#   project      : SrcTrim
#   file         : main.py
#   file_relpath : src/srctrim/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim command-line entry point.

Group-level options (verbosity, color) are resolved once and placed into
``ctx.obj`` together with the console; subcommands read them from there.
"""

from __future__ import annotations

import click

from srctrim.cli.commands.balance import balance_command
from srctrim.cli.commands.block import block_command
from srctrim.cli.commands.dedupe import dedupe_command
from srctrim.cli.commands.recipes import recipes_command
from srctrim.cli.commands.run import run_command
from srctrim.cli.commands.show import show_command
from srctrim.cli.commands.tail import tail_command
from srctrim.cli.commands.version import version_command
from srctrim.cli.console import ClickConsole
from srctrim.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from srctrim.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color, console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` and ``color`` are set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (str | None): Explicit ``--color`` value, if any.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.ensure_object(dict)

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    setup_logging(level=resolve_env_log_level())

    mode = ColorMode.NEVER if no_color else ColorMode(color_mode or ColorMode.AUTO.value)
    enable_color = resolve_color_mode(cli_mode=mode)
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Truncate generated source files at structurally balanced boundaries.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the SrcTrim CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    if ctx.invoked_subcommand is None:
        console = ctx.obj["console"]
        console.print("Hint: use 'srctrim recipes' to list the configured recipes.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(block_command)
cli.add_command(dedupe_command)
cli.add_command(tail_command)
cli.add_command(run_command)
cli.add_command(recipes_command)
cli.add_command(balance_command)
cli.add_command(show_command)
cli.add_command(version_command)

if __name__ == "__main__":
    cli()
