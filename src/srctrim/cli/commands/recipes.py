# topmark:header:start
#
#   project      : SrcTrim
#   file         : recipes.py
#   file_relpath : src/srctrim/cli/commands/recipes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim ``recipes`` command: list the effective recipes and where they come from."""

from __future__ import annotations

from pathlib import Path

import click

from srctrim.cli.cmd_common import get_console, is_quiet, is_verbose
from srctrim.cli.commands.run import resolve_recipes
from srctrim.cli.options import CONTEXT_SETTINGS, common_config_options


@click.command(
    name="recipes",
    help="List configured recipes.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@click.pass_context
def recipes_command(
    ctx: click.Context,
    *,
    config_paths: tuple[Path, ...],
    no_config: bool,
) -> None:
    """Print one block per recipe: name, transform, target and source.

    ``-q`` prints the names only; ``-v`` adds the backup flag and trailer size.
    """
    console = get_console(ctx)
    recipes = resolve_recipes(config_paths, no_config)
    for name in sorted(recipes):
        recipe = recipes[name]
        if is_quiet(ctx):
            console.print(name)
            continue
        console.print(console.styled(name, bold=True))
        console.print(f"  {recipe.describe()}")
        console.print(f"  target: {recipe.target or '(pass PATH)'}")
        console.print(f"  source: {recipe.source or 'bundled defaults'}")
        if is_verbose(ctx):
            console.print(f"  backup: {'on' if recipe.backup else 'off'}")
            console.print(f"  trailer: {len(recipe.trailer.splitlines())} line(s)")
