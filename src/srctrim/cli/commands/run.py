# topmark:header:start
#
#   project      : SrcTrim
#   file         : run.py
#   file_relpath : src/srctrim/cli/commands/run.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim ``run`` command: execute a named recipe from configuration.

Examples:
  Preview the bundled recipe against ./server.js:

    $ srctrim run close-api-404

  Apply a project recipe to an explicit file:

    $ srctrim run dedupe-main-page build/server.js --apply
"""

from __future__ import annotations

from pathlib import Path

import click

from srctrim.cli.cmd_common import get_console, is_quiet, is_verbose, run_patch
from srctrim.cli.errors import SrctrimUsageError, from_core_error
from srctrim.cli.options import CONTEXT_SETTINGS, common_config_options, common_write_options
from srctrim.config.loaders import load_recipes
from srctrim.config.logging import SrctrimLogger, get_logger
from srctrim.config.model import Recipe, RecipeMode
from srctrim.core.errors import ConfigError

logger: SrctrimLogger = get_logger(__name__)

_LABELS = {
    RecipeMode.BLOCK: "marker",
    RecipeMode.DEDUPE: "phrase",
    RecipeMode.TAIL: "terminal",
}


def resolve_recipes(config_paths: tuple[Path, ...], no_config: bool) -> dict[str, Recipe]:
    """Load recipes, translating configuration errors into CLI errors."""
    try:
        return load_recipes(config_paths, no_config=no_config)
    except ConfigError as e:
        raise from_core_error(e) from e


@click.command(
    name="run",
    help="Run a named recipe from srctrim.toml / [tool.srctrim] / bundled defaults.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("recipe_name", metavar="RECIPE")
@click.argument(
    "path", required=False, type=click.Path(dir_okay=False, path_type=Path), default=None
)
@common_config_options
@common_write_options
@click.pass_context
def run_command(
    ctx: click.Context,
    *,
    recipe_name: str,
    path: Path | None,
    config_paths: tuple[Path, ...],
    no_config: bool,
    apply_changes: bool,
    diff: bool,
    backup: bool,
) -> None:
    """Run recipe ``recipe_name`` on ``path`` (default: the recipe's target)."""
    recipes = resolve_recipes(config_paths, no_config)
    recipe = recipes.get(recipe_name)
    if recipe is None:
        known = ", ".join(sorted(recipes)) or "none"
        raise SrctrimUsageError(f"Unknown recipe {recipe_name!r} (known: {known})")

    target = path or recipe.target
    if target is None:
        raise SrctrimUsageError(f"Recipe {recipe_name!r} has no target; pass PATH.")

    console = get_console(ctx)
    if not is_quiet(ctx):
        console.print(f"recipe {recipe.name}: {recipe.describe()}")
    if is_verbose(ctx):
        console.print(f"  source: {recipe.source or 'bundled defaults'}")
    logger.info("running recipe %s on %s", recipe.name, target)
    code = run_patch(
        target,
        recipe.transform,
        label=_LABELS[recipe.mode],
        apply_changes=apply_changes,
        diff=diff,
        backup=backup or recipe.backup,
    )
    ctx.exit(int(code))
