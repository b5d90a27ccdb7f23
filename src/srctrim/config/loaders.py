# topmark:header:start
#
#   project      : SrcTrim
#   file         : loaders.py
#   file_relpath : src/srctrim/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load recipe configuration from TOML sources.

Sources, lowest precedence first:

1. the bundled ``srctrim-default.toml`` resource,
2. discovered project files: ``pyproject.toml`` (``[tool.srctrim]``) and
   ``srctrim.toml``, from the filesystem root down to the working directory,
3. files passed explicitly (``--config``), in order.

A later source replaces an earlier recipe with the same name as a whole.
Parsing is done with `tomlkit`.
"""

from __future__ import annotations

from dataclasses import replace
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from srctrim.config.keys import Toml
from srctrim.config.logging import SrctrimLogger, get_logger
from srctrim.config.model import Recipe
from srctrim.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE
from srctrim.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger: SrctrimLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def parse_toml_text(text: str, origin: str) -> TomlTable:
    """Parse TOML text into a plain dict.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        raise ConfigError(f"Invalid TOML in {origin}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    return parse_toml_text(text, str(path))


def extract_recipe_tables(data: TomlTable, *, from_pyproject: bool) -> dict[str, Any]:
    """Return the ``recipes`` table of a parsed document (``[tool.srctrim]`` for pyproject)."""
    if from_pyproject:
        tool = data.get(Toml.SECTION_TOOL, {})
        data = tool.get(Toml.SECTION_TOOL_NAME, {}) if isinstance(tool, dict) else {}
        if not isinstance(data, dict):
            raise ConfigError(f"[{Toml.SECTION_TOOL}.{Toml.SECTION_TOOL_NAME}] must be a table")
    recipes = data.get(Toml.SECTION_RECIPES, {})
    if not isinstance(recipes, dict):
        raise ConfigError(f"[{Toml.SECTION_RECIPES}] must be a table of tables")
    return recipes


def recipes_from_dict(
    data: TomlTable, base_dir: Path, *, source: Path | None, from_pyproject: bool = False
) -> dict[str, Recipe]:
    """Build recipes from a parsed document.

    Raises:
        ConfigError: If a recipe entry is not a table or fails validation.
    """
    out: dict[str, Recipe] = {}
    for name, table in extract_recipe_tables(data, from_pyproject=from_pyproject).items():
        if not isinstance(table, dict):
            raise ConfigError(f"Recipe {name!r} must be a table")
        recipe = Recipe.from_table(name, table, base_dir)
        out[name] = replace(recipe, source=source)
    return out


def load_default_recipes(base_dir: Path | None = None) -> dict[str, Recipe]:
    """Load the bundled default recipes.

    Their relative ``target`` paths are anchored to ``base_dir`` (default: CWD),
    since the packaged resource has no meaningful directory of its own.
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    text = resource.read_text(encoding="utf-8")
    data = parse_toml_text(text, DEFAULT_TOML_CONFIG_NAME)
    return recipes_from_dict(data, base_dir or Path.cwd(), source=None)


def discover_config_files(start: Path) -> list[Path]:
    """Return project config files from the filesystem root down to ``start``.

    Within one directory ``pyproject.toml`` precedes ``srctrim.toml`` so the
    dedicated file wins. A ``pyproject.toml`` without ``[tool.srctrim]`` is skipped.
    """
    found: list[Path] = []
    for directory in reversed([start, *start.parents]):
        pyproject = directory / Toml.PYPROJECT_FILE_NAME
        if pyproject.is_file():
            tool = load_toml_dict(pyproject).get(Toml.SECTION_TOOL, {})
            if isinstance(tool, dict) and Toml.SECTION_TOOL_NAME in tool:
                found.append(pyproject)
        dedicated = directory / Toml.CONFIG_FILE_NAME
        if dedicated.is_file():
            found.append(dedicated)
    logger.debug("discovered config files: %s", found)
    return found


def load_recipes(
    config_paths: Iterable[Path] = (),
    *,
    no_config: bool = False,
    cwd: Path | None = None,
) -> dict[str, Recipe]:
    """Merge recipes from all sources.

    Args:
        config_paths (Iterable[Path]): Explicit config files (highest precedence).
        no_config (bool): Skip discovery of project config files.
        cwd (Path | None): Directory to discover from (default: CWD).

    Returns:
        dict[str, Recipe]: Recipes by name.

    Raises:
        ConfigError: If any source is unreadable or invalid.
    """
    base = (cwd or Path.cwd()).resolve()
    recipes = load_default_recipes(base)
    sources: list[Path] = [] if no_config else discover_config_files(base)
    sources.extend(Path(p).resolve() for p in config_paths)
    for path in sources:
        data = load_toml_dict(path)
        layer = recipes_from_dict(
            data,
            path.parent,
            source=path,
            from_pyproject=path.name == Toml.PYPROJECT_FILE_NAME,
        )
        logger.info("loaded %d recipe(s) from %s", len(layer), path)
        recipes.update(layer)
    return recipes
