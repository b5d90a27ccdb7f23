# topmark:header:start
#
#   project      : SrcTrim
#   file         : test_recipe_loading.py
#   file_relpath : tests/config/test_recipe_loading.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for recipe discovery, precedence and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from srctrim.config.loaders import (
    discover_config_files,
    load_default_recipes,
    load_recipes,
    parse_toml_text,
    recipes_from_dict,
)
from srctrim.config.model import Recipe, RecipeMode
from srctrim.core.errors import ConfigError
from srctrim.core.patcher import MarkerPolicy
from srctrim.core.scanner import ScanMode


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_bundled_defaults(tmp_path: Path) -> None:
    recipes = load_default_recipes(tmp_path)
    assert set(recipes) == {"close-api-404", "dedupe-main-page", "ensure-exports"}

    block = recipes["close-api-404"]
    assert block.mode is RecipeMode.BLOCK
    assert block.marker == "app.use('/api/*'"
    assert block.occurrence is MarkerPolicy.LAST
    assert block.target == (tmp_path / "server.js").resolve()
    assert block.trailer.startswith("// ====")
    assert block.trailer.endswith("module.exports = app;")
    assert block.marker not in block.trailer
    assert block.source is None

    dedupe = recipes["dedupe-main-page"]
    assert dedupe.phrases == ("ГЛАВНАЯ СТРАНИЦА", "Главная страница")
    assert recipes["ensure-exports"].terminal == "module.exports = app;"


def test_project_file_overrides_default_by_name(tmp_path: Path) -> None:
    cfg = _write(
        tmp_path / "srctrim.toml",
        '[recipes.close-api-404]\nmode = "tail"\nterminal = "done();"\n',
    )
    recipes = load_recipes(cwd=tmp_path)
    assert recipes["close-api-404"].mode is RecipeMode.TAIL
    assert recipes["close-api-404"].source == cfg.resolve()
    assert "dedupe-main-page" in recipes


def test_pyproject_tool_table_is_discovered(tmp_path: Path) -> None:
    _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "x"\n\n[tool.srctrim.recipes.mine]\nmode = "block"\nmarker = "M("\n',
    )
    recipes = load_recipes(cwd=tmp_path)
    assert recipes["mine"].marker == "M("


def test_pyproject_without_tool_table_is_skipped(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    assert tmp_path / "pyproject.toml" not in discover_config_files(tmp_path)


def test_dedicated_file_wins_over_pyproject_in_same_directory(tmp_path: Path) -> None:
    _write(
        tmp_path / "pyproject.toml",
        '[tool.srctrim.recipes.r]\nmode = "tail"\nterminal = "a;"\n',
    )
    _write(tmp_path / "srctrim.toml", '[recipes.r]\nmode = "tail"\nterminal = "b;"\n')
    base = tmp_path.resolve()
    found = discover_config_files(base)
    assert found[-2:] == [base / "pyproject.toml", base / "srctrim.toml"]
    assert load_recipes(cwd=tmp_path)["r"].terminal == "b;"


def test_nearer_directory_wins(tmp_path: Path) -> None:
    _write(tmp_path / "srctrim.toml", '[recipes.r]\nmode = "tail"\nterminal = "outer;"\n')
    inner = tmp_path / "sub"
    _write(inner / "srctrim.toml", '[recipes.r]\nmode = "tail"\nterminal = "inner;"\n')
    assert load_recipes(cwd=inner)["r"].terminal == "inner;"


def test_no_config_skips_discovery(tmp_path: Path) -> None:
    _write(tmp_path / "srctrim.toml", '[recipes.extra]\nmode = "tail"\nterminal = "x;"\n')
    assert "extra" not in load_recipes(no_config=True, cwd=tmp_path)


def test_explicit_config_resolves_paths_against_its_directory(tmp_path: Path) -> None:
    conf_dir = tmp_path / "conf"
    _write(conf_dir / "tail.js", "app.listen(1);\n")
    cfg = _write(
        conf_dir / "custom.toml",
        '[recipes.c]\nmode = "block"\nmarker = "M("\n'
        'target = "../src/server.js"\ntrailer_file = "tail.js"\nbackup = true\n',
    )
    recipes = load_recipes([cfg], no_config=True, cwd=tmp_path)
    recipe = recipes["c"]
    assert recipe.target == (tmp_path / "src" / "server.js").resolve()
    assert recipe.trailer == "app.listen(1);\n"
    assert recipe.backup is True


def test_invalid_toml(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "bad.toml", "[recipes.x\n")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_recipes([cfg], no_config=True, cwd=tmp_path)


def test_missing_explicit_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Cannot read"):
        load_recipes([tmp_path / "nope.toml"], no_config=True, cwd=tmp_path)


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ('mode = "slice"', "mode must be one of"),
        ('mode = "block"', "requires 'marker'"),
        ('mode = "dedupe"', "requires 'phrases'"),
        ('mode = "tail"\nterminal = "  "', "requires 'terminal'"),
        ('mode = "dedupe"\nphrases = [1]', "phrases must be a list"),
        ('mode = "block"\nmarker = "m"\nscan = "ast"', "scan must be one of"),
        ('mode = "block"\nmarker = "m"\noccurrence = "middle"', "occurrence must be one of"),
        ('mode = "block"\nmarker = "m"\nbackup = "yes"', "backup must be a boolean"),
        ('mode = "block"\nmarker = 3', "marker must be a string"),
        ('mode = "block"\nmarker = "m"\ntrailer = "t"\ntrailer_file = "f"', "either trailer"),
        ('mode = "block"\nmarker = "m"\ntrailer_file = "missing.js"', "cannot read"),
    ],
)
def test_invalid_recipes(tmp_path: Path, body: str, message: str) -> None:
    data = parse_toml_text(f"[recipes.bad]\n{body}\n", "test")
    with pytest.raises(ConfigError, match=message):
        recipes_from_dict(data, tmp_path, source=None)


def test_recipes_table_must_hold_tables(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="must be a table"):
        recipes_from_dict({"recipes": {"x": 1}}, tmp_path, source=None)


def test_single_phrase_string_is_accepted(tmp_path: Path) -> None:
    recipe = Recipe.from_table("p", {"mode": "dedupe", "phrases": "MAIN"}, tmp_path)
    assert recipe.phrases == ("MAIN",)


def test_recipe_transform_dispatch(tmp_path: Path) -> None:
    block = Recipe.from_table(
        "b",
        {"mode": "block", "marker": "M(", "trailer": "end", "scan": "lexical"},
        tmp_path,
    )
    assert block.scan is ScanMode.LEXICAL
    assert block.transform("M(() => { '}' });\nrest").text == "M(() => { '}' }\n\nend"

    dedupe = Recipe.from_table(
        "d", {"mode": "dedupe", "phrases": ["X"], "trailer": "end"}, tmp_path
    )
    assert dedupe.transform("X\na\nX\nb").text == "X\na\n\nend"

    tail = Recipe.from_table("t", {"mode": "tail", "terminal": "done;"}, tmp_path)
    assert tail.transform("a\ndone;\nb").text == "a\ndone;"


def test_recipe_describe(tmp_path: Path) -> None:
    recipe = Recipe.from_table("b", {"mode": "block", "marker": "M("}, tmp_path)
    assert recipe.describe() == "block: marker='M(' occurrence=last scan=naive"


@pytest.mark.parametrize("mode", [RecipeMode.BLOCK, RecipeMode.TAIL])
def test_transform_of_incomplete_recipe_raises_config_error(mode: RecipeMode) -> None:
    recipe = Recipe(name="bare", mode=mode)
    with pytest.raises(ConfigError, match="requires"):
        recipe.transform("a();\n")
