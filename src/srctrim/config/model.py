# topmark:header:start
#
#   project      : SrcTrim
#   file         : model.py
#   file_relpath : src/srctrim/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Recipe model.

A *recipe* is a named, reusable truncation: which file to patch, which
transform to run, and with which anchor and trailer. Recipes are immutable once
built; loaders build them from plain TOML tables via
[`Recipe.from_table`][srctrim.config.model.Recipe.from_table].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from srctrim.config.keys import Toml
from srctrim.config.logging import SrctrimLogger, get_logger
from srctrim.core.errors import ConfigError
from srctrim.core.patcher import (
    MarkerPolicy,
    dedupe_sections,
    ensure_terminal_statement,
    truncate_at_balanced_block,
)
from srctrim.core.scanner import ScanMode

if TYPE_CHECKING:
    from collections.abc import Mapping

    from srctrim.core.patcher import PatchResult

logger: SrctrimLogger = get_logger(__name__)


class RecipeMode(str, Enum):
    """Transform selected by a recipe."""

    BLOCK = "block"
    DEDUPE = "dedupe"
    TAIL = "tail"


def _enum_value(enum_cls: type[Enum], raw: object, key: str, name: str) -> Any:
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise ConfigError(f"Recipe {name!r}: {key} must be one of {allowed}, got {raw!r}") from None


def _str_value(table: Mapping[str, Any], key: str, name: str) -> str | None:
    raw = table.get(key)
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ConfigError(f"Recipe {name!r}: {key} must be a string")
    return raw


@dataclass(frozen=True)
class Recipe:
    """An immutable, validated truncation recipe.

    Attributes:
        name (str): Recipe name (the TOML table key).
        mode (RecipeMode): Transform to run.
        target (Path | None): File to patch; None means it must be given on the CLI.
        marker (str | None): Block-mode anchor.
        phrases (tuple[str, ...]): Dedupe-mode phrase alternatives.
        terminal (str | None): Tail-mode terminal statement.
        trailer (str): Text appended after the cut (block and dedupe modes).
        occurrence (MarkerPolicy): Which marker occurrence is authoritative.
        scan (ScanMode): Brace scanner flavor.
        backup (bool): Save a timestamped copy before writing.
        source (Path | None): Config file that declared this recipe.
    """

    name: str
    mode: RecipeMode
    target: Path | None = None
    marker: str | None = None
    phrases: tuple[str, ...] = field(default_factory=tuple)
    terminal: str | None = None
    trailer: str = ""
    occurrence: MarkerPolicy = MarkerPolicy.LAST
    scan: ScanMode = ScanMode.NAIVE
    backup: bool = False
    source: Path | None = None

    @classmethod
    def from_table(cls, name: str, table: Mapping[str, Any], base_dir: Path) -> Recipe:
        """Build a recipe from a TOML table.

        Relative ``target`` and ``trailer_file`` paths are anchored to ``base_dir``
        (the directory of the declaring config file).

        Raises:
            ConfigError: On unknown modes/values, missing required keys, or an
                unreadable ``trailer_file``.
        """
        mode: RecipeMode = _enum_value(RecipeMode, table.get(Toml.KEY_MODE), Toml.KEY_MODE, name)

        target_raw = _str_value(table, Toml.KEY_TARGET, name)
        target = (base_dir / target_raw).resolve() if target_raw else None

        trailer = _str_value(table, Toml.KEY_TRAILER, name)
        trailer_file = _str_value(table, Toml.KEY_TRAILER_FILE, name)
        if trailer is not None and trailer_file is not None:
            raise ConfigError(
                f"Recipe {name!r}: set either {Toml.KEY_TRAILER} or {Toml.KEY_TRAILER_FILE}"
            )
        if trailer_file is not None:
            trailer_path = (base_dir / trailer_file).resolve()
            try:
                trailer = trailer_path.read_text(encoding="utf-8")
            except OSError as e:
                raise ConfigError(f"Recipe {name!r}: cannot read {trailer_path}: {e}") from e

        phrases_raw = table.get(Toml.KEY_PHRASES, [])
        if isinstance(phrases_raw, str):
            phrases_raw = [phrases_raw]
        if not isinstance(phrases_raw, list) or not all(
            isinstance(p, str) and p for p in phrases_raw
        ):
            raise ConfigError(f"Recipe {name!r}: {Toml.KEY_PHRASES} must be a list of strings")

        backup = table.get(Toml.KEY_BACKUP, False)
        if not isinstance(backup, bool):
            raise ConfigError(f"Recipe {name!r}: {Toml.KEY_BACKUP} must be a boolean")

        recipe = cls(
            name=name,
            mode=mode,
            target=target,
            marker=_str_value(table, Toml.KEY_MARKER, name),
            phrases=tuple(phrases_raw),
            terminal=_str_value(table, Toml.KEY_TERMINAL, name),
            trailer=trailer or "",
            occurrence=_enum_value(
                MarkerPolicy, table.get(Toml.KEY_OCCURRENCE, "last"), Toml.KEY_OCCURRENCE, name
            ),
            scan=_enum_value(ScanMode, table.get(Toml.KEY_SCAN, "naive"), Toml.KEY_SCAN, name),
            backup=backup,
        )
        recipe.validate()
        return recipe

    def validate(self) -> None:
        """Check that the keys required by ``mode`` are present.

        Raises:
            ConfigError: If a required key is missing.
        """
        missing: str | None = None
        if self.mode is RecipeMode.BLOCK and not self.marker:
            missing = Toml.KEY_MARKER
        elif self.mode is RecipeMode.DEDUPE and not self.phrases:
            missing = Toml.KEY_PHRASES
        elif self.mode is RecipeMode.TAIL and not (self.terminal and self.terminal.strip()):
            missing = Toml.KEY_TERMINAL
        if missing:
            raise ConfigError(f"Recipe {self.name!r} ({self.mode.value}) requires {missing!r}")

    def transform(self, buffer: str) -> PatchResult:
        """Run this recipe's transform on ``buffer``.

        Raises:
            ConfigError: If a key required by ``mode`` is missing.
        """
        self.validate()
        logger.debug("running recipe %s (%s)", self.name, self.mode.value)
        if self.mode is RecipeMode.BLOCK:
            return truncate_at_balanced_block(
                buffer,
                cast("str", self.marker),
                self.trailer,
                policy=self.occurrence,
                scan_mode=self.scan,
            )
        if self.mode is RecipeMode.DEDUPE:
            return dedupe_sections(buffer, self.phrases, self.trailer)
        return ensure_terminal_statement(buffer, cast("str", self.terminal))

    def describe(self) -> str:
        """One-line human description."""
        if self.mode is RecipeMode.BLOCK:
            anchor = (
                f"marker={self.marker!r} occurrence={self.occurrence.value} "
                f"scan={self.scan.value}"
            )
        elif self.mode is RecipeMode.DEDUPE:
            anchor = "phrases=" + ", ".join(repr(p) for p in self.phrases)
        else:
            anchor = f"terminal={self.terminal!r}"
        return f"{self.mode.value}: {anchor}"
