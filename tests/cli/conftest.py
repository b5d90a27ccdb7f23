# topmark:header:start
#
#   project      : SrcTrim
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running SrcTrim in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so relative paths and recipe targets resolve
against the temporary test directory.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterator, Sequence

import pytest
from click.testing import CliRunner, Result

from srctrim.cli.exit_codes import ExitCode
from srctrim.cli.main import cli
from srctrim.config.logging import TRACE_LEVEL, setup_logging

if TYPE_CHECKING:
    from pathlib import Path

SERVER_JS = """\
const app = express();

app.get('/api/items', (req, res) => {
    res.json([]);
});

app.use('/api/*', (req, res) => {
    res.status(404).json({ error: 'not found' });
});

// half-written duplicate
app.get('/api/ite
"""


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Re-attach logging to the real stderr after the CLI pointed it at CliRunner's stream."""
    yield
    setup_logging(level=TRACE_LEVEL)


def run_cli_in(tmp_path: Path, argv: Sequence[str]) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Color is always disabled so assertions can match plain text.

    Args:
        tmp_path (Path): Directory used as the CWD for the invocation.
        argv (Sequence[str]): Arguments after the program name (subcommand first).

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, ["--no-color", *argv])
    finally:
        os.chdir(cwd)


def run_cli(argv: Sequence[str]) -> Result:
    """Invoke the CLI without changing the working directory."""
    return CliRunner().invoke(cli, ["--no-color", *argv])


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_WOULD_CHANGE(result: Result) -> None:
    """Assert that a dry run reported pending changes (code 2)."""
    # WOULD_CHANGE is a normal outcome; Click's own usage errors also exit 2
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output
    assert "would change" in result.output


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``."""
    assert result.exit_code == code, result.output
