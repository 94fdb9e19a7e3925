# topmark:header:start
#
#   project      : ErbShadow
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running ErbShadow on small template projects.

`project` lays out a template next to its parser output (generated with the
test parser, see `tests.templates`) in a directory that stops config
discovery, so the developer's own config files never leak into a test.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING, Any, Callable, Sequence

import pytest
from click.testing import CliRunner, Result

from erbshadow.cli.exit_codes import ExitCode
from erbshadow.cli.main import cli
from tests.templates import parse_template, to_mapping

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class TemplateFiles:
    """A template on disk and the JSON syntax tree describing it."""

    template: Path
    ast: Path
    ast_json: str


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["version"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input, used
            with ``--ast -``.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text, obj={})


def write_template(directory: Path, template: str, name: str = "show.html.erb") -> TemplateFiles:
    """Write ``template`` and its JSON tree into ``directory``."""
    source, root = parse_template(template)
    template_path: Path = directory / name
    template_path.write_bytes(source)
    ast_json: str = json.dumps(to_mapping(root))
    ast_path: Path = directory / f"{name}.ast.json"
    ast_path.write_text(ast_json, encoding="utf-8")
    return TemplateFiles(template=template_path, ast=ast_path, ast_json=ast_json)


@pytest.fixture
def project(tmp_path: Path) -> Callable[[str], TemplateFiles]:
    """Factory writing templates into an isolated project directory."""
    (tmp_path / "erbshadow.toml").write_text("root = true\n", encoding="utf-8")

    def _make(template: str) -> TemplateFiles:
        return write_template(tmp_path, template)

    return _make


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``."""
    assert result.exit_code == code, result.output
