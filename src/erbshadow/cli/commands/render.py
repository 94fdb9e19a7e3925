# topmark:header:start
#
#   project      : ErbShadow
#   file         : render.py
#   file_relpath : src/erbshadow/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErbShadow `render` command.

Reads a template and the syntax tree an HTML+ERB parser produced for it, and
writes the shadow source: a byte string of the same length and line layout
holding only the template's Ruby code.

Examples:
  Render to stdout:

    $ erbshadow render app/views/posts/show.html.erb --ast show.ast.json

  Read the tree from STDIN and write to a file:

    $ herb parse --json show.html.erb | erbshadow render show.html.erb --ast - -o show.rb

  Force single quotes for emptied attribute values:

    $ erbshadow render show.html.erb --ast show.ast.json --quote-style single
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from erbshadow.api import render_shadow
from erbshadow.cli.config_resolver import common_config_options, resolve_config
from erbshadow.cli.errors import (
    ErbShadowDataError,
    ErbShadowFileNotFoundError,
    ErbShadowInternalError,
    ErbShadowIOError,
)
from erbshadow.config.logging import get_logger
from erbshadow.config.model import QuoteStyle
from erbshadow.core.errors import InvariantViolationError, TreeFormatError
from erbshadow.core.tree import load_tree_json

if TYPE_CHECKING:
    from erbshadow.api import ShadowResult
    from erbshadow.cli.console import ClickConsole
    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.config.model import Config
    from erbshadow.core.nodes import Node

logger: ErbShadowLogger = get_logger(__name__)

STDIN_MARKER: str = "-"


def _read_bytes(path: Path, what: str) -> bytes:
    if not path.exists():
        raise ErbShadowFileNotFoundError(f"{what} not found: {path}")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ErbShadowIOError(f"Cannot read {what.lower()} {path}: {exc}") from exc


def _read_ast(ast: str) -> bytes:
    if ast == STDIN_MARKER:
        return click.get_binary_stream("stdin").read()
    return _read_bytes(Path(ast), "AST file")


def _report_diagnostics(console: ClickConsole, result: ShadowResult) -> None:
    for diag in result.diagnostics:
        line: str = f"[{diag.level.value}] {diag.message}"
        console.note(diag.level.color(line) if console.enable_color else line)


@click.command(
    name="render",
    help="Write the shadow Ruby source of an ERB template.",
    epilog="The shadow source keeps every byte offset and line break of TEMPLATE.",
)
@click.argument("template", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--ast",
    "ast",
    required=True,
    metavar="AST.json",
    help="Parser output for TEMPLATE as JSON ('-' reads STDIN).",
)
@click.option(
    "--quote-style",
    "quote_style",
    type=click.Choice([s.value for s in QuoteStyle], case_sensitive=False),
    default=None,
    help="Quote character of emptied attribute values (overrides config files).",
)
@common_config_options
@click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the shadow source to this file instead of stdout.",
)
def render_command(
    *,
    template: Path,
    ast: str,
    quote_style: str | None,
    config_paths: tuple[Path, ...],
    no_config: bool,
    rubocop_config: Path | None,
    output: Path | None,
) -> None:
    """Render the shadow source of TEMPLATE.

    Args:
        template (Path): The ERB template.
        ast (str): Path of the parser's JSON output, or ``-`` for STDIN.
        quote_style (str | None): Explicit quote style.
        config_paths (tuple[Path, ...]): Extra TOML config files.
        no_config (bool): Skip config discovery.
        rubocop_config (Path | None): Explicit RuboCop config file.
        output (Path | None): Destination file; stdout when ``None``.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", logging.WARNING)

    source: bytes = _read_bytes(template, "Template")
    config: Config = resolve_config(
        anchor=template.resolve(),
        config_paths=config_paths,
        no_config=no_config,
        rubocop_config=rubocop_config,
        quote_style=quote_style,
    )

    try:
        root: Node = load_tree_json(_read_ast(ast), source)
        result: ShadowResult = render_shadow(source, root, config=config)
    except TreeFormatError as exc:
        raise ErbShadowDataError(f"{template}: {exc}") from exc
    except InvariantViolationError as exc:
        logger.error("Invariant broken while rendering %s: %s", template, exc)
        raise ErbShadowInternalError(f"{template}: {exc}") from exc

    if vlevel <= logging.INFO:
        _report_diagnostics(console, result)
        if result.is_empty:
            console.note(f"{template}: no Ruby code to analyze")

    if output is None:
        console.write_bytes(result.shadow)
        return
    try:
        output.write_bytes(result.shadow)
    except OSError as exc:
        raise ErbShadowIOError(f"Cannot write {output}: {exc}") from exc
    logger.info("Wrote %d bytes to %s", len(result.shadow), output)
