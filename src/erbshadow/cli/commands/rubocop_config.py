# topmark:header:start
#
#   project      : ErbShadow
#   file         : rubocop_config.py
#   file_relpath : src/erbshadow/cli/commands/rubocop_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErbShadow `rubocop-config` command.

Prints the RuboCop overrides a linter adapter needs when it analyzes shadow
sources: template include globs plus exclusions for the cops that only report
noise caused by blanked markup.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from erbshadow.cli.config_resolver import common_config_options, resolve_config
from erbshadow.config.rubocop import render_rubocop_yaml

if TYPE_CHECKING:
    from erbshadow.cli.console import ClickConsole
    from erbshadow.config.model import Config


@click.command(
    name="rubocop-config",
    help="Print RuboCop overrides for linting shadow sources.",
)
@common_config_options
def rubocop_config_command(
    *,
    config_paths: tuple[Path, ...],
    no_config: bool,
    rubocop_config: Path | None,
) -> None:
    """Print the RuboCop override YAML for the resolved configuration.

    Config discovery starts in the current working directory.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    config: Config = resolve_config(
        anchor=Path.cwd(),
        config_paths=config_paths,
        no_config=no_config,
        rubocop_config=rubocop_config,
    )
    console.print(render_rubocop_yaml(config), nl=False)
