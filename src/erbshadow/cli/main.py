# topmark:header:start
#
#   project      : ErbShadow
#   file         : main.py
#   file_relpath : src/erbshadow/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErbShadow Click group.

Group-level options are initialized once and placed into ``ctx.obj``:
``verbosity_level`` gates program output, ``console`` carries it. Internal
logging is configured from ``ERBSHADOW_LOG_LEVEL`` and always goes to stderr.
"""

from __future__ import annotations

import sys

import click

from erbshadow.cli.commands.render import render_command
from erbshadow.cli.commands.rubocop_config import rubocop_config_command
from erbshadow.cli.commands.version import version_command
from erbshadow.cli.console import ClickConsole
from erbshadow.cli.options import common_verbose_options, resolve_verbosity
from erbshadow.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int) -> None:
    """Initialize shared state (verbosity & console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    if "console" not in ctx.obj:
        enable_color: bool = ctx.color if ctx.color is not None else sys.stdout.isatty()
        ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="ErbShadow CLI",
)
@common_verbose_options
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int) -> None:
    """Entry point for the ErbShadow CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet)
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'erbshadow render TEMPLATE --ast AST.json'.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(render_command)

cli.add_command(rubocop_config_command)

if __name__ == "__main__":
    cli()
