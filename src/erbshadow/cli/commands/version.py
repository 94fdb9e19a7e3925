# topmark:header:start
#
#   project      : ErbShadow
#   file         : version.py
#   file_relpath : src/erbshadow/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErbShadow `version` command.

Prints the current ErbShadow version as installed in the active Python environment.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from erbshadow.constants import ERBSHADOW_VERSION

if TYPE_CHECKING:
    from erbshadow.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of ErbShadow.",
)
def version_command() -> None:
    """Show the current version of ErbShadow."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    if ctx.obj.get("verbosity_level", logging.WARNING) <= logging.INFO:
        console.print(console.styled("ErbShadow version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(ERBSHADOW_VERSION, bold=True)}")
    else:
        console.print(console.styled(ERBSHADOW_VERSION, bold=True))
