# topmark:header:start
#
#   project      : ErbShadow
#   file         : errors.py
#   file_relpath : src/erbshadow/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ErbShadow CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Core exceptions (`erbshadow.core.errors`) are
    translated at the command boundary.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from erbshadow.cli.exit_codes import ExitCode


class ErbShadowCliError(click.ClickException):
    """Base class for all ErbShadow CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colour is applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console: Any = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class ErbShadowUsageError(ErbShadowCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ErbShadowConfigError(ErbShadowCliError):
    """Error for configuration errors (invalid quote style, unreadable config)."""

    exit_code = ExitCode.CONFIG_ERROR


class ErbShadowFileNotFoundError(ErbShadowCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ErbShadowIOError(ErbShadowCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class ErbShadowDataError(ErbShadowCliError):
    """Error for a malformed AST document or an AST that does not fit the template."""

    exit_code = ExitCode.DATA_ERROR


class ErbShadowInternalError(ErbShadowCliError):
    """Error for a broken transformation invariant (a bug, not bad input)."""

    exit_code = ExitCode.INTERNAL_ERROR
