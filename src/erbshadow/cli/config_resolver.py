# topmark:header:start
#
#   project      : ErbShadow
#   file         : config_resolver.py
#   file_relpath : src/erbshadow/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the effective configuration for a CLI invocation.

Precedence for the quote style (lowest -> highest):
    1) Built-in default (double)
    2) TOML config files discovered upward from the anchor, then ``--config`` files
    3) ``Style/StringLiterals`` of the RuboCop config (``--rubocop-config`` or a
       ``.rubocop.yml`` next to the anchor)
    4) ``--quote-style``
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from erbshadow.cli.errors import ErbShadowConfigError, ErbShadowFileNotFoundError
from erbshadow.config.logging import get_logger
from erbshadow.config.model import MutableConfig, QuoteStyle
from erbshadow.config.rubocop import quote_style_from_rubocop
from erbshadow.constants import RUBOCOP_YAML_NAME
from erbshadow.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.config.model import Config

logger: ErbShadowLogger = get_logger(__name__)


def common_config_options(f: Callable[..., None]) -> Callable[..., None]:
    """Add ``--config``, ``--no-config`` and ``--rubocop-config`` to a command."""
    f = click.option(
        "--config",
        "-c",
        "config_paths",
        multiple=True,
        type=click.Path(dir_okay=False, path_type=Path),
        help="Merge this erbshadow.toml/pyproject.toml after discovered configs.",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        default=False,
        help="Skip upward discovery of erbshadow.toml/pyproject.toml.",
    )(f)
    f = click.option(
        "--rubocop-config",
        "rubocop_config",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help=f"Read Style/StringLiterals from this file (default: {RUBOCOP_YAML_NAME} nearby).",
    )(f)
    return f


def resolve_config(
    *,
    anchor: Path,
    config_paths: Sequence[Path] = (),
    no_config: bool = False,
    rubocop_config: Path | None = None,
    quote_style: str | None = None,
) -> Config:
    """Return the frozen configuration for a command.

    Args:
        anchor (Path): Template path (or directory) anchoring discovery.
        config_paths (Sequence[Path]): Explicit TOML files, merged last.
        no_config (bool): Skip upward discovery when True.
        rubocop_config (Path | None): Explicit RuboCop YAML file.
        quote_style (str | None): ``--quote-style`` value.

    Returns:
        Config: The resolved configuration.

    Raises:
        ErbShadowFileNotFoundError: If an explicit config file does not exist.
        ErbShadowConfigError: If ``quote_style`` is not a known style.
    """
    for path in config_paths:
        if not path.is_file():
            raise ErbShadowFileNotFoundError(f"Config file not found: {path}")

    draft: MutableConfig = MutableConfig.load_merged(
        anchor=None if no_config else anchor,
        extra_config_files=list(config_paths),
    )

    rubocop_path: Path | None = rubocop_config
    if rubocop_path is None:
        base: Path = anchor if anchor.is_dir() else anchor.parent
        candidate: Path = base / RUBOCOP_YAML_NAME
        rubocop_path = candidate if candidate.is_file() else None
    elif not rubocop_path.is_file():
        raise ErbShadowFileNotFoundError(f"RuboCop config not found: {rubocop_path}")
    if rubocop_path is not None:
        style: QuoteStyle | None = quote_style_from_rubocop(rubocop_path)
        if style is not None:
            draft.quote_style = style
            draft.config_files.append(rubocop_path)

    if quote_style is not None:
        try:
            draft.quote_style = QuoteStyle.parse(quote_style)
        except ConfigError as exc:
            raise ErbShadowConfigError(str(exc)) from exc

    config: Config = draft.freeze()
    logger.debug("Resolved config: %s", config)
    return config
