# topmark:header:start
#
#   project      : ErbShadow
#   file         : rubocop.py
#   file_relpath : src/erbshadow/config/rubocop.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RuboCop interop: read the preferred quote style, render linter overrides.

Two directions:
    * `quote_style_from_rubocop` reads ``Style/StringLiterals: EnforcedStyle``
      from a ``.rubocop.yml`` so emptied attribute literals follow the project's
      own quoting rule.
    * `rubocop_overrides` / `render_rubocop_yaml` produce the configuration a
      RuboCop run over shadow sources needs: template globs in
      ``AllCops.Include`` and an ``Exclude`` for every cop that only reports
      noise caused by the position-preserving rewrite.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, Final

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from erbshadow.config.logging import get_logger
from erbshadow.config.model import QuoteStyle

if TYPE_CHECKING:
    from pathlib import Path

    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.config.model import Config

logger: ErbShadowLogger = get_logger(__name__)

_yaml_safe = YAML(typ="safe")

STRING_LITERALS_COP: Final[str] = "Style/StringLiterals"

# Cops reporting artifacts of the rewrite rather than problems in the template.
EXCLUDED_COPS: Final[tuple[str, ...]] = (
    "Layout/BlockAlignment",  # <%= and <% differ in width
    "Layout/CommentIndentation",  # ERB comments shift to their marker column
    "Layout/EndAlignment",
    "Layout/ExtraSpacing",  # blanked markup
    "Layout/IndentationConsistency",
    "Layout/IndentationWidth",
    "Layout/InitialIndentation",
    "Layout/LeadingEmptyLines",
    "Layout/TrailingEmptyLines",
    "Layout/TrailingWhitespace",
    "Lint/EmptyConditionalBody",  # HTML-only branches
    "Lint/EmptyWhen",
    "Style/EmptyElse",
    "Style/FrozenStringLiteralComment",
    "Style/IfUnlessModifier",  # a wrapped element collapses to one line
    "Style/IfWithSemicolon",
    "Style/Next",
    "Style/Semicolon",  # statements share a line
)


def _read_yaml_map(path: Path) -> dict[str, Any] | None:
    try:
        raw: Any = _yaml_safe.load(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.debug("Cannot read RuboCop config %s: %s", path, e)
        return None
    except YAMLError as e:
        logger.warning("Invalid YAML in RuboCop config %s: %s", path, e)
        return None
    if not isinstance(raw, dict):
        logger.debug("RuboCop config %s is not a mapping", path)
        return None
    return raw


def quote_style_from_rubocop(path: Path) -> QuoteStyle | None:
    """Return the quote style enforced by a RuboCop config file.

    Args:
        path (Path): Path to a ``.rubocop.yml``.

    Returns:
        QuoteStyle | None: ``SINGLE`` for ``EnforcedStyle: single_quotes``,
            ``DOUBLE`` for any other value, ``None`` when the file is unreadable
            or does not configure ``Style/StringLiterals``.
    """
    data: dict[str, Any] | None = _read_yaml_map(path)
    if data is None:
        return None
    cop: Any = data.get(STRING_LITERALS_COP)
    if not isinstance(cop, dict) or "EnforcedStyle" not in cop:
        return None
    style: QuoteStyle = (
        QuoteStyle.SINGLE if cop["EnforcedStyle"] == "single_quotes" else QuoteStyle.DOUBLE
    )
    logger.debug("Quote style %s from %s", style.value, path)
    return style


def template_globs(extensions: tuple[str, ...]) -> list[str]:
    """Return the RuboCop path globs matching templates with ``extensions``."""
    globs: list[str] = []
    for ext in extensions:
        globs.append(f"**/*{ext}")
        globs.append(f"/**/*{ext}")
    return globs


def rubocop_overrides(config: Config) -> dict[str, Any]:
    """Return the RuboCop configuration overrides for templates.

    Args:
        config (Config): The resolved configuration (``extensions`` is used).

    Returns:
        dict[str, Any]: A mapping ready to be dumped as ``.rubocop.yml`` content.
    """
    globs: list[str] = template_globs(config.extensions)
    overrides: dict[str, Any] = {"AllCops": {"Include": globs}}
    for cop in EXCLUDED_COPS:
        overrides[cop] = {"Exclude": list(globs)}
    return overrides


def render_rubocop_yaml(config: Config) -> str:
    """Render `rubocop_overrides` as a YAML document."""
    yaml = YAML()
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    stream = io.StringIO()
    yaml.dump(rubocop_overrides(config), stream)
    return stream.getvalue()
