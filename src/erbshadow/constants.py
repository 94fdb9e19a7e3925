# topmark:header:start
#
#   project      : ErbShadow
#   file         : constants.py
#   file_relpath : src/erbshadow/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErbShadow Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    ERBSHADOW_VERSION: str = get_version("erbshadow")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    ERBSHADOW_VERSION = "0.0.0+unknown"

# Config file names
ERBSHADOW_TOML_NAME: str = "erbshadow.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "erbshadow"
RUBOCOP_YAML_NAME: str = ".rubocop.yml"

LOG_LEVEL_ENV_VAR: str = "ERBSHADOW_LOG_LEVEL"

# ERB tag lexemes
TAG_COMMENT: bytes = b"<%#"
TAG_OUTPUT: bytes = b"<%="
TAG_OUTPUT_RAW: bytes = b"<%=="

# Guest (Ruby) snippets written into the shadow buffer
STATEMENT_TERMINATOR: bytes = b";"
DISCARD_ASSIGNMENT: bytes = b"_ ="
COMMENT_PREFIX: bytes = b"  #"
COMMENT_MARKER: bytes = b"#"
PLACEHOLDER_STATEMENT: bytes = b"_ = nil;"

ELSIF_KEYWORD: bytes = b"elsif"
