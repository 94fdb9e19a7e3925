# topmark:header:start
#
#   project      : ErbShadow
#   file         : __init__.py
#   file_relpath : src/erbshadow/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for ErbShadow.

The assembly engine consumes a single option, the preferred quote style for
attribute literals in rewritten HTML tags. This package resolves it (and the
settings used to render RuboCop overrides) from layered sources:

- built-in defaults,
- ``erbshadow.toml`` / ``pyproject.toml`` ``[tool.erbshadow]`` (via ``tomlkit``),
- a RuboCop ``.rubocop.yml`` (``Style/StringLiterals``, via ``ruamel.yaml``),
- CLI overrides.

Import the model from `erbshadow.config.model` and the loaders from
`erbshadow.config.io` and `erbshadow.config.rubocop`.
"""

