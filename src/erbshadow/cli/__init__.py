# topmark:header:start
#
#   project      : ErbShadow
#   file         : __init__.py
#   file_relpath : src/erbshadow/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErbShadow command line interface (Click).

The CLI is a thin adapter: it reads a template and its serialized syntax
tree, resolves configuration, and delegates to `erbshadow.api`.
"""

from __future__ import annotations
