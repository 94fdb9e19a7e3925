# topmark:header:start
#
#   project      : ErbShadow
#   file         : __init__.py
#   file_relpath : src/erbshadow/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Assembly engine and document synthesizer.

- ``scopes``: the block stack of fragment scopes.
- ``assembler``: the traversal engine that walks a syntax tree and collects
  fragments in document order.
- ``synthesizer``: renders the shadow buffer from the source bytes and the
  collected fragments.
"""

from __future__ import annotations
