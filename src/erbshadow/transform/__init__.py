# topmark:header:start
#
#   project      : ErbShadow
#   file         : __init__.py
#   file_relpath : src/erbshadow/transform/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fragment transformers.

Each transformer turns one syntax tree node (or, for placeholders, a gap
between two nodes) into a `Fragment`: replacement bytes placed at an absolute
offset of the shadow buffer. A transformer that cannot produce valid bytes of
the right length returns ``None``; the node then contributes nothing.

Modules:

- ``tags``: classify ERB opening lexemes (comment, output, statement).
- ``fragment``: the `Fragment` record.
- ``code``: terminate ERB code as a Ruby statement.
- ``comment``: rewrite ERB comments as Ruby comments.
- ``placeholder``: fill markup-only block bodies with a neutral statement.
- ``markup``: rewrite HTML open/close tags as length-identical Ruby.
"""

from __future__ import annotations
