# topmark:header:start
#
#   project      : ErbShadow
#   file         : __init__.py
#   file_relpath : src/erbshadow/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across ErbShadow.

The ``erbshadow.core`` package provides the building blocks every other layer
relies on, without pulling in CLI or configuration-file concerns.

Included modules:

- ``positions``
  The byte-offset position model (points, locations, ranges, line index).

- ``nodes``
  The read-only syntax tree view consumed by the assembly engine.

- ``tree``
  Loader building node trees from the external parser's interchange mapping.

- ``diagnostics``
  Diagnostic types (levels, messages, aggregation).

- ``errors``
  The exception hierarchy for fatal conditions.
"""

from __future__ import annotations
