# topmark:header:start
#
#   project      : ErbShadow
#   file         : errors.py
#   file_relpath : src/erbshadow/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the ErbShadow core.

Only *fatal* conditions are exceptions. A node that cannot be turned into a
fragment (malformed tag, unsafe comment indentation, a gap too small for a
placeholder) is not an error: transformers return ``None`` and the engine
carries on as if the node contributed nothing.

Hierarchy:
    ErbShadowError
      ├── InvariantViolationError  (byte length / placement contract broken)
      ├── AssemblyStateError       (engine used out of order)
      ├── TreeFormatError          (malformed AST interchange mapping)
      └── ConfigError              (invalid configuration value)
"""

from __future__ import annotations


class ErbShadowError(Exception):
    """Base class for all ErbShadow errors."""


class InvariantViolationError(ErbShadowError):
    """A transformation broke a byte-length or placement invariant.

    Every later absolute-offset placement depends on these invariants, so the
    transformation of the whole document is aborted.
    """


class AssemblyStateError(ErbShadowError):
    """The assembly engine was used out of order (e.g. read before traversal)."""


class TreeFormatError(ErbShadowError):
    """An AST interchange mapping does not have the expected shape."""


class ConfigError(ErbShadowError):
    """A configuration value is invalid."""
