# topmark:header:start
#
#   project      : ErbShadow
#   file         : tags.py
#   file_relpath : src/erbshadow/transform/tags.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Classify ERB tags by their opening lexeme.

ERB semantics decide the kind:

- ``<%#`` is an ERB comment. ``<%- # note -%>`` is **not**: it is Ruby code
  that happens to contain a Ruby comment.
- ``<%=`` and ``<%==`` output the value of an expression.
- Anything else (``<%``, ``<%-``, and non-ERB lexemes such as ``<``) is a
  statement.
"""

from __future__ import annotations

from enum import Enum

from erbshadow.constants import TAG_COMMENT, TAG_OUTPUT, TAG_OUTPUT_RAW


class TagKind(Enum):
    """Kinds of ERB tags."""

    COMMENT = "comment"
    OUTPUT = "output"
    STATEMENT = "statement"


def classify_tag(tag_opening: bytes) -> TagKind:
    """Return the kind of tag introduced by ``tag_opening``."""
    if tag_opening == TAG_COMMENT:
        return TagKind.COMMENT
    if tag_opening in (TAG_OUTPUT, TAG_OUTPUT_RAW):
        return TagKind.OUTPUT
    return TagKind.STATEMENT
