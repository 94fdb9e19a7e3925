# topmark:header:start
#
#   project      : ErbShadow
#   file         : code.py
#   file_relpath : src/erbshadow/transform/code.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Turn the code of one ERB tag into a terminated Ruby statement.

Examples (prefix + content, as written over ``<% foo %>`` and ``<%= foo %>``)::

    <% foo %>    ->  "   foo;"
    <%= foo %>   ->  "_ = foo;"    (non-final output in a block)
    <%= foo %>   ->  "    foo;"    (final output of a block)

The terminator overwrites the first byte of a trailing run of spaces, or is
appended when the content has no trailing space. Appending is always safe:
the closing delimiter (``%>``) follows the content and is blank in the shadow
buffer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from erbshadow.constants import DISCARD_ASSIGNMENT, STATEMENT_TERMINATOR
from erbshadow.core.positions import SPACE
from erbshadow.transform.fragment import Fragment

if TYPE_CHECKING:
    from erbshadow.core.nodes import Node


def terminate_code(content: bytes) -> bytes:
    """Return ``content`` turned into a statement ending with ``;``.

    Args:
        content (bytes): The code between the ERB delimiters.

    Returns:
        bytes: The terminated code; same length as ``content`` when it ends with a
            space, one byte longer otherwise.
    """
    stripped: bytes = content.rstrip(b" ")
    if len(stripped) == len(content):
        return content + STATEMENT_TERMINATOR
    trailing: int = len(content) - len(stripped)
    return stripped + STATEMENT_TERMINATOR + bytes([SPACE]) * (trailing - 1)


def statement_prefix(tag_opening: bytes) -> bytes:
    """Return the blank prefix replacing ``tag_opening``."""
    return bytes([SPACE]) * len(tag_opening)


def discard_prefix(tag_opening: bytes) -> bytes:
    """Return the discard-assignment prefix (``_ =``) sized to ``tag_opening``.

    Binding an output expression to ``_`` keeps linters from reporting a void
    value in a non-final position of a block.
    """
    width: int = len(tag_opening)
    if width < len(DISCARD_ASSIGNMENT):
        return statement_prefix(tag_opening)
    return DISCARD_ASSIGNMENT.ljust(width, b" ")


def build_code_fragment(node: Node, prefix: bytes) -> Fragment:
    """Build the fragment for an ERB code node using ``prefix``.

    Args:
        node (Node): An ERB node with an opening lexeme and content.
        prefix (bytes): Bytes replacing the opening lexeme (same width).

    Returns:
        Fragment: The statement fragment positioned at the node's opening lexeme.
    """
    return Fragment(
        position=node.opening_offset,
        tag_opening=node.opening_value,
        tag_closing=node.closing_value,
        prefix=prefix,
        content=terminate_code(node.content_value),
        location=node.location,
        origin=node,
    )
