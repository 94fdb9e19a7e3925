# topmark:header:start
#
#   project      : ErbShadow
#   file         : comment.py
#   file_relpath : src/erbshadow/transform/comment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewrite ERB comments (``<%# ... %>``) as Ruby comments.

The opening ``<%#`` becomes ``  #``, so the first line is already a Ruby
comment. Every continuation line needs its own ``#`` without shifting a
byte. The marker goes at the tag's column + 2 (under the original ``#``)
when the line is indented that far, else at column 0 when the line has any
indentation. A continuation line starting with a non-space byte leaves no room
for a marker, so such a comment is dropped entirely.

Examples::

    <%# line-1          ->    # line-1
       line-2 %>              #line-2

    <%# line-1          ->    # line-1
     line-2 %>              #line-2
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from erbshadow.config.logging import get_logger
from erbshadow.constants import COMMENT_MARKER, COMMENT_PREFIX
from erbshadow.core.positions import CR, LF, LINE_BREAKS, SPACE
from erbshadow.transform.fragment import Fragment

if TYPE_CHECKING:
    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.core.nodes import Node

logger: ErbShadowLogger = get_logger(__name__)


def _leading_spaces(line: bytes) -> int:
    return len(line) - len(line.lstrip(b" "))


def build_ruby_comment(content: bytes, tag_column: int) -> bytes | None:
    """Return ``content`` with a comment marker on every continuation line.

    Args:
        content (bytes): The comment text between ``<%#`` and ``%>``.
        tag_column (int): Byte column of the ``<%#`` lexeme.

    Returns:
        bytes | None: The rewritten content (same length), or ``None`` when a
            continuation line has no leading space or the marker would land on a
            line break.
    """
    target_column: int = tag_column + 2
    lines: list[bytes] = content.split(bytes([LF]))
    rewritten: list[bytes] = [lines[0]]
    for line in lines[1:]:
        # CRLF: the CR stays where it is
        body: bytes = line[:-1] if line.endswith(bytes([CR])) else line
        indent: int = _leading_spaces(body)
        column: int
        if body and indent == len(body):
            # whitespace only: nothing to comment out
            rewritten.append(line)
            continue
        if indent >= target_column:
            column = target_column
        elif indent >= 1 and body[0] == SPACE:
            column = 0
        else:
            return None
        if body[column] in LINE_BREAKS:
            return None
        rewritten.append(line[:column] + COMMENT_MARKER + line[column + 1 :])
    return bytes([LF]).join(rewritten)


def build_comment_fragment(node: Node) -> Fragment | None:
    """Build the comment fragment for an ERB comment node, or ``None``."""
    comment: bytes | None = build_ruby_comment(node.content_value, node.location.start.column)
    if comment is None:
        logger.debug(
            "Dropping comment at line %d: continuation line without indentation",
            node.location.start.line,
        )
        return None
    return Fragment(
        position=node.opening_offset,
        tag_opening=node.opening_value,
        tag_closing=node.closing_value,
        prefix=COMMENT_PREFIX.ljust(len(node.opening_value), b" ")[: len(node.opening_value)],
        content=comment,
        location=node.location,
        origin=node,
    )
