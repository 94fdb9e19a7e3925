# topmark:header:start
#
#   project      : ErbShadow
#   file         : nodes.py
#   file_relpath : src/erbshadow/core/nodes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read-only view of an externally parsed HTML+ERB syntax tree.

ErbShadow never parses templates. An external parser (Herb) produces the
tree and ErbShadow only reads it: node kinds, lexemes with their byte ranges,
line/column locations, and children in document order.

The tree carries no explicit "body" grouping for ERB control flow. An
``if`` node's children are its statements followed by its ``elsif``/``else``
branch and ``end`` nodes, so a pre-order walk visits everything in document
order and the engine rebuilds block scopes from opener/closer nodes alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from erbshadow.core.positions import ByteRange, Location


class NodeKind(Enum):
    """Kinds of syntax tree nodes, keyed by the external parser's node names."""

    DOCUMENT = "DocumentNode"
    ERB_CONTENT = "ERBContentNode"
    ERB_BLOCK = "ERBBlockNode"
    ERB_IF = "ERBIfNode"
    ERB_UNLESS = "ERBUnlessNode"
    ERB_CASE = "ERBCaseNode"
    ERB_CASE_MATCH = "ERBCaseMatchNode"
    ERB_WHILE = "ERBWhileNode"
    ERB_UNTIL = "ERBUntilNode"
    ERB_FOR = "ERBForNode"
    ERB_BEGIN = "ERBBeginNode"
    ERB_END = "ERBEndNode"
    ERB_ELSE = "ERBElseNode"
    ERB_WHEN = "ERBWhenNode"
    ERB_IN = "ERBInNode"
    ERB_RESCUE = "ERBRescueNode"
    ERB_ENSURE = "ERBEnsureNode"
    HTML_OPEN_TAG = "HTMLOpenTagNode"
    HTML_CLOSE_TAG = "HTMLCloseTagNode"
    HTML_ELEMENT = "HTMLElementNode"
    TEXT = "HTMLTextNode"
    OTHER = "Other"

    @classmethod
    def from_name(cls, name: str) -> NodeKind:
        """Return the kind for an external node name; unknown names map to ``OTHER``."""
        for member in cls:
            if member.value == name:
                return member
        return cls.OTHER

    @property
    def is_erb(self) -> bool:
        """Whether nodes of this kind are ERB tags (carry Ruby code or a comment)."""
        return self.value.startswith("ERB")


BLOCK_OPENERS: frozenset[NodeKind] = frozenset(
    {
        NodeKind.ERB_BLOCK,
        NodeKind.ERB_IF,
        NodeKind.ERB_UNLESS,
        NodeKind.ERB_CASE,
        NodeKind.ERB_CASE_MATCH,
        NodeKind.ERB_WHILE,
        NodeKind.ERB_UNTIL,
        NodeKind.ERB_FOR,
        NodeKind.ERB_BEGIN,
    }
)

# Branch separators close the current scope and open a new one.
BRANCH_SEPARATORS: frozenset[NodeKind] = frozenset(
    {
        NodeKind.ERB_ELSE,
        NodeKind.ERB_WHEN,
        NodeKind.ERB_IN,
        NodeKind.ERB_RESCUE,
        NodeKind.ERB_ENSURE,
    }
)

# Multi-branch headers: no statement may sit between them and their first branch.
CASE_HEADERS: frozenset[NodeKind] = frozenset({NodeKind.ERB_CASE, NodeKind.ERB_CASE_MATCH})


@dataclass(frozen=True, slots=True)
class Token:
    """One lexeme of a node together with its byte range in the template."""

    value: bytes
    range: ByteRange


@dataclass(frozen=True, slots=True)
class Node:
    """Borrowed, immutable view of one syntax tree node.

    Attributes:
        kind (NodeKind): The node kind.
        range (ByteRange): Byte span of the whole node (for ERB nodes, the tag
            from ``<%`` to ``%>``; for HTML tags, ``<`` to ``>``).
        location (Location): Line/column span of the node.
        tag_opening (Token | None): Opening delimiter (``<%``, ``<%=``, ``<%#``, ``<``, ``</``).
        content (Token | None): Code between the delimiters (ERB) or tag name (HTML).
        tag_closing (Token | None): Closing delimiter (``%>``, ``-%>``, ``>``).
        children (tuple[Node, ...]): Child nodes in document order.
    """

    kind: NodeKind
    range: ByteRange
    location: Location
    tag_opening: Token | None = None
    content: Token | None = None
    tag_closing: Token | None = None
    children: tuple[Node, ...] = ()

    @property
    def opening_offset(self) -> int:
        """Byte offset of the opening delimiter (the node start when there is none)."""
        return self.tag_opening.range.start if self.tag_opening else self.range.start

    @property
    def opening_value(self) -> bytes:
        """The opening lexeme, or ``b""``."""
        return self.tag_opening.value if self.tag_opening else b""

    @property
    def closing_value(self) -> bytes:
        """The closing lexeme, or ``b""``."""
        return self.tag_closing.value if self.tag_closing else b""

    @property
    def content_value(self) -> bytes:
        """The content lexeme, or ``b""``."""
        return self.content.value if self.content else b""

    def contains_erb(self) -> bool:
        """Return True if any descendant of this node is an ERB node.

        Used for HTML open tags: ERB inside attribute values means the tag bytes
        already host code fragments and must not be rewritten as a whole.
        """
        pending: list[Node] = list(self.children)
        while pending:
            node: Node = pending.pop()
            if node.kind.is_erb:
                return True
            pending.extend(node.children)
        return False
