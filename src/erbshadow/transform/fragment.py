# topmark:header:start
#
#   project      : ErbShadow
#   file         : fragment.py
#   file_relpath : src/erbshadow/transform/fragment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The `Fragment` record: replacement bytes for one slot of the shadow buffer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from erbshadow.core.positions import SPACE
from erbshadow.transform.tags import TagKind, classify_tag

if TYPE_CHECKING:
    from erbshadow.core.nodes import Node
    from erbshadow.core.positions import Location


@dataclass(frozen=True, slots=True)
class Fragment:
    """Replacement bytes placed at an absolute offset of the shadow buffer.

    ``prefix + content`` (see `code`) must introduce no line break relative to
    the span it represents, must end as a complete Ruby statement, and must fit
    the byte slot it fills.

    Attributes:
        position (int): Absolute byte offset of the first replaced byte.
        tag_opening (bytes): Opening lexeme of the origin tag (``b""`` for placeholders).
        tag_closing (bytes): Closing lexeme of the origin tag (``b""`` for placeholders).
        prefix (bytes): Bytes replacing the opening lexeme.
        content (bytes): Bytes replacing the tag content.
        location (Location): Source location used for same-line checks.
        origin (Node | None): The node this fragment was built from; ``None`` for
            synthetic placeholders.
    """

    position: int
    tag_opening: bytes
    tag_closing: bytes
    prefix: bytes
    content: bytes
    location: Location
    origin: Node | None = None

    @property
    def code(self) -> bytes:
        """The bytes written into the shadow buffer."""
        return self.prefix + self.content

    @property
    def end(self) -> int:
        """Absolute offset just past the rendered code."""
        return self.position + len(self.prefix) + len(self.content)

    @property
    def kind(self) -> TagKind:
        """Tag kind of the origin lexeme."""
        return classify_tag(self.tag_opening)

    @property
    def is_output(self) -> bool:
        """Whether the fragment was built from an output tag."""
        return self.kind is TagKind.OUTPUT

    @property
    def is_comment(self) -> bool:
        """Whether the fragment was built from an ERB comment."""
        return self.kind is TagKind.COMMENT

    def same_line(self, other: Fragment) -> bool:
        """Return True if this fragment ends on the line ``other`` starts on."""
        return self.location.same_line(other.location)

    def with_neutral_prefix(self) -> Fragment:
        """Return a copy whose prefix is replaced by spaces of the same width."""
        return replace(self, prefix=bytes([SPACE]) * len(self.prefix))
