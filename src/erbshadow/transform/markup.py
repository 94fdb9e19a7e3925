# topmark:header:start
#
#   project      : ErbShadow
#   file         : markup.py
#   file_relpath : src/erbshadow/transform/markup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewrite HTML open/close tags as byte-length-identical Ruby statements.

Markup tags become method calls so that linters see the document structure
(and the blocks wrapping it) instead of empty bodies::

    <div>                          ->  " div;"
    <div id="main" class="x">      ->  ' div id="";             '   (class is a keyword)
    <a href="/" title="Home">      ->  ' a href="", title="";    '
    </div>                         ->  " div1;"   (counter rotates 1..9, 0)

Rules:
    * Every rewritten byte stays at its offset; LF and CR bytes never move.
    * Attribute values are always erased to an empty string literal in the
      configured quote style.
    * An attribute is kept only when its name is a valid Ruby local variable
      name and not a keyword. Boolean and unquoted attributes are blanked.
    * The terminator follows the last kept attribute (or the tag name). When
      that byte is a line break, it goes on the final ``>`` byte instead.
    * Tags that do not match the simple ``<name attrs>`` / ``</name>`` grammar
      (for instance a ``>`` inside an attribute value) yield no fragment.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from erbshadow.config.logging import get_logger
from erbshadow.config.model import QuoteStyle
from erbshadow.constants import STATEMENT_TERMINATOR
from erbshadow.core.errors import InvariantViolationError
from erbshadow.core.positions import LINE_BREAKS, blank_preserving_line_breaks
from erbshadow.transform.fragment import Fragment

if TYPE_CHECKING:
    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.core.nodes import Node
    from erbshadow.core.positions import Location

logger: ErbShadowLogger = get_logger(__name__)

OPEN_TAG_PATTERN: Final[re.Pattern[bytes]] = re.compile(
    rb"\A<([A-Za-z][A-Za-z0-9]*)(\s*)([^>]*)>\Z"
)
CLOSE_TAG_PATTERN: Final[re.Pattern[bytes]] = re.compile(rb"\A</([A-Za-z][A-Za-z0-9]*)(\s*)>\Z")
ATTRIBUTE_PATTERN: Final[re.Pattern[bytes]] = re.compile(
    rb"""([^\s=/"'>]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s"'=<>`]+))?"""
)
# Local variable shaped: lowercase or underscore first, non-ASCII allowed.
IDENTIFIER_PATTERN: Final[re.Pattern[bytes]] = re.compile(
    rb"\A[a-z_\x80-\xff][A-Za-z0-9_\x80-\xff]*\Z"
)

# Ruby keywords and numbered block parameters cannot be assignment targets.
RUBY_KEYWORDS: Final[frozenset[bytes]] = frozenset(
    b"""
    __ENCODING__ __FILE__ __LINE__ _1 _2 _3 _4 _5 _6 _7 _8 _9
    BEGIN END alias and begin break case class def defined? do else elsif
    end ensure false for if in module next nil not or redo rescue retry
    return self super then true undef unless until when while yield
    """.split()
)

ARGUMENT_SEPARATOR: Final[bytes] = b","


def is_keepable_attribute(name: bytes) -> bool:
    """Return True if attribute ``name`` can be written as a Ruby assignment target."""
    return name not in RUBY_KEYWORDS and IDENTIFIER_PATTERN.match(name) is not None


class MarkupTagTransformer:
    """Transform HTML tags of one document into Ruby statements.

    One instance serves one document: ``close_tag_counter`` is per instance.

    Attributes:
        quote_style (QuoteStyle): Quote style of the emptied attribute values.
        close_tag_counter (int): Digit used by the most recent close tag (0 before any).
    """

    def __init__(self, quote_style: QuoteStyle = QuoteStyle.DOUBLE) -> None:
        self.quote_style: QuoteStyle = quote_style
        self.close_tag_counter: int = 0

    def transform_open_tag(
        self,
        raw: bytes,
        *,
        position: int,
        location: Location,
        origin: Node | None = None,
    ) -> Fragment | None:
        """Return the fragment for open tag ``raw``, or ``None`` if it does not match.

        Args:
            raw (bytes): The tag bytes, from ``<`` to ``>``.
            position (int): Absolute offset of ``raw`` in the template.
            location (Location): Location of the tag.
            origin (Node | None): The tag node.

        Returns:
            Fragment | None: A fragment of exactly ``len(raw)`` bytes.

        Raises:
            InvariantViolationError: If the rewrite changed the byte length.
        """
        match: re.Match[bytes] | None = OPEN_TAG_PATTERN.match(raw)
        if match is None:
            logger.trace("Open tag at %d does not match the tag grammar", position)
            return None

        name: bytes = match.group(1)
        buffer: bytearray = blank_preserving_line_breaks(raw)
        buffer[1 : 1 + len(name)] = name
        terminator_at: int = 1 + len(name) if match.group(3) else len(raw) - 1

        attrs_start: int = match.start(3)
        kept: list[tuple[int, bytes]] = []
        for attr in ATTRIBUTE_PATTERN.finditer(match.group(3)):
            written: bytes | None = self._rewrite_attribute(attr)
            start: int = attrs_start + attr.start()
            if written is None or _crosses_line_break(raw, start, start + len(written)):
                continue
            if kept and start <= kept[-1][0] + len(kept[-1][1]):
                # no room for a separator
                logger.trace("Attribute at %d dropped: no byte before it", position + start)
                continue
            kept.append((start, written))

        for index, (start, written) in enumerate(kept):
            buffer[start : start + len(written)] = written
            end: int = start + len(written)
            if index + 1 < len(kept):
                if raw[end] not in LINE_BREAKS:
                    buffer[end : end + 1] = ARGUMENT_SEPARATOR
            else:
                terminator_at = end

        self._place_terminator(buffer, raw, terminator_at)
        return self._build_fragment(raw, bytes(buffer), position, location, origin)

    def transform_close_tag(
        self,
        raw: bytes,
        *,
        position: int,
        location: Location,
        origin: Node | None = None,
    ) -> Fragment | None:
        """Return the fragment for close tag ``raw``, or ``None`` if it does not match.

        Advances the close tag counter for every matching tag.

        Raises:
            InvariantViolationError: If the rewrite changed the byte length.
        """
        match: re.Match[bytes] | None = CLOSE_TAG_PATTERN.match(raw)
        if match is None:
            logger.trace("Close tag at %d does not match the tag grammar", position)
            return None

        name: bytes = match.group(1)
        digit: bytes = str(self._next_close_tag_count()).encode("ascii")
        buffer: bytearray = blank_preserving_line_breaks(raw)
        head: bytes = name + digit
        buffer[1 : 1 + len(head)] = head
        self._place_terminator(buffer, raw, 1 + len(head))
        return self._build_fragment(raw, bytes(buffer), position, location, origin)

    def _next_close_tag_count(self) -> int:
        self.close_tag_counter = (self.close_tag_counter + 1) % 10
        return self.close_tag_counter

    def _rewrite_attribute(self, attr: re.Match[bytes]) -> bytes | None:
        name: bytes = attr.group(1)
        value: bytes | None = attr.group(2)
        if value is None or value[:1] not in (b'"', b"'"):
            return None
        if not is_keepable_attribute(name):
            return None
        quote: bytes = self.quote_style.quote_char.encode("ascii")
        return name + b"=" + quote + quote

    @staticmethod
    def _place_terminator(buffer: bytearray, raw: bytes, offset: int) -> None:
        if raw[offset] in LINE_BREAKS:
            offset = len(raw) - 1
        buffer[offset : offset + 1] = STATEMENT_TERMINATOR

    @staticmethod
    def _build_fragment(
        raw: bytes,
        content: bytes,
        position: int,
        location: Location,
        origin: Node | None,
    ) -> Fragment:
        if len(content) != len(raw):
            raise InvariantViolationError(
                f"markup tag at byte {position}: rewrite is {len(content)} bytes, "
                f"tag is {len(raw)} bytes"
            )
        return Fragment(
            position=position,
            tag_opening=b"",
            tag_closing=b"",
            prefix=b"",
            content=content,
            location=location,
            origin=origin,
        )


def _crosses_line_break(raw: bytes, start: int, stop: int) -> bool:
    return any(byte in LINE_BREAKS for byte in raw[start:stop])
