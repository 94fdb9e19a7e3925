# topmark:header:start
#
#   project      : ErbShadow
#   file         : positions.py
#   file_relpath : src/erbshadow/core/positions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Byte-offset position model shared by every ErbShadow component.

Every offset, width and length in ErbShadow is a **byte** count into the
original template, never a character count. Python ``str`` indexing is
character based, so the core works on ``bytes``/``bytearray`` throughout;
this is what keeps the shadow source byte-identical in length for templates
containing multibyte text.

Conventions:
    * Lines are 1-based, columns are 0-based byte columns.
    * ``ByteRange`` is half-open (``start`` inclusive, ``stop`` exclusive),
      which makes it slice-friendly: ``source[r.start:r.stop]``.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Final

LF: Final[int] = 0x0A
CR: Final[int] = 0x0D
SPACE: Final[int] = 0x20

LINE_BREAKS: Final[frozenset[int]] = frozenset((LF, CR))


@dataclass(frozen=True, slots=True)
class Point:
    """A line/column position (1-based line, 0-based byte column)."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Location:
    """Start and end points of a node."""

    start: Point
    end: Point

    def same_line(self, other: Location) -> bool:
        """Return True if this location ends on the line ``other`` starts on.

        Assumes ``self`` precedes ``other`` in document order.
        """
        return self.end.line == other.start.line


@dataclass(frozen=True, slots=True)
class ByteRange:
    """Half-open byte range ``[start, stop)``."""

    start: int
    stop: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.stop < self.start:
            raise ValueError(f"invalid byte range [{self.start}, {self.stop})")

    @property
    def length(self) -> int:
        """Number of bytes covered by the range."""
        return self.stop - self.start

    def slice(self, source: bytes) -> bytes:
        """Return the bytes of ``source`` covered by this range."""
        return source[self.start : self.stop]


class LineIndex:
    """Map absolute byte offsets of one source to line/column points.

    Only LF starts a new line; a CR of a CRLF pair belongs to the line it ends.
    """

    def __init__(self, source: bytes) -> None:
        self._size: int = len(source)
        starts: list[int] = [0]
        for offset, byte in enumerate(source):
            if byte == LF:
                starts.append(offset + 1)
        self._line_starts: list[int] = starts

    def point(self, offset: int) -> Point:
        """Return the point for an absolute byte offset.

        Args:
            offset (int): Byte offset in ``[0, len(source)]``.

        Returns:
            Point: The 1-based line and 0-based byte column of ``offset``.

        Raises:
            ValueError: If ``offset`` lies outside the source.
        """
        if offset < 0 or offset > self._size:
            raise ValueError(f"offset {offset} outside source of {self._size} bytes")
        index: int = bisect_right(self._line_starts, offset) - 1
        return Point(line=index + 1, column=offset - self._line_starts[index])

    def location(self, byte_range: ByteRange) -> Location:
        """Return the location spanned by ``byte_range``."""
        return Location(start=self.point(byte_range.start), end=self.point(byte_range.stop))


def line_break_offsets(source: bytes) -> list[int]:
    """Return the offsets of every line-break byte (LF or CR) in ``source``."""
    return [offset for offset, byte in enumerate(source) if byte in LINE_BREAKS]


def blank_preserving_line_breaks(source: bytes) -> bytearray:
    """Return a buffer of ``source``'s length: spaces everywhere except line breaks.

    Line-break bytes (LF and CR) are copied unchanged so that the buffer has the
    same line layout as ``source``.
    """
    return bytearray(byte if byte in LINE_BREAKS else SPACE for byte in source)
