# topmark:header:start
#
#   project      : ErbShadow
#   file         : test_positions.py
#   file_relpath : tests/core/test_positions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for the byte-offset position model."""

from __future__ import annotations

import pytest

from erbshadow.core.positions import (
    ByteRange,
    LineIndex,
    Location,
    Point,
    blank_preserving_line_breaks,
    line_break_offsets,
)


def test_blank_preserving_line_breaks_keeps_lf_and_cr() -> None:
    """Every byte becomes a space except LF and CR."""
    source: bytes = "a\r\nbé\n".encode()
    blank: bytearray = blank_preserving_line_breaks(source)
    assert bytes(blank) == b" \r\n   \n"
    assert len(blank) == len(source)


def test_line_break_offsets_lists_every_break_byte() -> None:
    """CR and LF offsets are both reported."""
    assert line_break_offsets(b"ab\r\ncd\n") == [2, 3, 6]
    assert line_break_offsets(b"") == []


def test_line_index_points_are_byte_columns() -> None:
    """Columns count bytes, so a multibyte character widens the column."""
    source: bytes = "é<%\nx".encode()
    index = LineIndex(source)
    assert index.point(2) == Point(line=1, column=2)
    assert index.point(len(source)) == Point(line=2, column=1)
    assert index.point(5) == Point(line=2, column=0)


def test_line_index_rejects_offsets_outside_source() -> None:
    """Offsets past the end raise ValueError."""
    with pytest.raises(ValueError):
        LineIndex(b"abc").point(4)


def test_byte_range_slice_and_validation() -> None:
    """A range slices the source and rejects inverted bounds."""
    assert ByteRange(1, 3).slice(b"abcd") == b"bc"
    assert ByteRange(2, 2).length == 0
    with pytest.raises(ValueError):
        ByteRange(3, 1)


def test_location_same_line() -> None:
    """``same_line`` compares the end line of the first with the start line of the second."""
    first = Location(start=Point(1, 0), end=Point(2, 4))
    second = Location(start=Point(2, 6), end=Point(2, 10))
    third = Location(start=Point(3, 0), end=Point(3, 2))
    assert first.same_line(second)
    assert not first.same_line(third)
