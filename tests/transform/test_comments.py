# topmark:header:start
#
#   project      : ErbShadow
#   file         : test_comments.py
#   file_relpath : tests/transform/test_comments.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ERB comment rewriting."""

from __future__ import annotations

from erbshadow.core.nodes import NodeKind
from erbshadow.transform.comment import build_comment_fragment, build_ruby_comment
from tests.conftest import parametrize, render
from tests.templates import find_nodes, parse_template


def test_single_line_comment_is_unchanged() -> None:
    """The first line is already covered by the ``#`` of the prefix."""
    assert build_ruby_comment(b" note ", 0) == b" note "


@parametrize(
    "content, column, expected",
    [
        # indented to the tag column + 2: marker under the original '#'
        (b" a\n   b ", 0, b" a\n  #b "),
        (b" line-1\n       line-2 ", 4, b" line-1\n      #line-2 "),
        # indented, but less than the target: marker at column 0
        (b" a\n b ", 4, b" a\n#b "),
        # whitespace-only continuation lines are kept verbatim
        (b" a\n   \n   b ", 0, b" a\n   \n  #b "),
        # CRLF: indentation is measured without the CR, which never moves
        (b" a\r\n   b ", 0, b" a\r\n  #b "),
        (b" a\r\n  \r\n  b ", 0, b" a\r\n  \r\n  # "),
        (b" a\r\n \r\n  b ", 2, b" a\r\n \r\n# b "),
    ],
)
def test_continuation_lines_get_a_marker(content: bytes, column: int, expected: bytes) -> None:
    """Each continuation line gets one marker without moving any byte."""
    rewritten: bytes | None = build_ruby_comment(content, column)
    assert rewritten == expected
    assert rewritten is not None and len(rewritten) == len(content)


@parametrize("content", [b" a\nb ", b" a\n", b" a\n\n  b ", b" a\r\n\r\n  b ", b" a\r\nb "])
def test_unindented_continuation_drops_the_comment(content: bytes) -> None:
    """No room for a marker means no comment at all."""
    assert build_ruby_comment(content, 0) is None


def test_build_comment_fragment() -> None:
    """The prefix turns ``<%#`` into a Ruby comment start."""
    _, root = parse_template("<%# c %>")
    node = find_nodes(root, NodeKind.ERB_CONTENT)[0]
    fragment = build_comment_fragment(node)
    assert fragment is not None
    assert fragment.code == b"  # c "
    assert fragment.is_comment


def test_build_comment_fragment_drops_unsafe_comments() -> None:
    """A continuation line at column 0 yields no fragment."""
    _, root = parse_template("<%# a\nb %>")
    node = find_nodes(root, NodeKind.ERB_CONTENT)[0]
    assert build_comment_fragment(node) is None


def test_crlf_comment_keeps_every_line_break() -> None:
    """A blank CRLF continuation line as wide as the marker column stays blank."""
    template: str = "<%# a\r\n  \r\n  b %>\r\n<%= x %>\r\n"
    result = render(template)
    assert len(result.shadow) == len(template)
    assert result.shadow.split(b"\r\n") == [b"  # a", b"  ", b"  #   ", b"    x;  ", b""]
