# topmark:header:start
#
#   project      : ErbShadow
#   file         : test_code_fragments.py
#   file_relpath : tests/transform/test_code_fragments.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for tag classification and code fragments."""

from __future__ import annotations

from erbshadow.core.nodes import NodeKind
from erbshadow.transform.code import (
    build_code_fragment,
    discard_prefix,
    statement_prefix,
    terminate_code,
)
from erbshadow.transform.fragment import Fragment
from erbshadow.transform.tags import TagKind, classify_tag
from tests.conftest import parametrize
from tests.templates import find_nodes, parse_template


@parametrize(
    "opening, kind",
    [
        (b"<%#", TagKind.COMMENT),
        (b"<%=", TagKind.OUTPUT),
        (b"<%==", TagKind.OUTPUT),
        (b"<%", TagKind.STATEMENT),
        (b"<%-", TagKind.STATEMENT),
        (b"<", TagKind.STATEMENT),
        (b"", TagKind.STATEMENT),
    ],
)
def test_classify_tag(opening: bytes, kind: TagKind) -> None:
    """The opening lexeme alone decides the kind."""
    assert classify_tag(opening) is kind


def test_dash_hash_is_code_not_comment() -> None:
    """``<%- # note %>`` is Ruby code holding a comment."""
    assert classify_tag(b"<%-") is TagKind.STATEMENT
    assert classify_tag(b"<%#") is TagKind.COMMENT


@parametrize(
    "content, expected",
    [
        (b" foo ", b" foo;"),
        (b" foo   ", b" foo;  "),
        (b" foo", b" foo;"),
        (b"foo\n", b"foo\n;"),
        (b"", b";"),
    ],
)
def test_terminate_code(content: bytes, expected: bytes) -> None:
    """The terminator overwrites a trailing space or is appended."""
    assert terminate_code(content) == expected


def test_prefixes_match_the_opening_width() -> None:
    """Prefixes are exactly as wide as the lexeme they replace."""
    assert statement_prefix(b"<%-") == b"   "
    assert discard_prefix(b"<%=") == b"_ ="
    assert discard_prefix(b"<%==") == b"_ = "
    assert discard_prefix(b"<%") == b"  "


def test_build_code_fragment_positions_at_the_opening() -> None:
    """The fragment starts at the opening lexeme and fits inside the tag."""
    source, root = parse_template("<p>\n  <%= link_to 'x' %>")
    node = find_nodes(root, NodeKind.ERB_CONTENT)[0]
    fragment: Fragment = build_code_fragment(node, discard_prefix(node.opening_value))
    assert fragment.position == source.index(b"<%=")
    assert fragment.code == b"_ = link_to 'x';"
    assert fragment.end <= node.range.stop
    assert fragment.is_output
    assert not fragment.is_comment
    assert fragment.origin is node


def test_with_neutral_prefix_keeps_width() -> None:
    """Neutralizing replaces the prefix with spaces only."""
    _, root = parse_template("<%= x %>")
    node = find_nodes(root, NodeKind.ERB_CONTENT)[0]
    fragment: Fragment = build_code_fragment(node, discard_prefix(node.opening_value))
    neutral: Fragment = fragment.with_neutral_prefix()
    assert neutral.prefix == b"   "
    assert neutral.content == fragment.content
    assert neutral.position == fragment.position
    assert neutral.is_output
