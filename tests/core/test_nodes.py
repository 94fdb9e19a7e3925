# topmark:header:start
#
#   project      : ErbShadow
#   file         : test_nodes.py
#   file_relpath : tests/core/test_nodes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the read-only syntax tree view."""

from __future__ import annotations

from erbshadow.core.nodes import BLOCK_OPENERS, BRANCH_SEPARATORS, CASE_HEADERS, NodeKind
from tests.templates import find_nodes, parse_template


def test_from_name_maps_unknown_names_to_other() -> None:
    """External node names map to kinds, unknown ones to OTHER."""
    assert NodeKind.from_name("ERBIfNode") is NodeKind.ERB_IF
    assert NodeKind.from_name("ERBYieldNode") is NodeKind.OTHER


def test_is_erb() -> None:
    """Only ERB node kinds report ``is_erb``."""
    assert NodeKind.ERB_END.is_erb
    assert not NodeKind.HTML_OPEN_TAG.is_erb
    assert not NodeKind.DOCUMENT.is_erb


def test_kind_groups_are_disjoint() -> None:
    """Openers and separators never overlap; case headers are openers."""
    assert not BLOCK_OPENERS & BRANCH_SEPARATORS
    assert CASE_HEADERS <= BLOCK_OPENERS


def test_contains_erb_detects_erb_in_attributes() -> None:
    """An open tag hosting ERB in an attribute value reports it."""
    _, root = parse_template('<div class="<%= cls %>"><p id="x"></p></div>')
    tags = find_nodes(root, NodeKind.HTML_OPEN_TAG)
    assert [t.content_value for t in tags] == [b"div", b"p"]
    assert tags[0].contains_erb()
    assert not tags[1].contains_erb()


def test_opening_offset_and_values() -> None:
    """Accessors expose the delimiters and fall back for missing tokens."""
    source, root = parse_template("ab<%- x -%>")
    node = find_nodes(root, NodeKind.ERB_CONTENT)[0]
    assert node.opening_offset == 2
    assert node.opening_value == b"<%-"
    assert node.closing_value == b"-%>"
    assert node.content_value == b" x "
    text = find_nodes(root, NodeKind.TEXT)[0]
    assert text.opening_offset == 0
    assert text.opening_value == b""
    assert text.range.slice(source) == b"ab"
