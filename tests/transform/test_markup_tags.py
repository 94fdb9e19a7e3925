# topmark:header:start
#
#   project      : ErbShadow
#   file         : test_markup_tags.py
#   file_relpath : tests/transform/test_markup_tags.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for HTML tag rewriting."""

from __future__ import annotations

from erbshadow.config.model import QuoteStyle
from erbshadow.core.positions import ByteRange, LineIndex, Location, line_break_offsets
from erbshadow.transform.fragment import Fragment
from erbshadow.transform.markup import MarkupTagTransformer, is_keepable_attribute
from tests.conftest import parametrize


def _location(data: bytes) -> Location:
    return LineIndex(data).location(ByteRange(0, len(data)))


def _open(raw: str, style: QuoteStyle = QuoteStyle.DOUBLE) -> bytes | None:
    data: bytes = raw.encode("utf-8")
    fragment: Fragment | None = MarkupTagTransformer(style).transform_open_tag(
        data, position=0, location=_location(data)
    )
    return None if fragment is None else fragment.code


def _close(transformer: MarkupTagTransformer, raw: bytes) -> bytes | None:
    fragment: Fragment | None = transformer.transform_close_tag(
        raw, position=0, location=_location(raw)
    )
    return None if fragment is None else fragment.code


@parametrize(
    "raw, expected",
    [
        ("<div>", " div;"),
        ("<br/>", " br;"),
        ("<br />", " br;"),
        ('<div id="main">', ' div id="";'),
        ('<div id="main" class="x">', ' div id="";'),
        ('<a href="/" title="Home">', ' a href="", title="";'),
        ('<input disabled name="q">', ' input          name="";'),
        ('<div class="x">', " div;"),
        ("<div data-id='7'>", " div;"),
        ("<td colspan=2>", " td;"),
        ('<p lang="é">', ' p lang="";'),
        ('<p _1="a" __FILE__="b">', " p;"),
    ],
)
def test_open_tags(raw: str, expected: str) -> None:
    """Open tags become calls with emptied literal arguments at original offsets."""
    data: bytes = raw.encode("utf-8")
    assert _open(raw) == expected.encode("utf-8").ljust(len(data))


def test_multiline_open_tag_keeps_line_breaks() -> None:
    """Arguments on separate lines stay on their lines, separated by commas."""
    raw: str = '<div\n  id="x"\n  lang="en">'
    code: bytes | None = _open(raw)
    assert code == b' div\n  id="",\n  lang="";  '
    assert line_break_offsets(code) == line_break_offsets(raw.encode("utf-8"))


def test_value_spanning_lines_moves_the_terminator() -> None:
    """The terminator never lands on a line break."""
    assert _open('<div id="a\nb">') == b' div id=""\n  ;'


def test_terminator_moves_to_the_last_byte_before_a_line_break() -> None:
    """A tag whose name is followed by a line break ends at its ``>``."""
    assert _open("<div\n  class='x'>") == b" div\n" + b" " * 11 + b";"


def test_adjacent_attributes_keep_their_separator() -> None:
    """An attribute with no byte before it is dropped so the previous one gets its comma."""
    assert _open('<a href=""title="">') == b' a href="";'.ljust(19)
    assert _open('<a href="" title=""lang="">') == b' a href="",title="";'.ljust(27)


def test_single_quote_style() -> None:
    """The configured quote style applies to every emptied value."""
    assert _open('<p id="x" title="y">', QuoteStyle.SINGLE) == b" p id='', title=''; "


def test_malformed_open_tag_yields_nothing() -> None:
    """Tags outside the simple grammar are not rewritten."""
    assert _open('<div title="a>b">') is None
    assert _open("<1a>") is None


def test_close_tag_counter_rotates() -> None:
    """Close tags carry a digit that advances 1..9, 0 on every rewritten tag."""
    transformer = MarkupTagTransformer()
    codes: list[bytes | None] = [_close(transformer, b"</p>") for _ in range(11)]
    assert codes[0] == b" p1;"
    assert codes[8] == b" p9;"
    assert codes[9] == b" p0;"
    assert codes[10] == b" p1;"
    assert transformer.close_tag_counter == 1


def test_unmatched_close_tag_does_not_advance_the_counter() -> None:
    """Only rewritten close tags use up a digit."""
    transformer = MarkupTagTransformer()
    assert _close(transformer, b"</ p>") is None
    assert transformer.close_tag_counter == 0
    assert _close(transformer, b"</p>") == b" p1;"


def test_close_tag_with_trailing_whitespace() -> None:
    """Whitespace before ``>`` stays blank."""
    assert _close(MarkupTagTransformer(), b"</div  >") == b" div1;  "


@parametrize(
    "name, keep",
    [
        (b"id", True),
        (b"href", True),
        (b"_private", True),
        (b"aria_label", True),
        ("étiquette".encode(), True),
        (b"class", False),
        (b"for", False),
        (b"data-id", False),
        (b"@click", False),
        (b"Title", False),
        (b":key", False),
        (b"__FILE__", False),
        (b"__LINE__", False),
        (b"__ENCODING__", False),
        (b"_1", False),
        (b"_9", False),
        (b"_10", True),
    ],
)
def test_is_keepable_attribute(name: bytes, keep: bool) -> None:
    """Only local-variable-shaped, non-keyword names are kept."""
    assert is_keepable_attribute(name) is keep
