# topmark:header:start
#
#   project      : ErbShadow
#   file         : strategies_erbshadow.py
#   file_relpath : tests/strategies_erbshadow.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies generating plausible ERB templates.

Templates are assembled from pieces the test parser (`tests.templates`)
understands: text, ERB output/statement/comment tags, HTML tags and nested
control flow. They intentionally *approximate* real views so property tests
can explore a wide but bounded input space.
"""

from __future__ import annotations

from hypothesis import strategies as st

LINE_ENDINGS: tuple[str, ...] = ("\n", "\r\n")

CODE: tuple[str, ...] = ("foo", "bar_baz", "x.y(1)", "t('é')", "link_to 'a', b", "@item.name")

OPENERS: tuple[str, ...] = (
    "<% if ready? %>",
    "<% unless hidden %>",
    "<% items.each do |i| %>",
    "<%= form_with do |f| %>",
    "<% while more? %>",
    "<%- list.map { |x| -%>",
)


def s_line_ending() -> st.SearchStrategy[str]:
    """A line ending, LF or CRLF."""
    return st.sampled_from(LINE_ENDINGS)


def s_text() -> st.SearchStrategy[str]:
    """Markup text without tag delimiters, possibly spanning lines."""
    return st.lists(
        st.one_of(
            st.text(alphabet="abc xyzé!.\t", min_size=1, max_size=12),
            s_line_ending(),
        ),
        min_size=1,
        max_size=4,
    ).map("".join)


def s_erb_tag() -> st.SearchStrategy[str]:
    """A single ERB tag that is not control flow."""
    code = st.sampled_from(CODE)
    return st.one_of(
        code.map(lambda c: f"<%= {c} %>"),
        code.map(lambda c: f"<%== {c} %>"),
        code.map(lambda c: f"<% {c} %>"),
        code.map(lambda c: f"<%- {c} -%>"),
        st.sampled_from(
            (
                "<%# note %>",
                "<%# a\n   b %>",
                "<%# a\nb %>",
                "<%#\n  x %>",
                "<%# a\r\n   b %>",
                "<%# a\r\n  \r\n  b %>",
                "<%# a\r\n\r\n b %>",
            )
        ),
    )


def s_html_tag() -> st.SearchStrategy[str]:
    """An HTML open or close tag."""
    return st.sampled_from(
        (
            "<div>",
            "</div>",
            '<p id="x" class="y">',
            "</p>",
            "<br/>",
            '<a\n  href="/"\n  title="t">',
            "<input disabled value='v'>",
            '<span data-x="<%= v %>">',
            "</span>",
        )
    )


def s_leaf() -> st.SearchStrategy[str]:
    """Any non-block piece of a template."""
    return st.one_of(s_text(), s_erb_tag(), s_html_tag())


def _blocks(body: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    simple = st.tuples(st.sampled_from(OPENERS), body).map(lambda t: f"{t[0]}{t[1]}<% end %>")
    with_else = st.tuples(body, body).map(
        lambda t: f"<% if a %>{t[0]}<% elsif b %>{t[1]}<% else %>{t[0]}<% end %>"
    )
    case = st.tuples(body, body).map(
        lambda t: f"<% case v %>\n<% when 1 %>{t[0]}<% when 2 %>{t[1]}<% end %>"
    )
    rescue = st.tuples(body, body).map(
        lambda t: f"<% begin %>{t[0]}<% rescue %>{t[1]}<% ensure %><% end %>"
    )
    return st.one_of(simple, with_else, case, rescue)


def s_template(max_leaves: int = 12) -> st.SearchStrategy[str]:
    """A complete template of nested pieces."""
    body: st.SearchStrategy[str] = st.recursive(
        st.lists(s_leaf(), max_size=3).map("".join),
        lambda inner: st.lists(st.one_of(s_leaf(), _blocks(inner)), max_size=3).map("".join),
        max_leaves=max_leaves,
    )
    return body


def s_unbalanced_template() -> st.SearchStrategy[str]:
    """A template that may contain stray or missing ``end`` tags."""
    return st.lists(
        st.one_of(s_leaf(), st.sampled_from(("<% end %>", "<% if x %>", "<% else %>"))),
        max_size=8,
    ).map("".join)
