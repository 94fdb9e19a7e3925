# topmark:header:start
#
#   project      : ErbShadow
#   file         : placeholder.py
#   file_relpath : src/erbshadow/transform/placeholder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Synthesize a filler statement for block bodies that hold no Ruby code.

A block whose body is pure markup turns into an empty Ruby block, which
linters report (``Lint/EmptyBlock``, ``Style/EmptyElse``). When a scope
closes holding only its opener's fragment, `PlaceholderBuilder` writes
``_ = nil;`` into the blank gap between the opener and the closing tag::

    <% if x %>    ->    "   if x;  "
      Hello!      ->    "_ = nil;"
    <% end %>     ->    "   end;  "

The placeholder is line anchored: it starts right after the first LF of the
gap (or at the gap start when the gap is a single line) and must fit in the
bytes before the next line break.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from erbshadow.config.logging import get_logger
from erbshadow.constants import PLACEHOLDER_STATEMENT
from erbshadow.core.positions import CR, LF
from erbshadow.transform.fragment import Fragment

if TYPE_CHECKING:
    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.core.nodes import Node

logger: ErbShadowLogger = get_logger(__name__)


class PlaceholderBuilder:
    """Build placeholder fragments over the blank gaps of one template.

    Attributes:
        source (bytes): The template bytes.
        placeholder (bytes): The statement written into the gap.
    """

    def __init__(self, source: bytes, placeholder: bytes = PLACEHOLDER_STATEMENT) -> None:
        self.source: bytes = source
        self.placeholder: bytes = placeholder

    def build(self, fragment: Fragment, closing: Node) -> Fragment | None:
        """Return a placeholder between ``fragment`` and ``closing``, or ``None``.

        Args:
            fragment (Fragment): The only fragment of the scope being closed.
            closing (Node): The node closing that scope (``end``, ``else``...).

        Returns:
            Fragment | None: A fragment filling the gap's first usable line, or
                ``None`` when that line is shorter than the placeholder.
        """
        start: int = fragment.position + len(fragment.code)
        stop: int = closing.opening_offset
        if stop <= start:
            return None

        gap: bytes = self.source[start:stop]
        first_lf: int = gap.find(LF)
        offset: int = first_lf + 1 if first_lf >= 0 else 0

        run: bytes = gap[offset:]
        next_lf: int = run.find(LF)
        if next_lf >= 0:
            run = run[:next_lf]
        if run.endswith(bytes([CR])) and next_lf >= 0:
            run = run[:-1]

        if len(run) < len(self.placeholder):
            logger.trace(
                "No placeholder at line %d: %d byte(s) available, %d needed",
                fragment.location.start.line,
                len(run),
                len(self.placeholder),
            )
            return None

        return Fragment(
            position=start + offset,
            tag_opening=b"",
            tag_closing=b"",
            prefix=b"",
            content=self.placeholder.ljust(len(run), b" "),
            location=fragment.location,
            origin=None,
        )
