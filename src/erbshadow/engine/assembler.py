# topmark:header:start
#
#   project      : ErbShadow
#   file         : assembler.py
#   file_relpath : src/erbshadow/engine/assembler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Assemble the fragment list of one template from its syntax tree.

`ShadowAssembler` walks the tree in document order and rebuilds the block
structure the tree does not spell out. Openers (``if``, ``each do``...) open a
scope; branch separators (``else``, ``when``, ``rescue``...) close the current
scope and open the next one; ``end`` closes the scope and lands in the
enclosing one. Closing a scope runs the housekeeping that makes the shadow
source lint cleanly:

* the last output expression of a block loses its ``_ =`` prefix, since the
  value of a block's final expression may legitimately be used;
* a block whose body produced no fragment gets a ``_ = nil;`` placeholder.

At the end of the document, ERB comments followed by code on the same line
are dropped, since a Ruby comment would swallow that code.

Usage:
    ```python
    assembler = ShadowAssembler(source, config)
    assembler.traverse(document)
    fragments = assembler.fragments
    ```

One assembler serves exactly one document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from erbshadow.config.logging import get_logger
from erbshadow.config.model import Config
from erbshadow.constants import ELSIF_KEYWORD
from erbshadow.core.diagnostics import DiagnosticLog
from erbshadow.core.errors import AssemblyStateError
from erbshadow.core.nodes import BLOCK_OPENERS, BRANCH_SEPARATORS, CASE_HEADERS, NodeKind
from erbshadow.engine.scopes import BlockStack
from erbshadow.transform.code import build_code_fragment, discard_prefix, statement_prefix
from erbshadow.transform.comment import build_comment_fragment
from erbshadow.transform.markup import MarkupTagTransformer
from erbshadow.transform.placeholder import PlaceholderBuilder
from erbshadow.transform.tags import TagKind, classify_tag

if TYPE_CHECKING:
    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.core.nodes import Node
    from erbshadow.engine.scopes import Scope
    from erbshadow.transform.fragment import Fragment

logger: ErbShadowLogger = get_logger(__name__)


class ShadowAssembler:
    """Collect the fragments of one template.

    Attributes:
        source (bytes): The template bytes.
        config (Config): Resolved configuration.
        diagnostics (DiagnosticLog): Notes about skipped nodes and unbalanced blocks.
    """

    def __init__(self, source: bytes, config: Config | None = None) -> None:
        self.source: bytes = source
        self.config: Config = config or Config()
        self.diagnostics: DiagnosticLog = DiagnosticLog()
        self._stack: BlockStack = BlockStack()
        self._markup: MarkupTagTransformer = MarkupTagTransformer(self.config.quote_style)
        self._placeholders: PlaceholderBuilder = PlaceholderBuilder(source)
        self._fragments: list[Fragment] | None = None
        self._traversed: bool = False

    @property
    def fragments(self) -> list[Fragment]:
        """The final fragment list, in document order.

        Raises:
            AssemblyStateError: If `traverse` has not run yet.
        """
        if self._fragments is None:
            raise AssemblyStateError("fragments requested before traverse()")
        return self._fragments

    @property
    def close_tag_counter(self) -> int:
        """The digit used by the most recent HTML close tag."""
        return self._markup.close_tag_counter

    def traverse(self, document: Node) -> None:
        """Walk ``document`` and collect its fragments.

        Args:
            document (Node): The root of the syntax tree.

        Raises:
            AssemblyStateError: If called more than once.
            InvariantViolationError: If a transformer breaks a byte-length invariant.
        """
        if self._traversed:
            raise AssemblyStateError("traverse() called twice on the same assembler")
        self._traversed = True

        pending: list[Node] = [document]
        while pending:
            node: Node = pending.pop()
            self._visit(node)
            pending.extend(reversed(node.children))

        self._finish_document()
        self._fragments = list(self._stack.root)
        logger.debug("Assembled %d fragment(s)", len(self._fragments))

    # ------------------------------ Dispatch ------------------------------

    def _visit(self, node: Node) -> None:
        match node.kind:
            case NodeKind.ERB_CONTENT:
                self._visit_content(node)
            case NodeKind.ERB_IF:
                if node.content_value.lstrip().startswith(ELSIF_KEYWORD):
                    self._close_scope(node)
                self._open_scope(node)
            case _ if node.kind in BLOCK_OPENERS:
                self._open_scope(node)
            case _ if node.kind in BRANCH_SEPARATORS:
                self._close_scope(node)
                self._open_scope(node)
            case NodeKind.ERB_END:
                self._close_scope(node)
                self._stack.push(build_code_fragment(node, statement_prefix(node.opening_value)))
            case NodeKind.HTML_OPEN_TAG:
                self._visit_open_tag(node)
            case NodeKind.HTML_CLOSE_TAG:
                self._visit_close_tag(node)
            case NodeKind.DOCUMENT | NodeKind.HTML_ELEMENT | NodeKind.TEXT | NodeKind.OTHER:
                pass

    def _visit_content(self, node: Node) -> None:
        kind: TagKind = classify_tag(node.opening_value)
        logger.trace("Line %d: %s tag", node.location.start.line, kind.value)
        if kind is TagKind.COMMENT:
            comment: Fragment | None = build_comment_fragment(node)
            if comment is None:
                self.diagnostics.add_info(
                    f"line {node.location.start.line}: comment dropped "
                    "(continuation line without indentation)"
                )
                return
            self._stack.push(comment)
        elif kind is TagKind.OUTPUT:
            self._stack.push(build_code_fragment(node, discard_prefix(node.opening_value)))
        else:
            self._stack.push(build_code_fragment(node, statement_prefix(node.opening_value)))

    def _visit_open_tag(self, node: Node) -> None:
        if node.contains_erb():
            logger.trace("Line %d: open tag hosts ERB, left blank", node.location.start.line)
            return
        fragment: Fragment | None = self._markup.transform_open_tag(
            node.range.slice(self.source),
            position=node.range.start,
            location=node.location,
            origin=node,
        )
        if fragment is not None:
            self._stack.push(fragment)

    def _visit_close_tag(self, node: Node) -> None:
        fragment: Fragment | None = self._markup.transform_close_tag(
            node.range.slice(self.source),
            position=node.range.start,
            location=node.location,
            origin=node,
        )
        if fragment is not None:
            self._stack.push(fragment)

    # ------------------------------ Scopes ------------------------------

    def _open_scope(self, node: Node) -> None:
        logger.trace(
            "Line %d: open scope for %s (depth %d)",
            node.location.start.line,
            node.kind.value,
            self._stack.depth + 1,
        )
        self._stack.push_scope()
        self._stack.push(build_code_fragment(node, statement_prefix(node.opening_value)))

    def _close_scope(self, closing: Node) -> None:
        self._adjust_last_output()
        if self._stack.depth == 0:
            line: int = closing.location.start.line
            logger.debug("Line %d: %s without an open block", line, closing.kind.value)
            self.diagnostics.add_info(f"line {line}: {closing.kind.value} without an open block")
            return

        body: Scope = self._stack.pop_scope()
        self._stack.extend(body)
        logger.trace(
            "Line %d: closed scope with %d fragment(s)", closing.location.start.line, len(body)
        )

        if len(body) == 1 and not _is_case_header(body[0]):
            placeholder: Fragment | None = self._placeholders.build(body[0], closing)
            if placeholder is not None:
                self._stack.push(placeholder)

    def _adjust_last_output(self) -> None:
        last: Fragment | None = self._stack.peek()
        if last is not None and last.is_output:
            self._stack.replace_last(last.with_neutral_prefix())

    # ------------------------------ Document ------------------------------

    def _finish_document(self) -> None:
        self._adjust_last_output()
        while self._stack.depth > 0:
            unclosed: Scope = self._stack.pop_scope()
            if unclosed:
                line: int = unclosed[0].location.start.line
                self.diagnostics.add_info(f"line {line}: block not closed at end of document")
            self._stack.extend(unclosed)

        root: Scope = self._stack.root
        kept: Scope = [
            fragment
            for index, fragment in enumerate(root)
            if not (fragment.is_comment and _followed_on_same_line(fragment, root[index + 1 :]))
        ]
        dropped: int = len(root) - len(kept)
        if dropped:
            logger.debug("Dropped %d comment(s) followed by code on the same line", dropped)
        root[:] = kept


def _is_case_header(fragment: Fragment) -> bool:
    return fragment.origin is not None and fragment.origin.kind in CASE_HEADERS


def _followed_on_same_line(comment: Fragment, following: Scope) -> bool:
    return any(comment.same_line(other) and not other.is_comment for other in following)
