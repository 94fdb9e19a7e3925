# topmark:header:start
#
#   project      : ErbShadow
#   file         : test_block_stack.py
#   file_relpath : tests/engine/test_block_stack.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the scope stack used by the assembler."""

from __future__ import annotations

import pytest

from erbshadow.core.errors import InvariantViolationError
from erbshadow.core.nodes import NodeKind
from erbshadow.engine.scopes import BlockStack
from erbshadow.transform.code import build_code_fragment, statement_prefix
from erbshadow.transform.fragment import Fragment
from tests.templates import find_nodes, parse_template


def _fragments(template: str) -> list[Fragment]:
    _, root = parse_template(template)
    return [
        build_code_fragment(node, statement_prefix(node.opening_value))
        for node in find_nodes(root, NodeKind.ERB_CONTENT)
    ]


def test_root_scope_cannot_be_popped() -> None:
    """Popping the root scope is an invariant violation."""
    stack = BlockStack()
    assert stack.depth == 0
    with pytest.raises(InvariantViolationError):
        stack.pop_scope()


def test_push_pop_and_extend_preserve_order() -> None:
    """Fragments of a popped scope land in order in the enclosing scope."""
    a, b, c = _fragments("<% a %><% b %><% c %>")
    stack = BlockStack()
    stack.push(a)
    stack.push_scope()
    stack.push(b)
    stack.push(c)
    assert stack.depth == 1
    assert stack.peek() is c
    body: list[Fragment] = stack.pop_scope()
    stack.extend(body)
    assert stack.root == [a, b, c]
    assert stack.current is stack.root


def test_peek_and_replace_last_on_empty_scope() -> None:
    """An empty scope has no last fragment to replace."""
    (a,) = _fragments("<% a %>")
    stack = BlockStack()
    assert stack.peek() is None
    with pytest.raises(InvariantViolationError):
        stack.replace_last(a)
    stack.push(a)
    neutral: Fragment = a.with_neutral_prefix()
    stack.replace_last(neutral)
    assert stack.root == [neutral]
