# topmark:header:start
#
#   project      : ErbShadow
#   file         : scopes.py
#   file_relpath : src/erbshadow/engine/scopes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The block stack: one scope of fragments per open ERB block.

Index 0 is the root scope. It holds the document's final fragment list and
can never be popped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from erbshadow.core.errors import InvariantViolationError

if TYPE_CHECKING:
    from erbshadow.transform.fragment import Fragment

Scope = list["Fragment"]


class BlockStack:
    """Stack of scopes, each an ordered list of fragments."""

    def __init__(self) -> None:
        self._scopes: list[Scope] = [[]]

    @property
    def depth(self) -> int:
        """Number of open scopes above the root scope."""
        return len(self._scopes) - 1

    @property
    def root(self) -> Scope:
        """The root scope."""
        return self._scopes[0]

    @property
    def current(self) -> Scope:
        """The innermost open scope."""
        return self._scopes[-1]

    def push_scope(self) -> None:
        """Open a new, empty scope."""
        self._scopes.append([])

    def pop_scope(self) -> Scope:
        """Close the innermost scope and return its fragments.

        Raises:
            InvariantViolationError: If only the root scope is open.
        """
        if len(self._scopes) == 1:
            raise InvariantViolationError("cannot pop the root scope")
        return self._scopes.pop()

    def push(self, fragment: Fragment) -> None:
        """Append ``fragment`` to the current scope."""
        self._scopes[-1].append(fragment)

    def extend(self, fragments: Scope) -> None:
        """Append ``fragments`` to the current scope, in order."""
        self._scopes[-1].extend(fragments)

    def peek(self) -> Fragment | None:
        """Return the last fragment of the current scope, or ``None`` if it is empty."""
        scope: Scope = self._scopes[-1]
        return scope[-1] if scope else None

    def replace_last(self, fragment: Fragment) -> None:
        """Replace the last fragment of the current scope.

        Raises:
            InvariantViolationError: If the current scope is empty.
        """
        scope: Scope = self._scopes[-1]
        if not scope:
            raise InvariantViolationError("cannot replace the last fragment of an empty scope")
        scope[-1] = fragment
