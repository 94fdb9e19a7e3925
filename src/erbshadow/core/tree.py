# topmark:header:start
#
#   project      : ErbShadow
#   file         : tree.py
#   file_relpath : src/erbshadow/core/tree.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build read-only `Node` trees from the external parser's interchange mapping.

The mapping is the JSON-compatible form an external HTML+ERB parser emits::

    {"type": "DocumentNode", "children": [
        {"type": "ERBContentNode",
         "tag_opening": {"value": "<%=", "range": [0, 3]},
         "content":     {"value": " foo ", "range": [3, 8]},
         "tag_closing": {"value": "%>", "range": [8, 10]},
         "range": [0, 10]}]}

Rules:
    * ``type`` is the external node name (see `NodeKind`); unknown names load as
      ``NodeKind.OTHER`` and their children are kept.
    * Ranges are half-open **byte** offsets into the template.
    * A token without ``value`` is sliced from the source bytes; a token value is
      UTF-8 text and must encode to exactly its range length.
    * A node without ``range`` spans its tokens and children; the document
      defaults to the whole source.
    * A missing ``location`` is computed from ``range``.

The loader walks the mapping with an explicit stack, so pathologically deep
templates cannot exhaust the interpreter's recursion limit.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from erbshadow.config.logging import get_logger
from erbshadow.core.errors import TreeFormatError
from erbshadow.core.nodes import Node, NodeKind, Token
from erbshadow.core.positions import ByteRange, LineIndex, Location, Point

if TYPE_CHECKING:
    from erbshadow.config.logging import ErbShadowLogger

logger: ErbShadowLogger = get_logger(__name__)

TOKEN_KEYS: tuple[str, ...] = ("tag_opening", "content", "tag_closing")


@dataclass
class _Frame:
    """Pending node whose children are still being built."""

    data: Mapping[str, Any]
    path: str
    children: list[Node] = field(default_factory=lambda: [])
    next_child: int = 0


def load_tree(data: Mapping[str, Any], source: bytes) -> Node:
    """Build a `Node` tree from an interchange mapping.

    Args:
        data (Mapping[str, Any]): The root mapping (normally a ``DocumentNode``).
        source (bytes): The template bytes the ranges refer to.

    Returns:
        Node: The root node.

    Raises:
        TreeFormatError: If the mapping is malformed or ranges fall outside ``source``.
    """
    index = LineIndex(source)
    root: Node | None = None
    stack: list[_Frame] = [_Frame(data=_as_mapping(data, "$"), path="$")]

    while stack:
        frame: _Frame = stack[-1]
        raw_children: Sequence[Any] = _children_of(frame.data, frame.path)
        if frame.next_child < len(raw_children):
            child_path: str = f"{frame.path}.children[{frame.next_child}]"
            child: Mapping[str, Any] = _as_mapping(raw_children[frame.next_child], child_path)
            frame.next_child += 1
            stack.append(_Frame(data=child, path=child_path))
            continue

        stack.pop()
        node: Node = _build_node(frame, source, index, is_root=not stack)
        if stack:
            stack[-1].children.append(node)
        else:
            root = node

    if root is None:  # pragma: no cover - the loop always produces a root
        raise TreeFormatError("empty tree")
    logger.debug("Loaded %s tree over %d bytes", root.kind.value, len(source))
    return root


def load_tree_json(text: str | bytes, source: bytes) -> Node:
    """Parse a JSON document and build a `Node` tree from it.

    Raises:
        TreeFormatError: If ``text`` is not valid JSON or not a valid tree.
    """
    try:
        data: Any = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise TreeFormatError(f"invalid AST JSON: {exc}") from exc
    return load_tree(_as_mapping(data, "$"), source)


def _build_node(frame: _Frame, source: bytes, index: LineIndex, *, is_root: bool) -> Node:
    data: Mapping[str, Any] = frame.data
    name: Any = data.get("type")
    if not isinstance(name, str):
        raise TreeFormatError(f"{frame.path}: missing node 'type'")
    kind: NodeKind = NodeKind.from_name(name)

    tokens: dict[str, Token | None] = {
        key: _load_token(data.get(key), source, f"{frame.path}.{key}") for key in TOKEN_KEYS
    }

    node_range: ByteRange
    if "range" in data:
        node_range = _load_range(data["range"], source, f"{frame.path}.range")
    elif is_root or kind is NodeKind.DOCUMENT:
        node_range = ByteRange(0, len(source))
    else:
        node_range = _span_of(tokens, frame.children, f"{frame.path}")

    location: Location
    if "location" in data:
        location = _load_location(data["location"], f"{frame.path}.location")
    else:
        location = index.location(node_range)

    return Node(
        kind=kind,
        range=node_range,
        location=location,
        tag_opening=tokens["tag_opening"],
        content=tokens["content"],
        tag_closing=tokens["tag_closing"],
        children=tuple(frame.children),
    )


def _load_token(raw: Any, source: bytes, path: str) -> Token | None:
    if raw is None:
        return None
    data: Mapping[str, Any] = _as_mapping(raw, path)
    token_range: ByteRange = _load_range(data.get("range"), source, f"{path}.range")
    value: Any = data.get("value")
    if value is None:
        return Token(value=token_range.slice(source), range=token_range)
    if not isinstance(value, str):
        raise TreeFormatError(f"{path}.value: expected a string")
    encoded: bytes = value.encode("utf-8")
    if len(encoded) != token_range.length:
        raise TreeFormatError(
            f"{path}: value is {len(encoded)} bytes but range covers {token_range.length}"
        )
    return Token(value=encoded, range=token_range)


def _load_range(raw: Any, source: bytes, path: str) -> ByteRange:
    if (
        not isinstance(raw, Sequence)
        or isinstance(raw, (str, bytes))
        or len(raw) != 2
        or not all(isinstance(v, int) for v in raw)
    ):
        raise TreeFormatError(f"{path}: expected [start, stop] byte offsets")
    start, stop = int(raw[0]), int(raw[1])
    if not 0 <= start <= stop <= len(source):
        raise TreeFormatError(f"{path}: range [{start}, {stop}) outside {len(source)} bytes")
    return ByteRange(start, stop)


def _load_location(raw: Any, path: str) -> Location:
    data: Mapping[str, Any] = _as_mapping(raw, path)
    try:
        start: Mapping[str, Any] = _as_mapping(data["start"], f"{path}.start")
        end: Mapping[str, Any] = _as_mapping(data["end"], f"{path}.end")
        return Location(
            start=Point(line=int(start["line"]), column=int(start["column"])),
            end=Point(line=int(end["line"]), column=int(end["column"])),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise TreeFormatError(f"{path}: malformed location ({exc})") from exc


def _span_of(tokens: Mapping[str, Token | None], children: Sequence[Node], path: str) -> ByteRange:
    ranges: list[ByteRange] = [t.range for t in tokens.values() if t is not None]
    ranges.extend(child.range for child in children)
    if not ranges:
        raise TreeFormatError(f"{path}: node has no 'range', tokens or children")
    return ByteRange(min(r.start for r in ranges), max(r.stop for r in ranges))


def _children_of(data: Mapping[str, Any], path: str) -> Sequence[Any]:
    raw: Any = data.get("children", ())
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        raise TreeFormatError(f"{path}.children: expected a list")
    return raw


def _as_mapping(raw: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise TreeFormatError(f"{path}: expected an object")
    return raw
