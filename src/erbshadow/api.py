# topmark:header:start
#
#   project      : ErbShadow
#   file         : api.py
#   file_relpath : src/erbshadow/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public ErbShadow API (stable surface).

One call turns a template and its syntax tree into a shadow source:

```python
from erbshadow import api

result = api.render_shadow(template_bytes, ast_mapping, config={"quote_style": "single"})
rubocop_input = result.shadow
```

Notes:
    - ``document`` is either a `Node` tree or the JSON-compatible mapping emitted
      by the external parser (see `erbshadow.core.tree`).
    - ``config`` accepts a frozen `Config` or a plain mapping mirroring the TOML
      shape; the mapping is normalized internally.
    - A fresh assembler runs for every call, so calls are independent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from erbshadow.config.logging import get_logger
from erbshadow.config.model import Config, MutableConfig
from erbshadow.core.errors import InvariantViolationError
from erbshadow.core.nodes import Node
from erbshadow.core.positions import line_break_offsets
from erbshadow.core.tree import load_tree
from erbshadow.engine.assembler import ShadowAssembler
from erbshadow.engine.synthesizer import synthesize

if TYPE_CHECKING:
    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.core.diagnostics import Diagnostic
    from erbshadow.transform.fragment import Fragment

logger: ErbShadowLogger = get_logger(__name__)

__all__: list[str] = [
    "ShadowResult",
    "render_shadow",
]


@dataclass(frozen=True)
class ShadowResult:
    """Outcome of rendering one template.

    Attributes:
        source (bytes): The template bytes.
        shadow (bytes): The shadow source, same length and line breaks as ``source``.
        fragments (tuple[Fragment, ...]): The fragments written into ``shadow``.
        diagnostics (tuple[Diagnostic, ...]): Notes from config loading and assembly.
    """

    source: bytes
    shadow: bytes
    fragments: tuple[Fragment, ...]
    diagnostics: tuple[Diagnostic, ...]

    @property
    def is_empty(self) -> bool:
        """True when the template contributed no Ruby code (nothing to analyze)."""
        return not self.fragments


def _resolve_config(config: Config | Mapping[str, Any] | None) -> Config:
    if config is None:
        return Config()
    if isinstance(config, Config):
        return config
    overrides: MutableConfig = MutableConfig.from_toml_dict(dict(config))
    return MutableConfig.from_defaults().merge_with(overrides).freeze()


def render_shadow(
    source: bytes | str,
    document: Node | Mapping[str, Any],
    *,
    config: Config | Mapping[str, Any] | None = None,
) -> ShadowResult:
    """Render the shadow source of one template.

    Args:
        source (bytes | str): The template (``str`` is encoded as UTF-8).
        document (Node | Mapping[str, Any]): The syntax tree or its interchange mapping.
        config (Config | Mapping[str, Any] | None): Configuration; defaults apply when ``None``.

    Returns:
        ShadowResult: The shadow source and the fragments it was built from.

    Raises:
        TreeFormatError: If ``document`` is a malformed mapping.
        InvariantViolationError: If the shadow source breaks length or line invariance.
    """
    data: bytes = source.encode("utf-8") if isinstance(source, str) else source
    root: Node = document if isinstance(document, Node) else load_tree(document, data)
    resolved: Config = _resolve_config(config)

    assembler = ShadowAssembler(data, resolved)
    assembler.traverse(root)
    fragments: list[Fragment] = assembler.fragments
    shadow: bytes = synthesize(data, fragments)

    if len(shadow) != len(data):
        raise InvariantViolationError(
            f"shadow source is {len(shadow)} bytes, template is {len(data)} bytes"
        )
    if line_break_offsets(shadow) != line_break_offsets(data):
        raise InvariantViolationError("shadow source moved a line break")

    if not fragments:
        logger.info("Template contains no Ruby code")
    return ShadowResult(
        source=data,
        shadow=shadow,
        fragments=tuple(fragments),
        diagnostics=(*resolved.diagnostics, *assembler.diagnostics),
    )
