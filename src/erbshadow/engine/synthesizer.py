# topmark:header:start
#
#   project      : ErbShadow
#   file         : synthesizer.py
#   file_relpath : src/erbshadow/engine/synthesizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render the shadow source from the template and its fragments.

The buffer starts as a copy of the template with every byte blanked except
line breaks, then each fragment's code is written at its absolute offset.
Nothing is inserted or removed, so every byte offset and every line/column of
the shadow source is valid, unmodified, against the template.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from erbshadow.config.logging import get_logger
from erbshadow.core.errors import InvariantViolationError
from erbshadow.core.positions import LINE_BREAKS, blank_preserving_line_breaks

if TYPE_CHECKING:
    from collections.abc import Iterable

    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.transform.fragment import Fragment

logger: ErbShadowLogger = get_logger(__name__)


def synthesize(source: bytes, fragments: Iterable[Fragment]) -> bytes:
    """Return the shadow source for ``source`` with ``fragments`` overlaid.

    Args:
        source (bytes): The template bytes.
        fragments (Iterable[Fragment]): Fragments to write, in any order.

    Returns:
        bytes: A buffer of ``len(source)`` bytes with the same line breaks.

    Raises:
        InvariantViolationError: If a fragment extends past the buffer or would
            overwrite or introduce a line break.
    """
    buffer: bytearray = blank_preserving_line_breaks(source)
    count: int = 0
    for fragment in fragments:
        code: bytes = fragment.code
        start: int = fragment.position
        stop: int = start + len(code)
        if start < 0 or stop > len(buffer):
            raise InvariantViolationError(
                f"fragment [{start}, {stop}) falls outside a {len(buffer)}-byte buffer"
            )
        for offset, byte in enumerate(code, start):
            if (byte in LINE_BREAKS) != (source[offset] in LINE_BREAKS) or (
                byte in LINE_BREAKS and byte != source[offset]
            ):
                raise InvariantViolationError(
                    f"fragment at byte {start} changes the line break at byte {offset}"
                )
        buffer[start:stop] = code
        count += 1
    logger.debug("Synthesized %d bytes from %d fragment(s)", len(buffer), count)
    return bytes(buffer)
