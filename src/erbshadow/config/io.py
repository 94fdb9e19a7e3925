# topmark:header:start
#
#   project      : ErbShadow
#   file         : io.py
#   file_relpath : src/erbshadow/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O and discovery helpers for ErbShadow configuration.

This module centralizes **pure** helpers for reading TOML used by the
configuration layer. Keeping them out of `erbshadow.config.model` keeps the
model import-light.

Notes:
    * Parsing uses ``tomlkit`` and unwraps the document into plain Python
      values, so callers never see tomlkit item types.
    * Load errors are logged and produce an empty table; a broken config file
      never aborts a run.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeGuard

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from erbshadow.config.logging import get_logger
from erbshadow.constants import ERBSHADOW_TOML_NAME, PYPROJECT_TOML_NAME, PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from erbshadow.config.logging import ErbShadowLogger

logger: ErbShadowLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Return True if ``val`` is a TOML table (a ``dict``)."""
    return isinstance(val, dict)


def is_any_list(val: Any) -> TypeGuard[list[Any]]:
    """Return True if ``val`` is a list."""
    return isinstance(val, list)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The string value, or ``None`` when absent or not a string.
    """
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return value
    if value is not None:
        logger.warning("Ignoring non-string value for %r: %r", key, value)
    return None


def get_list_value(table: TomlTable, key: str, default: list[Any] | None = None) -> list[Any]:
    """Extract a list value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (list[Any] | None): Default list when the key is missing or not a list.

    Returns:
        list[Any]: The list value, ``default``, or an empty list.
    """
    value: Any | None = table.get(key)
    if is_any_list(value):
        return value
    return default or []


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``erbshadow.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content, or an empty dict on failure.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    try:
        data: Any = tomlkit.parse(text).unwrap()
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}
    return data if is_toml_table(data) else {}


def _declares_root(path: Path) -> bool:
    data: TomlTable = load_toml_dict(path)
    if path.name == PYPROJECT_TOML_NAME:
        data = get_table_value(get_table_value(data, "tool"), PYPROJECT_TOOL_SECTION)
    return bool(data.get("root", False))


def discover_config_files(start: Path) -> list[Path]:
    """Return config files discovered by walking upward from ``start``.

    Layered discovery semantics:
      * Directories are visited from ``start`` up to the filesystem root and
        files are returned **root-most -> nearest**, so a later merge gives
        precedence to the nearest file.
      * In one directory, ``pyproject.toml`` comes before ``erbshadow.toml``
        (the tool file overrides the project file).
      * A file declaring ``root = true`` stops the walk after its directory.

    Args:
        start (Path): Directory (or file in the directory) where discovery starts.

    Returns:
        list[Path]: Discovered config file paths ordered for stable merging.
    """
    cur: Path = start.resolve()
    if cur.is_file():
        cur = cur.parent

    per_dir: list[list[Path]] = []
    while True:
        dir_entries: list[Path] = []
        stop_here: bool = False
        for name in (PYPROJECT_TOML_NAME, ERBSHADOW_TOML_NAME):
            candidate: Path = cur / name
            if candidate.is_file():
                dir_entries.append(candidate)
                logger.debug("Discovered config file: %s", candidate)
                stop_here = stop_here or _declares_root(candidate)
        if dir_entries:
            per_dir.append(dir_entries)

        parent: Path = cur.parent
        if stop_here:
            logger.debug("Stopping upward config discovery at %s due to root=true", cur)
            break
        if parent == cur:
            break
        cur = parent

    ordered: list[Path] = []
    for dir_list in reversed(per_dir):
        ordered.extend(dir_list)
    return ordered
