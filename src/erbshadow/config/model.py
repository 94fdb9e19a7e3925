# topmark:header:start
#
#   project      : ErbShadow
#   file         : model.py
#   file_relpath : src/erbshadow/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `QuoteStyle`: the preferred quote character for emptied attribute values.
    - `Config`: an immutable, runtime snapshot consumed by the assembly engine.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Scope:
    - *In scope*: data shapes, field-level defaults, merge policy
      (`MutableConfig.merge_with`), and freeze/thaw mechanics.
    - *Out of scope*: filesystem discovery and TOML I/O (`erbshadow.config.io`)
      and RuboCop YAML (`erbshadow.config.rubocop`).

TOML shape (``erbshadow.toml`` or ``[tool.erbshadow]`` in ``pyproject.toml``)::

    quote_style = "single"
    extensions = [".html.erb", ".turbo_stream.erb"]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from erbshadow.config.io import (
    discover_config_files,
    get_list_value,
    get_string_value_or_none,
    get_table_value,
    is_toml_table,
    load_toml_dict,
)
from erbshadow.config.logging import get_logger
from erbshadow.constants import PYPROJECT_TOML_NAME, PYPROJECT_TOOL_SECTION
from erbshadow.core.diagnostics import DiagnosticLog
from erbshadow.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from erbshadow.config.io import TomlTable
    from erbshadow.config.logging import ErbShadowLogger
    from erbshadow.core.diagnostics import Diagnostic

logger: ErbShadowLogger = get_logger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".html.erb",)


class QuoteStyle(Enum):
    """Preferred string literal quote style."""

    DOUBLE = "double"
    SINGLE = "single"

    @property
    def quote_char(self) -> str:
        """The quote character of this style."""
        return "'" if self is QuoteStyle.SINGLE else '"'

    @classmethod
    def parse(cls, name: str) -> QuoteStyle:
        """Return the style named ``name`` (case-insensitive).

        Raises:
            ConfigError: If ``name`` is not a known style.
        """
        normalized: str = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        choices: str = ", ".join(m.value for m in cls)
        raise ConfigError(f"Unknown quote style {name!r} (expected one of: {choices})")


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for ErbShadow.

    Attributes:
        quote_style (QuoteStyle): Quote style of emptied attribute values.
        extensions (tuple[str, ...]): Template file extensions; only used to render
            linter include globs.
        config_files (tuple[Path | str, ...]): Paths or identifiers of the merged sources.
        diagnostics (tuple[Diagnostic, ...]): Warnings or errors encountered while loading
            or merging config.
    """

    quote_style: QuoteStyle = QuoteStyle.DOUBLE
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    config_files: tuple[Path | str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this config."""
        draft = MutableConfig(
            quote_style=self.quote_style,
            extensions=list(self.extensions),
            config_files=list(self.config_files),
        )
        draft.diagnostics.extend(self.diagnostics)
        return draft


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    ``None``/empty fields mean "inherit" so that `merge_with` can tell an
    explicit value from an absent one.

    Attributes:
        quote_style (QuoteStyle | None): Preferred quote style, ``None`` = inherit.
        extensions (list[str]): Template file extensions, empty = inherit.
        config_files (list[Path | str]): Paths or identifiers of the merged sources.
        diagnostics (DiagnosticLog): Warnings or errors encountered while loading.
    """

    quote_style: QuoteStyle | None = None
    extensions: list[str] = field(default_factory=lambda: [])
    config_files: list[Path | str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, applying defaults."""
        return Config(
            quote_style=self.quote_style or QuoteStyle.DOUBLE,
            extensions=tuple(self.extensions) or DEFAULT_EXTENSIONS,
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft holding the built-in defaults."""
        return cls(
            quote_style=QuoteStyle.DOUBLE,
            extensions=list(DEFAULT_EXTENSIONS),
            config_files=["<defaults>"],
        )

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML table.

        Invalid values are recorded as diagnostics and ignored, so one bad key
        does not discard the rest of the file.

        Args:
            data (TomlTable): The ErbShadow table (top level of ``erbshadow.toml``).
            config_file (Path | None): Optional path of the source file, for provenance.

        Returns:
            MutableConfig: The resulting draft.
        """
        draft: MutableConfig = cls()
        if config_file is not None:
            draft.config_files = [config_file]
        source: str = str(config_file) if config_file else "<dict>"

        raw_style: str | None = get_string_value_or_none(data, "quote_style")
        if raw_style is not None:
            try:
                draft.quote_style = QuoteStyle.parse(raw_style)
            except ConfigError as exc:
                logger.warning("%s: %s", source, exc)
                draft.diagnostics.add_warning(f"{source}: {exc}")

        raw_extensions: list[Any] = get_list_value(data, "extensions")
        for ext in raw_extensions:
            if isinstance(ext, str) and ext:
                draft.extensions.append(ext if ext.startswith(".") else f".{ext}")
            else:
                draft.diagnostics.add_warning(f"{source}: ignoring extension {ext!r}")

        logger.trace("TOML config from %s: %s", source, draft)
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``erbshadow.toml`` and ``pyproject.toml`` (``[tool.erbshadow]``).

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft if successful; ``None`` when a
                ``pyproject.toml`` has no ``[tool.erbshadow]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool: TomlTable = get_table_value(toml_data, "tool")
            if not is_toml_table(tool.get(PYPROJECT_TOOL_SECTION)):
                logger.debug("[tool.%s] section missing in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = get_table_value(tool, PYPROJECT_TOOL_SECTION)

        return cls.from_toml_dict(toml_data, config_file=path)

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: list[Path] | None = None,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Merge order (lowest -> highest precedence):
            1) Built-in defaults
            2) Project configs discovered upward from ``anchor``, root-most first
            3) Extra config files passed explicitly (in the order provided)

        Args:
            anchor (Path | None): Discovery start directory (or a file in it);
                discovery is skipped when ``None``.
            extra_config_files (list[Path] | None): Files merged after discovery.

        Returns:
            MutableConfig: The merged draft.
        """
        draft: MutableConfig = cls.from_defaults()
        paths: list[Path] = discover_config_files(anchor) if anchor is not None else []
        paths.extend(extra_config_files or ())
        for path in paths:
            layer: MutableConfig | None = cls.from_toml_file(path)
            if layer is not None:
                draft = draft.merge_with(layer)
        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableConfig): The config whose values override those of this draft.

        Returns:
            MutableConfig: A new draft representing the merged result.
        """
        merged = MutableConfig(
            quote_style=other.quote_style if other.quote_style is not None else self.quote_style,
            extensions=list(other.extensions or self.extensions),
            config_files=self.config_files + other.config_files,
        )
        merged.diagnostics.extend(self.diagnostics)
        merged.diagnostics.extend(other.diagnostics)
        return merged
