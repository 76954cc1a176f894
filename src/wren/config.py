"""Formatter configuration for wren.

Configuration is a frozen dataclass so a single instance can be shared by
every file a Runner processes. ``FormatterConfig.from_mapping`` reads the
``formatter`` section of an already-loaded configuration mapping:

    ```
    formatter:
      indentWidth: 2
      maxLineLength: 80
      rewriter:
        pre: [tailwind-class-sorter]
        post: []
    ```

Locating and loading configuration files is left to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from wren.exceptions import ConfigurationError
from wren.utils.constants import DEFAULT_INDENT_WIDTH, DEFAULT_MAX_LINE_LENGTH


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Layout and pipeline settings.

    Attributes:
        indent_width: Spaces per indentation level.
        max_line_length: Target maximum line width.
        rewriter_pre: Names of AST rewriters run before layout, in order.
        rewriter_post: Names of string rewriters run after layout, in order.
    """

    indent_width: int = DEFAULT_INDENT_WIDTH
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    rewriter_pre: tuple[str, ...] = ()
    rewriter_post: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require_positive_int("indentWidth", self.indent_width)
        _require_positive_int("maxLineLength", self.max_line_length)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> FormatterConfig:
        """Build a config from a parsed configuration mapping.

        Args:
            data: Full configuration mapping; only its ``formatter`` section
                is read. None or a missing section yields the defaults.

        Raises:
            ConfigurationError: If a value has the wrong type or range.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("configuration must be a mapping")
        section = data.get("formatter") or {}
        if not isinstance(section, Mapping):
            raise ConfigurationError("must be a mapping", key="formatter")

        rewriter = section.get("rewriter") or {}
        if not isinstance(rewriter, Mapping):
            raise ConfigurationError("must be a mapping", key="formatter.rewriter")

        return cls(
            indent_width=section.get("indentWidth", DEFAULT_INDENT_WIDTH),
            max_line_length=section.get("maxLineLength", DEFAULT_MAX_LINE_LENGTH),
            rewriter_pre=_string_list("formatter.rewriter.pre", rewriter.get("pre")),
            rewriter_post=_string_list("formatter.rewriter.post", rewriter.get("post")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Mapping in the same shape ``from_mapping`` reads."""
        return {
            "formatter": {
                "indentWidth": self.indent_width,
                "maxLineLength": self.max_line_length,
                "rewriter": {
                    "pre": list(self.rewriter_pre),
                    "post": list(self.rewriter_post),
                },
            }
        }


def _require_positive_int(key: str, value: object) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"must be a positive integer, got {value!r}", key=key)


def _string_list(key: str, value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError(f"must be a list of names, got {value!r}", key=key)
    if not all(isinstance(item, str) and item for item in value):
        raise ConfigurationError("every entry must be a non-empty string", key=key)
    return tuple(value)


DEFAULT_CONFIG = FormatterConfig()
