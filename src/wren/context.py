"""Per-file format context for wren."""

from __future__ import annotations

from dataclasses import dataclass, field

from wren.config import DEFAULT_CONFIG, FormatterConfig


@dataclass(frozen=True, slots=True)
class FormatContext:
    """Everything a single format call knows beyond the tree itself.

    Handed to the layout engine and to every rewriter. Never shared between
    files.

    Attributes:
        source: Original template text.
        file_path: Path used in results and error messages.
        config: Layout and pipeline settings.
        force: Format even when the file carries an ignore directive.
    """

    source: str = ""
    file_path: str = "<template>"
    config: FormatterConfig = field(default=DEFAULT_CONFIG)
    force: bool = False

    @property
    def indent_width(self) -> int:
        return self.config.indent_width

    @property
    def max_line_length(self) -> int:
        return self.config.max_line_length
