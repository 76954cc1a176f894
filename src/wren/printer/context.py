"""Output buffer and traversal scope for wren printer."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Scope:
    """Immutable per-call traversal flags.

    Passed down the visit methods and derived with ``dataclasses.replace``,
    so nested calls never see flags leaked from siblings.

    Attributes:
        inline: Render everything on the current line.
        in_conditional_open_tag: Set by callers rendering inside a multi-line
            conditional open tag; elements never render their open tag
            inline there.
    """

    inline: bool = False
    in_conditional_open_tag: bool = False


ROOT_SCOPE = Scope()


class PrinterContext:
    """Line buffer with an explicit indentation counter.

    ``push`` methods start new lines; ``push_to_last_line`` appends to the
    current one. The indent level only changes through ``indented()``.
    After ``freeze()`` all further output is discarded.
    """

    __slots__ = ("indent_width", "max_line_length", "indent_level", "lines", "frozen")

    def __init__(self, indent_width: int, max_line_length: int):
        self.indent_width = indent_width
        self.max_line_length = max_line_length
        self.indent_level = 0
        self.lines: list[str] = []
        self.frozen = False

    @property
    def indent_columns(self) -> int:
        return self.indent_level * self.indent_width

    @property
    def indent(self) -> str:
        return " " * self.indent_columns

    def indent_for(self, level: int) -> str:
        return " " * (level * self.indent_width)

    def push(self, line: str) -> None:
        if not self.frozen:
            self.lines.append(line)

    def push_with_indent(self, line: str) -> None:
        self.push(self.indent + line if line else line)

    def push_to_last_line(self, text: str) -> None:
        if self.frozen or not text:
            return
        if self.lines:
            self.lines[-1] += text
        else:
            self.lines.append(text)

    @contextmanager
    def indented(self) -> Iterator[None]:
        self.indent_level += 1
        try:
            yield
        finally:
            self.indent_level -= 1

    def freeze(self) -> None:
        self.frozen = True

    def fits(self, rendered: str) -> bool:
        """True if rendered text fits the width when placed at the indent."""
        lines = rendered.split("\n")
        if self.indent_columns + len(lines[0]) > self.max_line_length:
            return False
        return all(len(line) <= self.max_line_length for line in lines[1:])

    def getvalue(self) -> str:
        return "\n".join(self.lines)
