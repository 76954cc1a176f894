"""Text flow layout for wren printer.

A block body is split into segments: runs of flowing content (words and
atomic inline units), nodes that must sit on their own lines, and blank
lines kept from the source. Flow runs are then greedy-filled to the width.

Units written with no whitespace between them (``Hello<b>!</b>,``) are
glued into one chunk so a wrap never inserts a space the source did not
have. Directive comments (``<%# wren:disable ... %>``) stay on the line of
the unit before them even when that overflows.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from wren.nodes import Node, Text
from wren.utils.text import collapse_whitespace, has_blank_line, split_runs


@dataclass(frozen=True, slots=True)
class ContentUnit:
    """An atomic piece of flow content (never split across lines)."""

    content: str
    attached: bool = False


@dataclass(frozen=True, slots=True)
class Chunk:
    """Glued units; the smallest thing the filler places on a line."""

    content: str
    attached: bool = False


@dataclass(frozen=True, slots=True)
class FlowRun:
    chunks: tuple[Chunk, ...]


@dataclass(frozen=True, slots=True)
class BlockItem:
    node: Node


@dataclass(frozen=True, slots=True)
class BlankLine:
    pass


Segment = FlowRun | BlockItem | BlankLine
Classifier = Callable[[Node], ContentUnit | None]


class TextFlowBuilder:
    """Splits bodies into segments and fills flow runs to a width."""

    __slots__ = ("max_line_length",)

    def __init__(self, max_line_length: int):
        self.max_line_length = max_line_length

    def segments(self, children: Sequence[Node], classify: Classifier) -> list[Segment]:
        """Split a body into flow runs, own-line nodes and blank lines.

        Args:
            children: Body nodes in source order, whitespace Text included.
            classify: Returns the atomic unit for an inline-capable node, or
                None when the node must be laid out on its own lines.
        """
        segments: list[Segment] = []
        chunks: list[Chunk] = []
        pending_space = False
        pending_blank = False
        started = False

        def flush() -> None:
            if chunks:
                segments.append(FlowRun(tuple(chunks)))
                chunks.clear()

        def begin_item() -> None:
            nonlocal pending_blank, started
            if pending_blank and started:
                flush()
                segments.append(BlankLine())
            pending_blank = False
            started = True

        def add(unit: ContentUnit) -> None:
            nonlocal pending_space
            begin_item()
            if chunks and not pending_space:
                last = chunks[-1]
                chunks[-1] = Chunk(last.content + unit.content, last.attached)
            else:
                chunks.append(Chunk(unit.content, unit.attached))
            pending_space = False

        for child in children:
            if isinstance(child, Text):
                for run, is_space in split_runs(child.content):
                    if is_space:
                        pending_space = True
                        if has_blank_line(run):
                            pending_blank = True
                    else:
                        add(ContentUnit(run))
                continue

            unit = classify(child)
            if unit is None:
                begin_item()
                flush()
                segments.append(BlockItem(child))
                pending_space = True
            else:
                add(unit)

        flush()
        return segments

    def fill(self, chunks: Sequence[Chunk], indent_columns: int) -> list[str]:
        """Greedy-fill chunks into lines starting at ``indent_columns``."""
        lines: list[str] = []
        current = ""
        for chunk in chunks:
            if not current:
                current = chunk.content
                continue
            candidate = f"{current} {chunk.content}"
            if chunk.attached or indent_columns + len(candidate) <= self.max_line_length:
                current = candidate
            else:
                lines.append(current)
                current = chunk.content
        if current:
            lines.append(current)
        return lines

    def inline(self, children: Sequence[Node], render: Callable[[Node], str]) -> str:
        """Render a body on one line, collapsing each whitespace run to a space."""
        parts: list[str] = []
        for child in children:
            if isinstance(child, Text):
                parts.append(collapse_whitespace(child.content))
            else:
                parts.append(render(child))
        return "".join(parts)
