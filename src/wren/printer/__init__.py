"""Layout engine for wren.

Pipeline position:
    Document → (pre-rewriters) → FormatPrinter → text → (post-rewriters)

Components:
- FormatPrinter: traversal and indentation
- AttributeFormatter: quoting, conditional attributes, class wrapping
- TextFlowBuilder: greedy line fill for mixed text and inline content
- PrinterContext / Scope: line buffer and per-call traversal flags
"""

from __future__ import annotations

from wren.printer.attributes import AttributeFormatter
from wren.printer.context import ROOT_SCOPE, PrinterContext, Scope
from wren.printer.format_printer import FormatPrinter, format_document
from wren.printer.scripts import format_script_content, render_script_tag
from wren.printer.text_flow import (
    BlankLine,
    BlockItem,
    Chunk,
    ContentUnit,
    FlowRun,
    TextFlowBuilder,
)

__all__ = [
    "ROOT_SCOPE",
    "AttributeFormatter",
    "BlankLine",
    "BlockItem",
    "Chunk",
    "ContentUnit",
    "FlowRun",
    "FormatPrinter",
    "PrinterContext",
    "Scope",
    "TextFlowBuilder",
    "format_document",
    "format_script_content",
    "render_script_tag",
]
