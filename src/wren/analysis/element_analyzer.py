"""Element layout classification for wren.

Decides, for one element at the printer's current indent, whether its open
tag, content and close tag stay on the current line. Rules, in order:

1. Content-preserving elements (pre, script, style, textarea) are block.
2. Void and self-closing elements are fully inline.
3. The open tag breaks onto several lines inside a multi-line conditional
   open tag, when it holds control flow spanning lines, or when it has
   several attributes and does not fit the width.
4. Content is inline when the body is empty, or when it holds only text
   without line breaks, output tags and fully inline inline elements.
   Elements whose inline rendering would exceed the width get block
   content instead, inline elements included.
5. The close tag follows the content.

Ambiguous cases fall back to block layout.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from wren.analysis.decision import LayoutDecision
from wren.nodes import Attribute, Element, ScriptControlFlow, ScriptOutput, Text
from wren.utils.constants import CONTENT_PRESERVING_ELEMENTS, INLINE_ELEMENTS
from wren.utils.text import is_blank

if TYPE_CHECKING:
    from wren.printer.attributes import AttributeFormatter
    from wren.printer.context import PrinterContext, Scope

logger = logging.getLogger(__name__)


class ElementAnalyzer:
    """Pure layout classifier for elements.

    Args:
        output: Printer buffer; only its indent and width are read.
        attributes: Formatter used to measure single-line open tags.
        measure: Renders an element fully inline, for width checks.
    """

    __slots__ = ("_output", "_attributes", "_measure")

    def __init__(
        self,
        output: PrinterContext,
        attributes: AttributeFormatter,
        measure: Callable[[Element, Scope], str],
    ):
        self._output = output
        self._attributes = attributes
        self._measure = measure

    def analyze(self, element: Element, scope: Scope) -> LayoutDecision:
        """Classify an element at the current indent."""
        tag = element.tag_name.lower()
        if tag in CONTENT_PRESERVING_ELEMENTS:
            return LayoutDecision.block()
        if element.is_void or element.self_closing:
            return LayoutDecision.inline()

        open_inline = self.open_tag_inline(element, scope)
        if not any(not _is_blank_text(child) for child in element.children):
            return LayoutDecision(open_inline, True, True)

        content_inline = open_inline and self.content_inline(element, scope)
        return LayoutDecision(open_inline, content_inline, content_inline)

    def open_tag_inline(self, element: Element, scope: Scope) -> bool:
        if scope.in_conditional_open_tag:
            return False
        if has_multiline_control_flow(element):
            return False
        attribute_count = sum(isinstance(item, Attribute) for item in element.attributes)
        if attribute_count <= 1:
            return True
        return self._output.fits(self._attributes.open_tag_inline(element))

    def content_inline(self, element: Element, scope: Scope) -> bool:
        children = element.children
        if any(isinstance(child, Text) and "\n" in child.content for child in children):
            return False

        for child in children:
            if isinstance(child, (Text, ScriptOutput)):
                continue
            if isinstance(child, Element):
                if child.tag_name.lower() not in INLINE_ELEMENTS:
                    return False
                if not self.analyze(child, scope).fully_inline:
                    return False
                continue
            # Control flow, execution tags, comments and doctypes need own lines
            return False

        if not self._output.fits(self._measure(element, scope)):
            logger.debug("<%s> content exceeds width; using block layout", element.tag_name)
            return False
        return True


def has_multiline_control_flow(element: Element) -> bool:
    """True if the open tag holds control flow spanning several lines."""
    return any(
        isinstance(item, ScriptControlFlow) and item.location.is_multiline
        for item in element.attributes
    )


def _is_blank_text(node: object) -> bool:
    return isinstance(node, Text) and is_blank(node.content)
