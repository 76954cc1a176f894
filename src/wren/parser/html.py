"""HTML parsing for wren parser.

Provides mixin for elements, open-tag items, attributes, close tags,
comments, doctypes and raw-text bodies.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from wren.exceptions import ErrorCode
from wren.lexer import LexerError
from wren.nodes import Attribute, Doctype, Element, HTMLComment, Text
from wren.utils.constants import CONTENT_PRESERVING_ELEMENTS, VOID_ELEMENTS

if TYPE_CHECKING:
    from collections.abc import Callable

    from wren.exceptions import TemplateSyntaxError
    from wren.lexer import Lexer, ScriptToken
    from wren.nodes import Node, ScriptTag

_CLOSE_TAG = re.compile(r"</([A-Za-z][A-Za-z0-9:_.\-]*)\s*>")
_CLOSE_TAG_NAME = re.compile(r"</([A-Za-z][A-Za-z0-9:_.\-]*)")


class HtmlParsingMixin:
    """Mixin for parsing HTML constructs.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _lexer: Lexer
        _errors: list[TemplateSyntaxError]

        def _error(self, message: str, offset: int, code: ErrorCode) -> None: ...
        def _parse_children(
            self, open_elements: tuple[str, ...] = (), in_flow: bool = False
        ) -> list[Node]: ...

        # From ScriptParsingMixin
        def _parse_script(
            self, parse_body: Callable[[], list[Node]], in_flow: bool
        ) -> Node | None: ...
        def _script_node(self, token: ScriptToken) -> ScriptTag: ...

    # ─────────────────────────────────────────────────────────────────────────
    # Elements
    # ─────────────────────────────────────────────────────────────────────────

    def _parse_element(self, open_elements: tuple[str, ...]) -> Element:
        """Parse an element starting at ``<name``.

        Raw-text elements (script, style, pre, textarea) keep their body as a
        single Text node. Mismatched or missing close tags are recorded and
        the element is closed implicitly.
        """
        lexer = self._lexer
        start = lexer.pos
        lexer.advance()
        tag_name = lexer.scan_tag_name()
        attributes = tuple(self._parse_open_tag_items(in_flow=False))

        self_closing = False
        if lexer.startswith("/>"):
            self_closing = True
            lexer.advance(2)
        elif lexer.startswith(">"):
            lexer.advance()
        else:
            self._error(f"Unclosed open tag <{tag_name}>", start, ErrorCode.UNCLOSED_OPEN_TAG)
            return Element(
                location=lexer.location(start),
                tag_name=tag_name,
                attributes=attributes,
                has_close_tag=False,
            )

        lowered = tag_name.lower()
        is_void = lowered in VOID_ELEMENTS
        if self_closing or is_void:
            return Element(
                location=lexer.location(start),
                tag_name=tag_name,
                attributes=attributes,
                self_closing=self_closing,
                is_void=is_void,
                has_close_tag=False,
            )

        if lowered in CONTENT_PRESERVING_ELEMENTS:
            children = self._parse_raw_text(lowered)
        else:
            children = self._parse_children(open_elements + (lowered,))
        has_close_tag = self._parse_close_tag(tag_name, start)

        return Element(
            location=lexer.location(start),
            tag_name=tag_name,
            attributes=attributes,
            children=tuple(children),
            has_close_tag=has_close_tag,
        )

    def _parse_raw_text(self, lowered: str) -> list[Node]:
        """Consume everything up to ``</name>`` as one Text node."""
        lexer = self._lexer
        start = lexer.pos
        pattern = re.compile(rf"</{re.escape(lowered)}\s*>", re.IGNORECASE)
        match = pattern.search(lexer.source, start)
        lexer.pos = match.start() if match else len(lexer.source)
        if lexer.pos == start:
            return []
        return [Text(location=lexer.location(start), content=lexer.source[start : lexer.pos])]

    def _parse_close_tag(self, tag_name: str, element_start: int) -> bool:
        """Consume ``</tag_name>`` if it is next; record an error otherwise."""
        lexer = self._lexer
        match = _CLOSE_TAG.match(lexer.source, lexer.pos)
        if match and match.group(1).lower() == tag_name.lower():
            lexer.pos = match.end()
            return True
        self._error(f"Missing close tag for <{tag_name}>", element_start, ErrorCode.MISSING_CLOSE_TAG)
        return False

    def _peek_close_tag_name(self) -> str:
        match = _CLOSE_TAG_NAME.match(self._lexer.source, self._lexer.pos)
        return match.group(1).lower() if match else ""

    def _parse_stray_close_tag(self) -> Text:
        """Record a close tag with no matching element and keep it as text."""
        lexer = self._lexer
        start = lexer.pos
        name = self._peek_close_tag_name()
        self._error(f"Unexpected close tag </{name}>", start, ErrorCode.UNEXPECTED_CLOSE_TAG)
        end = lexer.source.find(">", start)
        lexer.pos = len(lexer.source) if end == -1 else end + 1
        return Text(location=lexer.location(start), content=lexer.source[start : lexer.pos])

    # ─────────────────────────────────────────────────────────────────────────
    # Open tags and attributes
    # ─────────────────────────────────────────────────────────────────────────

    def _parse_open_tag_items(self, in_flow: bool) -> list[Node]:
        """Parse attributes and script tags up to ``>`` or ``/>``.

        Stops without consuming the terminator. Inside control flow it also
        stops at the next branch or end tag.
        """
        lexer = self._lexer
        items: list[Node] = []
        while True:
            lexer.skip_whitespace()
            if lexer.at_end or lexer.startswith(">") or lexer.startswith("/>"):
                break
            if lexer.startswith("<%"):
                node = self._parse_script(lambda: self._parse_open_tag_items(in_flow=True), in_flow)
                if node is None:
                    break
                items.append(node)
                continue
            attribute = self._parse_attribute()
            if attribute is not None:
                items.append(attribute)
                continue
            if lexer.startswith("<"):
                # Another tag began before this one was closed
                break
            if not lexer.startswith("/"):
                self._error(
                    f"Unexpected character {lexer.peek()!r} in open tag",
                    lexer.pos,
                    ErrorCode.INVALID_OPEN_TAG,
                )
            lexer.advance()
        return items

    def _parse_attribute(self) -> Attribute | None:
        """Parse ``name``, ``name=value``, ``name="value"`` or ``name='value'``."""
        lexer = self._lexer
        start = lexer.pos
        name = lexer.scan_attribute_name()
        if not name:
            return None

        name_end = lexer.pos
        lexer.skip_whitespace()
        if not lexer.startswith("="):
            lexer.pos = name_end
            return Attribute(location=lexer.location(start), name=name, value=None, quote="")

        lexer.advance()
        lexer.skip_whitespace()
        quote = lexer.peek()
        if quote in ('"', "'"):
            lexer.advance()
            value = self._parse_attribute_value(quote, in_flow=False)
            if lexer.startswith(quote):
                lexer.advance()
            else:
                self._error(
                    f"Unterminated value for attribute '{name}'",
                    start,
                    ErrorCode.UNTERMINATED_ATTRIBUTE,
                )
            return Attribute(location=lexer.location(start), name=name, value=tuple(value), quote=quote)

        value = self._parse_unquoted_value()
        return Attribute(location=lexer.location(start), name=name, value=tuple(value), quote="")

    def _parse_attribute_value(self, quote: str, in_flow: bool) -> list[Node]:
        """Parse a quoted value's parts up to (not including) the quote."""
        lexer = self._lexer
        source = lexer.source
        parts: list[Node] = []
        while not lexer.at_end and not lexer.startswith(quote):
            if lexer.startswith("<%"):
                node = self._parse_script(
                    lambda: self._parse_attribute_value(quote, in_flow=True), in_flow
                )
                if node is None:
                    break
                parts.append(node)
                continue
            start = lexer.pos
            lexer.pos = _next_boundary(source, start, (quote, "<%"))
            parts.append(Text(location=lexer.location(start), content=source[start : lexer.pos]))
        return parts

    def _parse_unquoted_value(self) -> list[Node]:
        """Parse an unquoted value up to whitespace or ``>``."""
        lexer = self._lexer
        source = lexer.source
        parts: list[Node] = []
        while not lexer.at_end and lexer.peek() not in " \t\n\f\r>":
            start = lexer.pos
            if lexer.startswith("<%"):
                try:
                    token = lexer.scan_script_tag()
                except LexerError as error:
                    self._errors.append(error)
                    content = lexer.read_to_end()
                    parts.append(Text(location=lexer.location(start), content=content))
                    break
                parts.append(self._script_node(token))
                continue
            while not lexer.at_end and lexer.peek() not in " \t\n\f\r>" and not lexer.startswith("<%"):
                lexer.pos += 1
            parts.append(Text(location=lexer.location(start), content=source[start : lexer.pos]))
        return parts

    # ─────────────────────────────────────────────────────────────────────────
    # Comments and declarations
    # ─────────────────────────────────────────────────────────────────────────

    def _parse_html_comment(self) -> HTMLComment:
        lexer = self._lexer
        start = lexer.pos
        lexer.advance(4)
        end = lexer.source.find("-->", lexer.pos)
        if end == -1:
            self._error("Unclosed HTML comment", start, ErrorCode.UNCLOSED_COMMENT)
            content = lexer.read_to_end()
        else:
            content = lexer.source[lexer.pos : end]
            lexer.pos = end + 3
        return HTMLComment(location=lexer.location(start), content=content)

    def _parse_doctype(self) -> Doctype:
        lexer = self._lexer
        start = lexer.pos
        end = lexer.source.find(">", start)
        if end == -1:
            self._error("Unclosed declaration", start, ErrorCode.UNCLOSED_OPEN_TAG)
            lexer.pos = len(lexer.source)
        else:
            lexer.pos = end + 1
        return Doctype(location=lexer.location(start), value=lexer.source[start : lexer.pos])


def _next_boundary(source: str, start: int, stops: tuple[str, ...]) -> int:
    """Offset of the earliest stop string at or after start (or end of source)."""
    found = [i for i in (source.find(stop, start) for stop in stops) if i != -1]
    return min(found) if found else len(source)
