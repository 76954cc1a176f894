"""Parser core for wren.

Combines the HTML and script mixins into a recursive-descent parser that
builds an immutable Document tree. The parser never raises on bad input:
every problem is recorded on ``Document.errors`` and parsing recovers by
closing whatever construct is open.
"""

from __future__ import annotations

import logging

from wren.exceptions import ErrorCode, TemplateSyntaxError
from wren.lexer import Lexer
from wren.nodes import Document, Node, Text
from wren.parser.html import HtmlParsingMixin
from wren.parser.script import ScriptParsingMixin

logger = logging.getLogger(__name__)


class Parser(HtmlParsingMixin, ScriptParsingMixin):
    """Recursive descent parser for HTML+ERB templates.

    Example:
        >>> document = Parser('<p class="a"><%= name %></p>').parse()
        >>> document.children[0].tag_name
        'p'

    """

    def __init__(self, source: str, filename: str | None = None):
        self._source = source
        self._filename = filename
        self._lexer = Lexer(source, filename)
        self._errors: list[TemplateSyntaxError] = []

    def parse(self) -> Document:
        """Parse the whole source into a Document."""
        children = self._parse_children()
        if self._errors:
            logger.debug(
                "Parsed %s with %d error(s)", self._filename or "<template>", len(self._errors)
            )
        return Document(
            location=self._lexer.location(0, len(self._source)),
            children=tuple(children),
            errors=tuple(self._errors),
            source=self._source,
        )

    def _error(self, message: str, offset: int, code: ErrorCode) -> None:
        """Record a syntax error at a source offset."""
        position = self._lexer.position(offset)
        self._errors.append(
            TemplateSyntaxError(
                message,
                position.line,
                position.column,
                filename=self._filename,
                source=self._source,
                code=code,
            )
        )

    def _parse_children(
        self,
        open_elements: tuple[str, ...] = (),
        in_flow: bool = False,
    ) -> list[Node]:
        """Parse element content until EOF or a construct owned by a caller.

        Args:
            open_elements: Lowercased names of the enclosing elements. A close
                tag for any of them ends this body.
            in_flow: True inside a control-flow body, where branch and end
                tags end this body.
        """
        lexer = self._lexer
        nodes: list[Node] = []
        while not lexer.at_end:
            if lexer.startswith("<%"):
                node = self._parse_script(
                    lambda: self._parse_children(open_elements, in_flow=True), in_flow
                )
                if node is None:
                    break
                nodes.append(node)
            elif lexer.startswith("</") and lexer.at_tag_start():
                if self._peek_close_tag_name() in open_elements:
                    break
                nodes.append(self._parse_stray_close_tag())
            elif lexer.startswith("<!--"):
                nodes.append(self._parse_html_comment())
            elif lexer.startswith("<!"):
                nodes.append(self._parse_doctype())
            elif lexer.at_tag_start():
                nodes.append(self._parse_element(open_elements))
            else:
                nodes.append(self._parse_text())
        return nodes

    def _parse_text(self) -> Text:
        """Consume character data up to the next markup construct."""
        lexer = self._lexer
        source = lexer.source
        start = lexer.pos
        lexer.advance()
        while not lexer.at_end:
            index = source.find("<", lexer.pos)
            if index == -1:
                lexer.pos = len(source)
                break
            if lexer.at_tag_start(index):
                lexer.pos = index
                break
            lexer.pos = index + 1
        return Text(location=lexer.location(start), content=source[start : lexer.pos])


def parse(source: str, *, filename: str | None = None) -> Document:
    """Parse template source into a Document.

    Never raises for malformed input; inspect ``Document.errors`` instead.
    """
    return Parser(source, filename).parse()
