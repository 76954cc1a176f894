"""Source cursor and script-tag scanner for wren.

HTML+ERB cannot be tokenized up front: whether ``>`` ends a tag or is plain
text depends on where the parser is. The Lexer is therefore a cursor the
parser drives, with helpers for the few lexical shapes it needs (names,
script tags, line/column tracking).

Script delimiters:
    Openers (longest first): ``<%==``, ``<%=``, ``<%#``, ``<%-``, ``<%``
    Closers: ``-%>``, ``=%>``, ``%>``
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass

from wren.exceptions import ErrorCode, TemplateSyntaxError
from wren.nodes import Location, Position

SCRIPT_OPENERS: tuple[str, ...] = ("<%==", "<%=", "<%#", "<%-", "<%")
SCRIPT_CLOSERS: tuple[str, ...] = ("-%>", "=%>", "%>")

_CLOSER_PATTERN = re.compile(r"-%>|=%>|%>")
_TAG_NAME = re.compile(r"[A-Za-z][A-Za-z0-9:_.\-]*")
_ATTRIBUTE_NAME = re.compile(r"[^\s\"'>/=<]+")


class LexerError(TemplateSyntaxError):
    """A lexical shape could not be completed (e.g. an unclosed ``<%``)."""


@dataclass(frozen=True, slots=True)
class ScriptToken:
    """A scanned ``<% ... %>`` tag, not yet given a structural role."""

    open_delim: str
    content: str
    close_delim: str
    location: Location


class Lexer:
    """Cursor over template source with position bookkeeping.

    Attributes:
        source: The template text.
        pos: Current offset into source.
        filename: Name used in error messages.
    """

    __slots__ = ("source", "pos", "filename", "_line_starts")

    def __init__(self, source: str, filename: str | None = None):
        self.source = source
        self.pos = 0
        self.filename = filename
        self._line_starts = [0]
        self._line_starts.extend(m.end() for m in re.finditer("\n", source))

    # ─────────────────────────────────────────────────────────────────────────
    # Positions
    # ─────────────────────────────────────────────────────────────────────────

    def position(self, offset: int | None = None) -> Position:
        """Return the Position of an offset (default: the cursor)."""
        if offset is None:
            offset = self.pos
        index = bisect_right(self._line_starts, offset) - 1
        return Position(line=index + 1, column=offset - self._line_starts[index], offset=offset)

    def location(self, start: int, end: int | None = None) -> Location:
        """Location spanning ``start`` up to ``end`` (default: the cursor)."""
        return Location(start=self.position(start), end=self.position(end))

    # ─────────────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, count: int = 1) -> str:
        return self.source[self.pos : self.pos + count]

    def startswith(self, prefix: str, offset: int | None = None) -> bool:
        return self.source.startswith(prefix, self.pos if offset is None else offset)

    def advance(self, count: int = 1) -> str:
        text = self.source[self.pos : self.pos + count]
        self.pos = min(len(self.source), self.pos + count)
        return text

    def skip_whitespace(self) -> str:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in " \t\n\f\r":
            self.pos += 1
        return self.source[start : self.pos]

    def read_to_end(self) -> str:
        text = self.source[self.pos :]
        self.pos = len(self.source)
        return text

    def scan_tag_name(self) -> str:
        """Consume an element name at the cursor, or return ""."""
        match = _TAG_NAME.match(self.source, self.pos)
        if not match:
            return ""
        self.pos = match.end()
        return match.group(0)

    def scan_attribute_name(self) -> str:
        """Consume an attribute name at the cursor, or return ""."""
        match = _ATTRIBUTE_NAME.match(self.source, self.pos)
        if not match:
            return ""
        # A name never swallows the start of a script tag
        name = match.group(0)
        cut = name.find("<%")
        if cut == 0:
            return ""
        if cut > 0:
            name = name[:cut]
        self.pos += len(name)
        return name

    def at_tag_start(self, offset: int | None = None) -> bool:
        """True if a markup construct (tag, comment, script) begins here."""
        at = self.pos if offset is None else offset
        source = self.source
        if not source.startswith("<", at) or at + 1 >= len(source):
            return False
        nxt = source[at + 1]
        if nxt in "%!":
            return True
        if nxt == "/":
            return at + 2 < len(source) and source[at + 2].isalpha()
        return nxt.isalpha()

    # ─────────────────────────────────────────────────────────────────────────
    # Script tags
    # ─────────────────────────────────────────────────────────────────────────

    def scan_script_tag(self) -> ScriptToken:
        """Consume a script tag at the cursor.

        Raises:
            LexerError: If the tag has no closing delimiter. The cursor is
                left at the opener.
        """
        start = self.pos
        open_delim = next(d for d in SCRIPT_OPENERS if self.source.startswith(d, start))
        body_start = start + len(open_delim)
        match = _CLOSER_PATTERN.search(self.source, body_start)
        if match is None:
            pos = self.position(start)
            raise LexerError(
                f"Unclosed script tag '{open_delim}'",
                pos.line,
                pos.column,
                filename=self.filename,
                source=self.source,
                code=ErrorCode.UNCLOSED_SCRIPT_TAG,
            )
        close_delim = match.group(0)
        content = self.source[body_start : match.start()]
        self.pos = match.end()
        return ScriptToken(
            open_delim=open_delim,
            content=content,
            close_delim=close_delim,
            location=self.location(start),
        )

    def peek_script_tag(self) -> ScriptToken | None:
        """Scan a script tag without moving the cursor."""
        start = self.pos
        try:
            return self.scan_script_tag()
        except LexerError:
            return None
        finally:
            self.pos = start
