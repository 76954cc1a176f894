"""Script-tag parsing for wren parser.

Provides mixin for turning scanned ``<% %>`` tags into nodes, and for
assembling control-flow constructs (if/elsif/else/end, case/when, loops,
``do`` blocks) out of an opening tag, its branches and its ``end``.

Control flow can appear in three places: element content, between the
attributes of an open tag, and inside a quoted attribute value. The mixin
does not care which; the caller passes a ``parse_body`` callback that
parses one branch body in the right context and stops at the next
branch or end tag.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Literal

from wren.exceptions import ErrorCode
from wren.lexer import LexerError
from wren.nodes import (
    ScriptBranch,
    ScriptComment,
    ScriptControlFlow,
    ScriptEnd,
    ScriptExecution,
    ScriptOutput,
    Text,
)
from wren.utils.text import strip_html

if TYPE_CHECKING:
    from wren.exceptions import TemplateSyntaxError
    from wren.lexer import Lexer, ScriptToken
    from wren.nodes import ControlFlowKind, Node, ScriptTag

ScriptRole = Literal["plain", "open", "branch", "end"]

# Leading keywords that open a construct closed by <% end %>
_OPENING_KEYWORDS: dict[str, ControlFlowKind] = {
    "if": "if",
    "unless": "unless",
    "case": "case",
    "for": "for",
    "while": "while",
    "until": "until",
    "begin": "begin",
}

# Leading keywords that continue an open construct
_BRANCH_KEYWORDS: frozenset[str] = frozenset({"elsif", "else", "when", "in", "rescue", "ensure"})

_END_KEYWORD = "end"

_LEADING_WORD = re.compile(r"[a-z_]+")
_BLOCK_OPENER = re.compile(r"\bdo\s*(?:\|[^|]*\|)?\s*$")
_ONE_LINE_END = re.compile(r"(?:^|[\s;])end\s*$")


def classify_script(token: ScriptToken) -> tuple[ScriptRole, str | None]:
    """Decide the structural role of a script tag.

    Returns:
        ``(role, keyword)``: keyword is the control-flow kind for "open",
        the branch keyword for "branch", and None otherwise.
    """
    if token.open_delim == "<%#":
        return "plain", None
    code = strip_html(token.content)
    match = _LEADING_WORD.match(code)
    word = match.group(0) if match else ""
    if not token.open_delim.startswith("<%="):
        if word == _END_KEYWORD:
            return "end", None
        if word in _BRANCH_KEYWORDS:
            return "branch", word
        if word in _OPENING_KEYWORDS and not _ONE_LINE_END.search(code):
            return "open", _OPENING_KEYWORDS[word]
    if _BLOCK_OPENER.search(code):
        return "open", "block"
    return "plain", None


class ScriptParsingMixin:
    """Mixin for parsing script tags and control flow.

    Host attributes are declared via inline TYPE_CHECKING blocks.

    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _lexer: Lexer
        _errors: list[TemplateSyntaxError]

        def _error(self, message: str, offset: int, code: ErrorCode) -> None: ...

    def _parse_script(
        self,
        parse_body: Callable[[], list[Node]],
        in_flow: bool,
    ) -> Node | None:
        """Parse the script tag at the cursor in any context.

        Returns None, without consuming anything, when the tag is a branch or
        end that belongs to an enclosing construct (only when ``in_flow``).
        """
        lexer = self._lexer
        start = lexer.pos
        try:
            token = lexer.scan_script_tag()
        except LexerError as error:
            self._errors.append(error)
            content = lexer.read_to_end()
            return Text(location=lexer.location(start), content=content)

        role, keyword = classify_script(token)
        if role == "open":
            return self._parse_control_flow(token, keyword, parse_body)  # type: ignore[arg-type]
        if role in ("branch", "end"):
            if in_flow:
                lexer.pos = start
                return None
            self._error(
                f"Unexpected '{keyword or _END_KEYWORD}' without an open block",
                start,
                ErrorCode.UNEXPECTED_SCRIPT_KEYWORD,
            )
            return ScriptExecution(
                location=token.location,
                open_delim=token.open_delim,
                content=token.content,
                close_delim=token.close_delim,
            )
        return self._script_node(token)

    def _script_node(self, token: ScriptToken) -> ScriptTag:
        """Build the plain node for a tag with no structural role."""
        if token.open_delim == "<%#":
            cls: type[ScriptTag] = ScriptComment
        elif token.open_delim.startswith("<%="):
            cls = ScriptOutput
        else:
            cls = ScriptExecution
        return cls(
            location=token.location,
            open_delim=token.open_delim,
            content=token.content,
            close_delim=token.close_delim,
        )

    def _peek_continuation(self) -> tuple[ScriptToken, ScriptRole, str | None] | None:
        """Return the branch or end tag at the cursor, if there is one."""
        if not self._lexer.startswith("<%"):
            return None
        token = self._lexer.peek_script_tag()
        if token is None:
            return None
        role, keyword = classify_script(token)
        if role not in ("branch", "end"):
            return None
        return token, role, keyword

    def _parse_control_flow(
        self,
        token: ScriptToken,
        kind: ControlFlowKind,
        parse_body: Callable[[], list[Node]],
    ) -> ScriptControlFlow:
        """Parse body, branches and end of a construct whose opener was consumed."""
        lexer = self._lexer
        body = parse_body()
        branches: list[ScriptBranch] = []
        end: ScriptEnd | None = None

        while (continuation := self._peek_continuation()) is not None:
            tag, role, keyword = continuation
            lexer.scan_script_tag()
            if role == "end":
                end = ScriptEnd(
                    location=tag.location,
                    open_delim=tag.open_delim,
                    content=tag.content,
                    close_delim=tag.close_delim,
                )
                break
            branch_body = parse_body()
            branches.append(
                ScriptBranch(
                    location=lexer.location(tag.location.start.offset),
                    open_delim=tag.open_delim,
                    content=tag.content,
                    close_delim=tag.close_delim,
                    kind=keyword,  # type: ignore[arg-type]
                    body=tuple(branch_body),
                )
            )

        if end is None:
            self._error(
                f"Unclosed '{strip_html(token.content)}' block, expected <% end %>",
                token.location.start.offset,
                ErrorCode.UNCLOSED_CONTROL_FLOW,
            )
        if kind == "case" and branches and branches[0].kind == "in":
            kind = "case_in"

        return ScriptControlFlow(
            location=lexer.location(token.location.start.offset),
            open_delim=token.open_delim,
            content=token.content,
            close_delim=token.close_delim,
            kind=kind,
            body=tuple(body),
            branches=tuple(branches),
            end=end,
        )
