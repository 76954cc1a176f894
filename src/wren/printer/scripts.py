"""Script-tag normalization for wren printer.

Rules:
- Exactly one space after the opening and before the closing delimiter.
- Content that starts with a line break keeps its surrounding whitespace.
- Content containing a heredoc (``<<~SQL``) ends with a line break so the
  terminator stays alone on its line.
- Whitespace-only content collapses to the empty form ``<%%>``.
- ``=%>`` closers are written as ``-%>``.
"""

from __future__ import annotations

import re

from wren.nodes import ScriptComment, ScriptTag
from wren.utils.text import HTML_WHITESPACE, dedent_lines, strip_html

_HEREDOC = re.compile(r"<<[~-]?(['\"`]?)[A-Za-z_]\w*\1")


def normalize_close_delim(close_delim: str) -> str:
    return "-%>" if close_delim in ("-%>", "=%>") else "%>"


def format_script_content(content: str) -> str:
    """Return content with canonical padding inside the delimiters."""
    stripped = strip_html(content)
    if not stripped:
        return ""

    head = content[: len(content) - len(content.lstrip(HTML_WHITESPACE))]
    tail = content[len(content.rstrip(HTML_WHITESPACE)) :]

    if "\n" in head:
        leading = head
        trailing = tail if "\n" in tail else " "
    else:
        leading = " "
        trailing = " "

    if "\n" in stripped and _HEREDOC.search(stripped):
        trailing = "\n"
    return leading + stripped + trailing


def comment_lines(content: str) -> list[str]:
    """Non-empty comment lines with common indentation removed."""
    lines = dedent_lines(content.split("\n"))
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def render_script_tag(node: ScriptTag) -> str:
    """Render a script tag on a single logical line.

    Comments spanning several lines are joined with spaces here; block
    layouts render them with ``FormatPrinter`` instead.
    """
    close = normalize_close_delim(node.close_delim)
    if isinstance(node, ScriptComment):
        lines = [line.strip() for line in comment_lines(node.content) if line.strip()]
        if not lines:
            return f"{node.open_delim}{close}"
        return f"{node.open_delim} {' '.join(lines)} {close}"
    return f"{node.open_delim}{format_script_content(node.content)}{close}"
