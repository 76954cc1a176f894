"""Formatter directives and preserved-content detection.

Directives are script comments:

    ``<%# wren:formatter ignore %>``
        Anywhere in a file: the file is returned unchanged unless forced.
    ``<%# wren:formatter off %>`` ... ``<%# wren:formatter on %>``
        Sibling nodes between the pair are copied from the source verbatim.
        An ``off`` with no later ``on`` preserves everything to the end of
        the file. An ``on`` with no ``off`` before it is an ordinary comment.
    ``<%# wren:disable rule-a, rule-b %>`` / ``<%# wren:disable-next-line %>``
        Linter hints. The formatter treats them as atomic units that stay
        attached to the content before them.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from wren.analysis.visitor import walk
from wren.nodes import Document, Element, Node, ScriptComment
from wren.utils.constants import CONTENT_PRESERVING_ELEMENTS
from wren.utils.text import strip_html

DIRECTIVE_PREFIX = "wren:"
IGNORE_DIRECTIVE = "wren:formatter ignore"
OFF_DIRECTIVE = "wren:formatter off"
ON_DIRECTIVE = "wren:formatter on"

_DISABLE_DIRECTIVE = re.compile(r"^wren:disable(?:-next-line)?(?:\s|$)")
_SPACES = re.compile(r"\s+")


def directive_text(node: Node) -> str | None:
    """Normalized comment text if node is a script comment, else None."""
    if not isinstance(node, ScriptComment):
        return None
    return _SPACES.sub(" ", strip_html(node.content))


def is_ignore_directive(node: Node) -> bool:
    return directive_text(node) == IGNORE_DIRECTIVE


def is_off_directive(node: Node) -> bool:
    return directive_text(node) == OFF_DIRECTIVE


def is_on_directive(node: Node) -> bool:
    return directive_text(node) == ON_DIRECTIVE


def is_disable_comment(node: Node) -> bool:
    """True for linter disable comments, which flow as attached units."""
    text = directive_text(node)
    return text is not None and bool(_DISABLE_DIRECTIVE.match(text))


def disabled_rules(node: Node) -> tuple[str, ...]:
    """Rule names listed in a disable comment (empty for ``all`` or none)."""
    text = directive_text(node)
    if text is None or not _DISABLE_DIRECTIVE.match(text):
        return ()
    _, _, rest = text.partition(" ")
    rules = tuple(rule.strip() for rule in rest.split(",") if rule.strip())
    return () if rules == ("all",) else rules


def has_ignore_directive(document: Document) -> bool:
    """True if the file-level ignore directive appears anywhere."""
    return any(is_ignore_directive(node) for node in walk(document))


def find_on_directive(children: Sequence[Node], start: int) -> int | None:
    """Index of the first ``on`` directive at or after start, if any."""
    for index in range(start, len(children)):
        if is_on_directive(children[index]):
            return index
    return None


def find_off_directive(children: Sequence[Node]) -> int | None:
    for index, child in enumerate(children):
        if is_off_directive(child):
            return index
    return None


def is_content_preserving(element: Element) -> bool:
    """True if the element's body is reproduced byte-for-byte."""
    return element.tag_name.lower() in CONTENT_PRESERVING_ELEMENTS
