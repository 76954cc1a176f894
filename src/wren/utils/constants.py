"""Shared element and attribute tables for wren.

These tables drive both the parser (void and raw-text handling) and the
printer (inline classification and whitespace rules).
"""

from __future__ import annotations

# Elements rendered inline within text flow.
INLINE_ELEMENTS: frozenset[str] = frozenset(
    {
        "a",
        "abbr",
        "acronym",
        "b",
        "bdo",
        "big",
        "br",
        "cite",
        "code",
        "dfn",
        "em",
        "hr",
        "i",
        "img",
        "kbd",
        "label",
        "map",
        "object",
        "q",
        "samp",
        "small",
        "span",
        "strong",
        "sub",
        "sup",
        "tt",
        "var",
        "del",
        "ins",
        "mark",
        "s",
        "u",
        "time",
        "wbr",
    }
)

# Elements whose body is emitted byte-for-byte.
CONTENT_PRESERVING_ELEMENTS: frozenset[str] = frozenset(
    {
        "script",
        "style",
        "pre",
        "textarea",
    }
)

# Elements that never carry content or a close tag.
# Source: WHATWG HTML Living Standard, void elements
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Attributes whose value is a whitespace-separated token list.
TOKEN_LIST_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "class",
        "data-controller",
        "data-action",
    }
)

# Class values shorter than this never wrap on length alone.
CLASS_WRAP_MIN_LENGTH = 60

DEFAULT_INDENT_WIDTH = 2
DEFAULT_MAX_LINE_LENGTH = 80
