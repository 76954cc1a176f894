"""Whitespace helpers for wren.

HTML whitespace is the ASCII set (space, tab, LF, FF, CR). Python's
``str.split()`` also treats other Unicode spaces as separators, which would
change the meaning of text like ``&nbsp;`` written literally, so every
whitespace operation in wren goes through these helpers instead.
"""

from __future__ import annotations

import re

HTML_WHITESPACE = " \t\n\f\r"

_WHITESPACE_RUN = re.compile(r"[ \t\n\f\r]+")
_TOKEN_OR_SPACE = re.compile(r"([ \t\n\f\r]+)|([^ \t\n\f\r]+)")


def is_blank(text: str) -> bool:
    """True if text is empty or contains only HTML whitespace."""
    return not text.strip(HTML_WHITESPACE)


def collapse_whitespace(text: str) -> str:
    """Replace each whitespace run with a single space (ends are kept)."""
    return _WHITESPACE_RUN.sub(" ", text)


def normalize_tokens(text: str) -> str:
    """Collapse whitespace runs and trim both ends."""
    return collapse_whitespace(text).strip(" ")


def strip_html(text: str) -> str:
    """Trim HTML whitespace from both ends."""
    return text.strip(HTML_WHITESPACE)


def split_runs(text: str) -> list[tuple[str, bool]]:
    """Split text into alternating runs.

    Returns:
        List of ``(run, is_whitespace)`` pairs covering the whole input.
    """
    return [
        (match.group(0), match.group(1) is not None) for match in _TOKEN_OR_SPACE.finditer(text)
    ]


def has_blank_line(whitespace: str) -> bool:
    """True if a whitespace run spans at least one empty line."""
    return whitespace.count("\n") >= 2


def dedent_lines(lines: list[str]) -> list[str]:
    """Remove the common leading indentation from non-empty lines."""
    indents = [len(line) - len(line.lstrip(" \t")) for line in lines if line.strip()]
    if not indents:
        return [line.strip() for line in lines]
    common = min(indents)
    return [line[common:].rstrip() if line.strip() else "" for line in lines]
