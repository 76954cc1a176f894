"""HTML nodes for wren."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wren.nodes.base import Node

if TYPE_CHECKING:
    from wren.exceptions import TemplateSyntaxError


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root of a parsed template."""

    children: Sequence[Node] = ()
    errors: Sequence[TemplateSyntaxError] = ()
    source: str = ""


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal character data, whitespace included."""

    content: str = ""


@dataclass(frozen=True, slots=True)
class Attribute(Node):
    """Attribute inside an open tag.

    ``value`` is None for a boolean attribute (``disabled``). Otherwise it
    holds the value parts: Text runs, script tags and inline control flow.
    ``quote`` is the original quote character, or "" for an unquoted value.
    """

    name: str = ""
    value: Sequence[Node] | None = None
    quote: str = '"'


@dataclass(frozen=True, slots=True)
class Element(Node):
    """An HTML element with its open-tag items and children.

    ``attributes`` holds everything found between the tag name and ``>``:
    Attribute nodes, script tags, and control flow wrapping attributes.
    """

    tag_name: str = ""
    attributes: Sequence[Node] = ()
    children: Sequence[Node] = ()
    self_closing: bool = False
    is_void: bool = False
    has_close_tag: bool = True


@dataclass(frozen=True, slots=True)
class HTMLComment(Node):
    """<!-- ... --> comment; content excludes the delimiters."""

    content: str = ""


@dataclass(frozen=True, slots=True)
class Doctype(Node):
    """<!DOCTYPE ...> or another <! declaration, stored verbatim."""

    value: str = ""
