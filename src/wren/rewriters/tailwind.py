"""Tailwind CSS class sorting rewriter.

Sorts the tokens of purely literal ``class`` attributes by functional
category (layout, position, sizing, spacing, typography, ...), roughly the
order prettier-plugin-tailwindcss produces. Values containing script tags
are left alone.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from wren.nodes import Attribute, Text
from wren.rewriters.base import ASTRewriter
from wren.utils.text import normalize_tokens

if TYPE_CHECKING:
    from wren.context import FormatContext
    from wren.nodes import Document, Node

# Class prefix -> category; lower categories sort first
CLASS_GROUPS: dict[str, int] = {
    # Layout
    **dict.fromkeys(
        (
            "aspect", "block", "box", "break", "clear", "collapse", "columns", "container",
            "contents", "flex", "float", "flow", "grid", "hidden", "inline", "invisible",
            "isolation", "list", "object", "overflow", "overscroll", "table", "truncate",
            "visible",
        ),
        0,
    ),
    # Position
    **dict.fromkeys(
        ("absolute", "bottom", "fixed", "inset", "left", "relative", "right", "static",
         "sticky", "top", "z"),
        1,
    ),
    # Sizing
    **dict.fromkeys(("h", "max", "min", "size", "w"), 2),
    # Flexbox and grid
    **dict.fromkeys(
        ("auto", "basis", "col", "content", "gap", "grow", "items", "justify", "order",
         "place", "row", "self", "shrink"),
        3,
    ),
    # Spacing
    **dict.fromkeys(
        ("m", "mb", "me", "ml", "mr", "ms", "mt", "mx", "my", "p", "pb", "pe", "pl", "pr",
         "ps", "pt", "px", "py", "space"),
        4,
    ),
    # Typography
    **dict.fromkeys(
        ("accent", "align", "antialiased", "capitalize", "caret", "decoration", "font",
         "hyphens", "indent", "italic", "leading", "lowercase", "normal", "not", "overline",
         "placeholder", "subpixel", "tab", "text", "tracking", "underline", "uppercase",
         "whitespace", "word"),
        5,
    ),
    # Backgrounds
    **dict.fromkeys(("bg", "from", "gradient", "to", "via"), 6),
    # Borders
    **dict.fromkeys(("border", "divide", "outline", "ring", "rounded"), 7),
    # Effects
    **dict.fromkeys(("mix", "opacity", "shadow"), 8),
    # Filters
    **dict.fromkeys(
        ("backdrop", "blur", "brightness", "contrast", "drop", "filter", "grayscale", "hue",
         "invert", "saturate", "sepia"),
        9,
    ),
    # Transitions and animations
    **dict.fromkeys(("animate", "delay", "duration", "ease", "transition"), 10),
    # Transforms
    **dict.fromkeys(("origin", "rotate", "scale", "skew", "transform", "translate"), 11),
    # Interactivity
    **dict.fromkeys(
        ("appearance", "cursor", "pointer", "resize", "scroll", "select", "snap", "touch",
         "will"),
        12,
    ),
    # SVG
    **dict.fromkeys(("fill", "stroke"), 13),
    # Accessibility
    "sr": 14,
}

UNKNOWN_GROUP = 999


def tailwind_sort_key(class_name: str) -> int:
    """Category of a class, ignoring variant prefixes like ``hover:``."""
    effective = class_name.rsplit(":", 1)[-1]
    prefix = effective.split("-", 1)[0]
    return CLASS_GROUPS.get(prefix, UNKNOWN_GROUP)


def sort_classes(classes: str) -> str:
    """Sort a whitespace-separated class list by category, then name."""
    tokens = normalize_tokens(classes).split(" ")
    return " ".join(sorted((t for t in tokens if t), key=lambda t: (tailwind_sort_key(t), t)))


class TailwindClassSorter(ASTRewriter):
    """Sort Tailwind CSS classes by recommended order."""

    name = "tailwind-class-sorter"
    description = "Sort Tailwind CSS classes by recommended order"

    def rewrite(self, document: Document, context: FormatContext) -> Document:
        return self.traverse(document, self._sort_class_attribute)

    def _sort_class_attribute(self, node: Node) -> Node | None:
        if not isinstance(node, Attribute) or node.name.lower() != "class" or not node.value:
            return None
        if not all(isinstance(part, Text) for part in node.value):
            return None

        text = "".join(part.content for part in node.value)  # type: ignore[attr-defined]
        sorted_text = sort_classes(text)
        if normalize_tokens(text) == sorted_text:
            return None

        first = node.value[0]
        return replace(node, value=(Text(location=first.location, content=sorted_text),))
