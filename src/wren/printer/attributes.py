"""Attribute rendering for wren printer.

Normalizes quoting and boolean attributes, renders control flow found inside
open tags and attribute values on one line, and wraps long ``class`` values.

Class wrapping:
    The value is first normalized (whitespace runs collapsed, ends trimmed).
    Values holding a script tag or a single token are never wrapped. A value
    is wrapped on its original line breaks when the source value had line
    breaks and the normalized value exceeds ``max_line_length``; otherwise it
    is wrapped greedily when the normalized value is longer than 60
    characters and would not fit at the current indent. The two checks are
    independent. Token lines sit one level deeper than the attribute and the
    closing quote returns to the attribute's indent.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from wren.nodes import Attribute, Element, ScriptControlFlow, ScriptTag, Text
from wren.printer.scripts import render_script_tag
from wren.utils.constants import CLASS_WRAP_MIN_LENGTH, TOKEN_LIST_ATTRIBUTES
from wren.utils.text import collapse_whitespace, normalize_tokens, strip_html

if TYPE_CHECKING:
    from wren.nodes import Node
    from wren.printer.context import PrinterContext


class AttributeFormatter:
    """Renders open tags and attributes against a PrinterContext's indent."""

    __slots__ = ("_output",)

    def __init__(self, output: PrinterContext):
        self._output = output

    # ─────────────────────────────────────────────────────────────────────────
    # Open tags
    # ─────────────────────────────────────────────────────────────────────────

    def open_tag(self, element: Element) -> str:
        """Render ``<tag ...>`` on one line (class values may still wrap)."""
        parts = [f"<{element.tag_name}"]
        parts.extend(f" {self.render_item(item)}" for item in element.attributes)
        parts.append(" />" if element.self_closing else ">")
        return "".join(parts)

    def open_tag_inline(self, element: Element) -> str:
        """Single-line open tag with no class wrapping, for width checks."""
        parts = [f"<{element.tag_name}"]
        parts.extend(f" {self.render_item(item, wrap=False)}" for item in element.attributes)
        parts.append(" />" if element.self_closing else ">")
        return "".join(parts)

    def render_item(self, item: Node, *, wrap: bool = True) -> str:
        """Render one open-tag item: attribute, script tag or control flow."""
        if isinstance(item, Attribute):
            return self.render(item, wrap=wrap)
        if isinstance(item, ScriptControlFlow):
            return self.render_control_flow(item, separator=" ")
        if isinstance(item, ScriptTag):
            return render_script_tag(item)
        if isinstance(item, Text):
            return strip_html(item.content)
        return ""

    # ─────────────────────────────────────────────────────────────────────────
    # Attributes
    # ─────────────────────────────────────────────────────────────────────────

    def render(self, attribute: Attribute, *, wrap: bool = True) -> str:
        """Render ``name="value"``, or the bare name for a boolean attribute."""
        if attribute.value is None:
            return attribute.name
        quote = self.quote_for(attribute)
        content = self.value_content(attribute)
        if wrap and attribute.name.lower() == "class":
            return self.render_class(attribute.name, content, quote)
        if attribute.name.lower() == "class":
            content = normalize_tokens(content)
        return f"{attribute.name}={quote}{content}{quote}"

    def quote_for(self, attribute: Attribute) -> str:
        """Double quotes, unless the literal value itself holds one."""
        if attribute.value and any(
            isinstance(part, Text) and '"' in part.content for part in attribute.value
        ):
            return "'"
        return '"'

    def value_content(self, attribute: Attribute) -> str:
        """Render the value parts between the quotes."""
        token_list = attribute.name.lower() in TOKEN_LIST_ATTRIBUTES
        return "".join(self._value_part(part, token_list) for part in attribute.value or ())

    def _value_part(self, part: Node, token_list: bool) -> str:
        if isinstance(part, Text):
            return part.content
        if isinstance(part, ScriptControlFlow):
            return self.render_control_flow(part, separator=" " if token_list else "")
        if isinstance(part, ScriptTag):
            return render_script_tag(part)
        return ""

    # ─────────────────────────────────────────────────────────────────────────
    # Inline control flow
    # ─────────────────────────────────────────────────────────────────────────

    def render_control_flow(self, flow: ScriptControlFlow, *, separator: str) -> str:
        """Render a conditional on one line.

        Inside open tags and token-list values the pieces are joined with a
        space (``<% if a %> class="b" <% end %>``); inside other values they
        are joined directly (``<% if a %>b<% end %>``).
        """
        pieces = [render_script_tag(flow)]
        pieces.extend(self._flow_parts(flow.body, separator))
        for branch in flow.branches:
            pieces.append(render_script_tag(branch))
            pieces.extend(self._flow_parts(branch.body, separator))
        if flow.end is not None:
            pieces.append(render_script_tag(flow.end))
        return separator.join(pieces)

    def _flow_parts(self, body: Sequence[Node], separator: str) -> list[str]:
        parts: list[str] = []
        for item in body:
            if isinstance(item, Text):
                text = strip_html(collapse_whitespace(item.content)) if separator else item.content
                if text:
                    parts.append(text)
            elif isinstance(item, Attribute):
                parts.append(self.render(item, wrap=False))
            elif isinstance(item, ScriptControlFlow):
                parts.append(self.render_control_flow(item, separator=separator))
            elif isinstance(item, ScriptTag):
                parts.append(render_script_tag(item))
        return parts

    # ─────────────────────────────────────────────────────────────────────────
    # Class wrapping
    # ─────────────────────────────────────────────────────────────────────────

    def render_class(self, name: str, content: str, quote: str = '"') -> str:
        """Render a class attribute, wrapping long token lists."""
        normalized = normalize_tokens(content)
        inline = f"{name}={quote}{normalized}{quote}"
        if "<%" in normalized or " " not in normalized:
            return inline

        output = self._output
        max_length = output.max_line_length
        if "\n" in content and len(normalized) > max_length:
            lines = [normalize_tokens(line) for line in content.split("\n")]
            lines = [line for line in lines if line]
            if len(lines) > 1:
                return self._wrapped(name, quote, lines)

        overhead = len(name) + len("=") + 2 * len(quote)
        if (
            len(normalized) > CLASS_WRAP_MIN_LENGTH
            and output.indent_columns + len(normalized) + overhead > max_length
        ):
            lines = self.wrap_tokens(
                normalized.split(" "), output.indent_columns + output.indent_width
            )
            if len(lines) > 1:
                return self._wrapped(name, quote, lines)

        return inline

    def wrap_tokens(self, tokens: Sequence[str], indent_columns: int) -> list[str]:
        """Greedy-fill tokens into lines that fit after ``indent_columns``.

        A token longer than the width gets a line of its own; tokens are
        never split.
        """
        max_length = self._output.max_line_length
        lines: list[str] = []
        current = ""
        for token in tokens:
            if not token:
                continue
            if not current:
                current = token
            elif indent_columns + len(current) + 1 + len(token) <= max_length:
                current = f"{current} {token}"
            else:
                lines.append(current)
                current = token
        if current:
            lines.append(current)
        return lines

    def _wrapped(self, name: str, quote: str, lines: Sequence[str]) -> str:
        output = self._output
        base = output.indent
        inner = output.indent_for(output.indent_level + 1)
        body = "\n".join(f"{inner}{line}" for line in lines)
        return f"{name}={quote}\n{body}\n{base}{quote}"
