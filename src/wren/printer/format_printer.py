"""Layout engine for wren.

FormatPrinter walks a Document and writes formatted lines into a
PrinterContext. Two rendering paths exist:

- Block visits (``_visit_*``) start new lines at the current indent and
  recurse with the indent pushed one level around element bodies and
  control-flow branches.
- Inline renders (``render_inline``) return a single-line string for
  content that stays on the current line.

Node handlers are looked up by node type name in dispatch dicts, so every
node kind must be registered in both tables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace

from wren.analysis.element_analyzer import ElementAnalyzer
from wren.context import FormatContext
from wren.directives import (
    find_off_directive,
    find_on_directive,
    has_ignore_directive,
    is_content_preserving,
    is_disable_comment,
)
from wren.exceptions import UnresolvedParseError
from wren.nodes import (
    Attribute,
    Doctype,
    Document,
    Element,
    HTMLComment,
    Node,
    ScriptComment,
    ScriptControlFlow,
    ScriptOutput,
    ScriptTag,
    Text,
)
from wren.printer.attributes import AttributeFormatter
from wren.printer.context import ROOT_SCOPE, PrinterContext, Scope
from wren.printer.scripts import comment_lines, normalize_close_delim, render_script_tag
from wren.printer.text_flow import BlankLine, BlockItem, ContentUnit, TextFlowBuilder
from wren.utils.constants import INLINE_ELEMENTS
from wren.utils.text import collapse_whitespace, is_blank, strip_html

logger = logging.getLogger(__name__)


class FormatPrinter:
    """Formats one Document according to a FormatContext.

    Instances are single-use: create one per document (``format`` does this).

    Example:
        >>> from wren.parser import parse
        >>> FormatPrinter.format(parse("<div><p>Hi</p></div>"), FormatContext())
        '<div>\\n  <p>Hi</p>\\n</div>'

    """

    def __init__(self, context: FormatContext):
        self._context = context
        self._source = context.source
        self._output = PrinterContext(context.indent_width, context.max_line_length)
        self._attributes = AttributeFormatter(self._output)
        self._analyzer = ElementAnalyzer(self._output, self._attributes, self.render_element_inline)
        self._flow = TextFlowBuilder(context.max_line_length)
        self._dispatch: dict[str, Callable[[Node, Scope], None]] = {
            "Document": self._visit_document,
            "Element": self._visit_element,
            "Attribute": self._visit_attribute,
            "Text": self._visit_text,
            "HTMLComment": self._visit_html_comment,
            "Doctype": self._visit_doctype,
            "ScriptOutput": self._visit_script,
            "ScriptExecution": self._visit_script,
            "ScriptComment": self._visit_script_comment,
            "ScriptControlFlow": self._visit_control_flow,
            "ScriptBranch": self._visit_script,
            "ScriptEnd": self._visit_script,
        }
        self._inline_dispatch: dict[str, Callable[[Node, Scope], str]] = {
            "Document": self._inline_document,
            "Element": self.render_element_inline,
            "Attribute": self._inline_attribute,
            "Text": self._inline_text,
            "HTMLComment": self._inline_html_comment,
            "Doctype": self._inline_doctype,
            "ScriptOutput": self._inline_script,
            "ScriptExecution": self._inline_script,
            "ScriptComment": self._inline_script,
            "ScriptControlFlow": self._inline_control_flow,
            "ScriptBranch": self._inline_script,
            "ScriptEnd": self._inline_script,
        }

    @classmethod
    def format(
        cls,
        document: Document,
        context: FormatContext,
        *,
        ignore_errors: bool = False,
    ) -> str:
        """Format a document.

        Args:
            document: Parsed template.
            context: Source, configuration and force flag for this file.
            ignore_errors: Format best-effort even if the document carries
                parse errors.

        Returns:
            Formatted text, or the source unchanged when the file carries the
            ignore directive and ``context.force`` is false.

        Raises:
            UnresolvedParseError: If the document has errors and
                ``ignore_errors`` is false.
        """
        if document.errors and not ignore_errors:
            raise UnresolvedParseError(document.errors, context.file_path)
        if not context.source:
            context = replace(context, source=document.source)
        if not context.force and has_ignore_directive(document):
            logger.debug("%s: ignore directive found, leaving unchanged", context.file_path)
            return context.source
        return cls(context).print(document)

    def print(self, document: Document) -> str:
        """Run the layout pass and return the formatted text."""
        self._visit(document, ROOT_SCOPE)
        text = self._output.getvalue()
        if not self._output.frozen and _ends_with_newline(document) and not text.endswith("\n"):
            text += "\n"
        return text

    # ─────────────────────────────────────────────────────────────────────────
    # Block layout
    # ─────────────────────────────────────────────────────────────────────────

    def _visit(self, node: Node, scope: Scope) -> None:
        self._dispatch[type(node).__name__](node, scope)

    def _visit_document(self, node: Document, scope: Scope) -> None:
        self._visit_children(node.children, scope)

    def _visit_children(self, children: Sequence[Node], scope: Scope) -> None:
        """Lay out a body, honouring formatter off/on directives."""
        index = find_off_directive(children)
        if index is None:
            self._emit_segments(children, scope)
            return

        self._emit_segments(children[: index + 1], scope)
        start = children[index].location.end.offset
        on_index = find_on_directive(children, index + 1)
        if on_index is None:
            logger.debug(
                "%s: formatter off without on; preserving to end of file",
                self._context.file_path,
            )
            self._output.push_to_last_line(self._source[start:])
            self._output.freeze()
            return

        end = children[on_index].location.end.offset
        self._output.push_to_last_line(self._source[start:end])
        self._visit_children(children[on_index + 1 :], scope)

    def _emit_segments(self, children: Sequence[Node], scope: Scope) -> None:
        output = self._output
        segments = self._flow.segments(children, lambda node: self._flow_unit(node, scope))
        for segment in segments:
            if isinstance(segment, BlankLine):
                output.push("")
            elif isinstance(segment, BlockItem):
                self._visit(segment.node, scope)
            else:
                for line in self._flow.fill(segment.chunks, output.indent_columns):
                    output.push_with_indent(line)

    def _flow_unit(self, node: Node, scope: Scope) -> ContentUnit | None:
        """Atomic flow unit for an inline-capable node, else None."""
        if isinstance(node, ScriptOutput):
            text = render_script_tag(node)
            return None if "\n" in text else ContentUnit(text)
        if isinstance(node, ScriptComment) and is_disable_comment(node):
            return ContentUnit(render_script_tag(node), attached=True)
        if (
            isinstance(node, Element)
            and node.tag_name.lower() in INLINE_ELEMENTS
            and not is_content_preserving(node)
            and self._analyzer.analyze(node, scope).fully_inline
        ):
            text = self.render_element_inline(node, scope)
            if "\n" not in text:
                return ContentUnit(text)
        return None

    def _visit_element(self, node: Element, scope: Scope) -> None:
        output = self._output
        if scope.inline:
            output.push_to_last_line(self.render_element_inline(node, scope))
            return

        preserved = is_content_preserving(node)
        decision = self._analyzer.analyze(node, scope)
        open_inline = decision.open_tag_inline
        if preserved:
            open_inline = self._analyzer.open_tag_inline(node, scope)

        if open_inline:
            output.push_with_indent(self._attributes.open_tag(node))
        else:
            self._visit_multiline_open_tag(node, scope)

        if node.is_void or node.self_closing:
            return

        if preserved:
            for child in node.children:
                output.push_to_last_line(_verbatim(child))
        elif decision.content_inline:
            output.push_to_last_line(self._inline_content(node, scope))
        else:
            with output.indented():
                self._visit_children(node.children, scope)

        if not node.has_close_tag:
            return
        close = f"</{node.tag_name}>"
        if preserved or decision.close_tag_inline:
            output.push_to_last_line(close)
        else:
            output.push_with_indent(close)

    def _visit_multiline_open_tag(self, node: Element, scope: Scope) -> None:
        """Open tag with one attribute (or conditional line) per line.

        Script comments are kept on the tag-name line; ``>`` closes the tag
        on its own line at the element's indent.
        """
        output = self._output
        head = [f"<{node.tag_name}"]
        head.extend(
            f" {render_script_tag(item)}" for item in node.attributes if isinstance(item, ScriptComment)
        )
        output.push_with_indent("".join(head))

        with output.indented():
            for item in node.attributes:
                if not isinstance(item, ScriptComment):
                    self._visit_open_tag_item(item)
        output.push_with_indent("/>" if node.self_closing else ">")

    def _visit_open_tag_item(self, item: Node) -> None:
        output = self._output
        if isinstance(item, Attribute):
            output.push_with_indent(self._attributes.render(item))
        elif isinstance(item, ScriptControlFlow):
            if not item.location.is_multiline:
                output.push_with_indent(self._attributes.render_control_flow(item, separator=" "))
                return
            output.push_with_indent(render_script_tag(item))
            for child in item.body:
                self._visit_open_tag_item(child)
            for branch in item.branches:
                output.push_with_indent(render_script_tag(branch))
                for child in branch.body:
                    self._visit_open_tag_item(child)
            if item.end is not None:
                output.push_with_indent(render_script_tag(item.end))
        elif isinstance(item, ScriptTag):
            output.push_with_indent(render_script_tag(item))
        elif isinstance(item, Text) and not is_blank(item.content):
            output.push_with_indent(strip_html(item.content))

    def _visit_attribute(self, node: Attribute, scope: Scope) -> None:
        self._output.push_with_indent(self._attributes.render(node))

    def _visit_text(self, node: Text, scope: Scope) -> None:
        self._output.push_to_last_line(node.content)

    def _visit_html_comment(self, node: HTMLComment, scope: Scope) -> None:
        self._output.push_with_indent(f"<!--{node.content}-->")

    def _visit_doctype(self, node: Doctype, scope: Scope) -> None:
        self._output.push_with_indent(node.value)

    def _visit_script(self, node: ScriptTag, scope: Scope) -> None:
        self._output.push_with_indent(render_script_tag(node))

    def _visit_script_comment(self, node: ScriptComment, scope: Scope) -> None:
        """Single-line comments stay on one line; longer ones become a block."""
        output = self._output
        lines = comment_lines(node.content)
        if len(lines) <= 1:
            output.push_with_indent(render_script_tag(node))
            return
        output.push_with_indent(node.open_delim)
        with output.indented():
            for line in lines:
                output.push_with_indent(line)
        output.push_with_indent(normalize_close_delim(node.close_delim))

    def _visit_control_flow(self, node: ScriptControlFlow, scope: Scope) -> None:
        """Tag line, indented body, branches at the opener's indent, end."""
        output = self._output
        if scope.inline:
            output.push_to_last_line(self._inline_control_flow(node, scope))
            return
        output.push_with_indent(render_script_tag(node))
        with output.indented():
            self._visit_children(node.body, scope)
        for branch in node.branches:
            output.push_with_indent(render_script_tag(branch))
            with output.indented():
                self._visit_children(branch.body, scope)
        if node.end is not None:
            output.push_with_indent(render_script_tag(node.end))

    # ─────────────────────────────────────────────────────────────────────────
    # Inline rendering
    # ─────────────────────────────────────────────────────────────────────────

    def render_inline(self, node: Node, scope: Scope) -> str:
        """Render any node on the current line."""
        return self._inline_dispatch[type(node).__name__](node, scope)

    def render_element_inline(self, element: Element, scope: Scope) -> str:
        """Render an element fully inline: open tag, content, close tag."""
        opening = self._attributes.open_tag(element)
        if element.is_void or element.self_closing:
            return opening
        if is_content_preserving(element):
            body = "".join(_verbatim(child) for child in element.children)
        else:
            body = self._inline_content(element, scope)
        closing = f"</{element.tag_name}>" if element.has_close_tag else ""
        return f"{opening}{body}{closing}"

    def _inline_content(self, element: Element, scope: Scope) -> str:
        children = element.children
        if all(isinstance(child, Text) and is_blank(child.content) for child in children):
            # Whitespace-only bodies: a space is significant only between inline tags
            if element.tag_name.lower() not in INLINE_ELEMENTS:
                return ""
        inline_scope = replace(scope, inline=True)
        return self._flow.inline(children, lambda child: self.render_inline(child, inline_scope))

    def _inline_document(self, node: Document, scope: Scope) -> str:
        return self._flow.inline(node.children, lambda child: self.render_inline(child, scope))

    def _inline_attribute(self, node: Attribute, scope: Scope) -> str:
        return self._attributes.render(node, wrap=False)

    def _inline_text(self, node: Text, scope: Scope) -> str:
        return collapse_whitespace(node.content)

    def _inline_html_comment(self, node: HTMLComment, scope: Scope) -> str:
        return f"<!--{node.content}-->"

    def _inline_doctype(self, node: Doctype, scope: Scope) -> str:
        return node.value

    def _inline_script(self, node: ScriptTag, scope: Scope) -> str:
        return render_script_tag(node)

    def _inline_control_flow(self, node: ScriptControlFlow, scope: Scope) -> str:
        parts = [render_script_tag(node)]
        parts.append(self._flow.inline(node.body, lambda child: self.render_inline(child, scope)))
        for branch in node.branches:
            parts.append(render_script_tag(branch))
            parts.append(self._flow.inline(branch.body, lambda child: self.render_inline(child, scope)))
        if node.end is not None:
            parts.append(render_script_tag(node.end))
        return "".join(parts)


def _verbatim(node: Node) -> str:
    """Body text of a content-preserving element."""
    return node.content if isinstance(node, Text) else ""


def _ends_with_newline(document: Document) -> bool:
    if not document.children:
        return False
    last = document.children[-1]
    return isinstance(last, Text) and last.content.endswith("\n")


def format_document(
    document: Document,
    context: FormatContext | None = None,
    *,
    ignore_errors: bool = False,
) -> str:
    """Format a parsed document with a default context if none is given."""
    return FormatPrinter.format(document, context or FormatContext(), ignore_errors=ignore_errors)
