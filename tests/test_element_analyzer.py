"""Tests for the element layout classifier."""

from __future__ import annotations

from dataclasses import replace

import pytest

from wren.analysis import ElementAnalyzer, LayoutDecision
from wren.config import FormatterConfig
from wren.context import FormatContext
from wren.nodes import Element
from wren.parser import parse
from wren.printer import ROOT_SCOPE, AttributeFormatter, FormatPrinter, PrinterContext


def _element(source: str) -> Element:
    document = parse(source)
    assert not document.errors
    return next(node for node in document.children if isinstance(node, Element))


@pytest.fixture
def make_analyzer():
    """Build an analyzer over a fresh buffer of the given width."""

    def _make(max_line_length: int = 80) -> tuple[ElementAnalyzer, PrinterContext]:
        config = FormatterConfig(max_line_length=max_line_length)
        output = PrinterContext(config.indent_width, config.max_line_length)
        printer = FormatPrinter(FormatContext(config=config))
        analyzer = ElementAnalyzer(output, AttributeFormatter(output), printer.render_element_inline)
        return analyzer, output

    return _make


class TestLayoutDecision:
    def test_derived_flags(self) -> None:
        assert LayoutDecision.inline().fully_inline
        assert LayoutDecision.block().block_format
        mixed = LayoutDecision(True, False, False)
        assert not mixed.fully_inline
        assert not mixed.block_format


class TestRules:
    """Classification rules in evaluation order."""

    @pytest.mark.parametrize("tag", ["pre", "textarea", "script", "style"])
    def test_content_preserving_is_block(self, make_analyzer, tag: str) -> None:
        analyzer, _ = make_analyzer()
        decision = analyzer.analyze(_element(f"<{tag}>x</{tag}>"), ROOT_SCOPE)
        assert decision.block_format

    @pytest.mark.parametrize("source", ["<br>", "<img src='a.png'>", "<x-icon name='a' />"])
    def test_void_and_self_closing_are_inline(self, make_analyzer, source: str) -> None:
        analyzer, _ = make_analyzer()
        assert analyzer.analyze(_element(source), ROOT_SCOPE).fully_inline

    def test_child_element_forces_block(self, make_analyzer) -> None:
        """A block-level child makes the content block formatted."""
        analyzer, _ = make_analyzer()
        decision = analyzer.analyze(_element("<div><p>Hello</p></div>"), ROOT_SCOPE)
        assert decision == LayoutDecision(True, False, False)

    def test_inline_child_stays_inline(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        decision = analyzer.analyze(_element("<div><span>Hello</span></div>"), ROOT_SCOPE)
        assert decision.fully_inline

    def test_single_line_text_is_inline(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        assert analyzer.analyze(_element("<p>Hello world</p>"), ROOT_SCOPE).fully_inline

    def test_line_break_in_text_is_block(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        decision = analyzer.analyze(_element("<p>Hello\nworld</p>"), ROOT_SCOPE)
        assert not decision.content_inline
        assert not decision.close_tag_inline

    def test_empty_body_is_inline(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        assert analyzer.analyze(_element("<div>\n\n</div>"), ROOT_SCOPE).fully_inline

    def test_control_flow_child_is_block(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        element = _element("<p><% if a %>x<% end %></p>")
        assert not analyzer.analyze(element, ROOT_SCOPE).content_inline

    def test_output_tags_are_inline_capable(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        element = _element("<p>Hi <%= user.name %>!</p>")
        assert analyzer.analyze(element, ROOT_SCOPE).fully_inline

    def test_execution_tag_is_block(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        element = _element("<p><% x = 1 %>y</p>")
        assert not analyzer.analyze(element, ROOT_SCOPE).content_inline


class TestOpenTag:
    def test_single_line_conditional_attribute_is_inline(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        element = _element('<div <% if a %>class="x"<% end %>>y</div>')
        assert analyzer.open_tag_inline(element, ROOT_SCOPE)

    def test_multiline_conditional_attribute_breaks(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        element = _element('<div <% if a %>\n  class="x"\n<% end %>>y</div>')
        decision = analyzer.analyze(element, ROOT_SCOPE)
        assert not decision.open_tag_inline
        assert not decision.content_inline

    def test_inside_conditional_open_tag_guard(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer()
        scope = replace(ROOT_SCOPE, in_conditional_open_tag=True)
        assert not analyzer.open_tag_inline(_element("<span>x</span>"), scope)

    def test_many_attributes_that_do_not_fit(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer(max_line_length=30)
        element = _element('<button type="submit" class="btn" disabled></button>')
        assert not analyzer.open_tag_inline(element, ROOT_SCOPE)

    def test_single_attribute_never_breaks(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer(max_line_length=10)
        element = _element('<button type="submit"></button>')
        assert analyzer.open_tag_inline(element, ROOT_SCOPE)

    def test_width_depends_on_indent(self, make_analyzer) -> None:
        """The same tag fits at the margin but not deeper in."""
        analyzer, output = make_analyzer(max_line_length=30)
        element = _element('<a href="/x" title="y">z</a>')
        assert analyzer.open_tag_inline(element, ROOT_SCOPE)
        output.indent_level = 4
        assert not analyzer.open_tag_inline(element, ROOT_SCOPE)


class TestWidth:
    def test_block_element_over_width_gets_block_content(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer(max_line_length=20)
        element = _element("<p>aaa bbb ccc ddd eee fff</p>")
        assert not analyzer.analyze(element, ROOT_SCOPE).content_inline

    def test_inline_element_over_width_gets_block_content(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer(max_line_length=20)
        element = _element("<span>aaa bbb ccc ddd eee fff</span>")
        decision = analyzer.analyze(element, ROOT_SCOPE)
        assert decision.open_tag_inline
        assert not decision.content_inline

    def test_inline_element_within_width_is_atomic(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer(max_line_length=20)
        assert analyzer.analyze(_element("<span>aaa bbb</span>"), ROOT_SCOPE).fully_inline

    def test_parent_of_overlong_inline_child_is_block(self, make_analyzer) -> None:
        analyzer, _ = make_analyzer(max_line_length=20)
        element = _element("<b><span>aaa bbb ccc ddd eee fff</span></b>")
        assert not analyzer.analyze(element, ROOT_SCOPE).content_inline

    def test_void_element_ignores_width(self, make_analyzer) -> None:
        """Void tags stay on one line even with many attributes."""
        analyzer, _ = make_analyzer(max_line_length=20)
        element = _element('<img src="/a.png" alt="a picture" width="10" height="10">')
        assert analyzer.analyze(element, ROOT_SCOPE).fully_inline
