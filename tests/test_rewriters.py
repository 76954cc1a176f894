"""Tests for rewriters and the rewriter registry."""

from __future__ import annotations

import textwrap

import pytest

from wren import FormatContext, Formatter, FormatterConfig, parse
from wren.exceptions import ErrorCode, RewriterError
from wren.rewriters import (
    ASTRewriter,
    RewriterRegistry,
    StringRewriter,
    TailwindClassSorter,
    sort_classes,
    tailwind_sort_key,
)


class TrailingComment(StringRewriter):
    name = "trailing-comment"
    description = "Append a marker comment"

    def rewrite(self, text: str, context: FormatContext) -> str:
        return text + "\n<%# formatted %>"


class Broken(ASTRewriter):
    name = "broken"
    description = "Always fails"

    def rewrite(self, document, context):
        raise ValueError("boom")


class TestTailwindSorting:
    def test_sorts_by_category(self) -> None:
        assert sort_classes("px-4 bg-blue-500 text-white") == "px-4 text-white bg-blue-500"

    def test_variants_use_base_class(self) -> None:
        assert tailwind_sort_key("hover:bg-blue-700") == tailwind_sort_key("bg-white")
        assert sort_classes("hover:bg-blue-700 flex") == "flex hover:bg-blue-700"

    def test_unknown_classes_sort_last(self) -> None:
        assert sort_classes("card-x  p-2\n flex") == "flex p-2 card-x"

    def test_rewriter_returns_new_tree(self) -> None:
        document = parse('<div class="px-4 bg-blue-500 text-white"></div>')
        result = TailwindClassSorter().rewrite(document, FormatContext())
        assert result is not document
        (element,) = result.children
        assert element.attributes[0].value[0].content == "px-4 text-white bg-blue-500"
        (original,) = document.children
        assert original.attributes[0].value[0].content == "px-4 bg-blue-500 text-white"

    def test_values_with_script_are_skipped(self) -> None:
        document = parse('<div class="px-4 <%= extra %> bg-white"></div>')
        assert TailwindClassSorter().rewrite(document, FormatContext()) is document

    def test_other_attributes_are_skipped(self) -> None:
        document = parse('<div id="px-4 bg-blue-500 text-white"></div>')
        assert TailwindClassSorter().rewrite(document, FormatContext()) is document

    def test_in_formatter_pipeline(self) -> None:
        formatter = Formatter.from_config(FormatterConfig(rewriter_pre=("tailwind-class-sorter",)))
        result = formatter.format('<div class="bg-white flex"><p>x</p></div>')
        assert result.formatted == '<div class="flex bg-white">\n  <p>x</p>\n</div>'


class TestRegistry:
    def test_builtins_registered(self) -> None:
        registry = RewriterRegistry()
        assert "tailwind-class-sorter" in registry
        assert registry.get("tailwind-class-sorter") is TailwindClassSorter
        assert RewriterRegistry(builtins=False).names() == []

    def test_register_and_resolve_by_phase(self) -> None:
        registry = RewriterRegistry()
        registry.register(TrailingComment)
        assert registry.is_registered("trailing-comment")
        assert registry.resolve_string_rewriter("trailing-comment") is TrailingComment
        assert registry.resolve_ast_rewriter("trailing-comment") is None
        assert registry.resolve_ast_rewriter("tailwind-class-sorter") is TailwindClassSorter
        assert registry.resolve_ast_rewriter("missing") is None

    def test_rejects_invalid_classes(self) -> None:
        registry = RewriterRegistry()
        with pytest.raises(RewriterError) as exc_info:
            registry.register(object)  # type: ignore[arg-type]
        assert exc_info.value.code == ErrorCode.INVALID_REWRITER

        class Nameless(StringRewriter):
            def rewrite(self, text, context):
                return text

        with pytest.raises(RewriterError, match="non-empty 'name'"):
            registry.register(Nameless)

        class Unimplemented(StringRewriter):
            name = "unimplemented"

        with pytest.raises(RewriterError, match="must implement rewrite"):
            registry.register(Unimplemented)

    def test_loads_dotted_module(self, tmp_path, monkeypatch) -> None:
        module = tmp_path / "custom_rewriters.py"
        module.write_text(
            textwrap.dedent(
                """
                from wren.rewriters import StringRewriter

                class Shout(StringRewriter):
                    name = "shout"

                    def rewrite(self, text, context):
                        return text.upper()
                """
            )
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        registry = RewriterRegistry()
        rewriter_class = registry.resolve_string_rewriter("custom_rewriters.Shout")
        assert rewriter_class is not None
        assert rewriter_class.name == "shout"
        assert "shout" in registry

    def test_unknown_module_raises(self) -> None:
        with pytest.raises(RewriterError) as exc_info:
            RewriterRegistry().load_module("no_such_module_for_wren")
        assert exc_info.value.code == ErrorCode.UNKNOWN_REWRITER


class TestFormatterIntegration:
    def test_post_rewriter_runs_after_layout(self) -> None:
        formatter = Formatter(post_rewriters=[TrailingComment()])
        result = formatter.format("<div><p>x</p></div>")
        assert result.formatted == "<div>\n  <p>x</p>\n</div>\n<%# formatted %>"

    def test_failing_rewriter_is_captured(self) -> None:
        formatter = Formatter(pre_rewriters=[Broken()])
        result = formatter.format("<p>x</p>")
        assert result.is_error
        assert isinstance(result.error, RewriterError)
        assert result.error.code == ErrorCode.REWRITER_FAILED
        assert result.formatted == "<p>x</p>"

    def test_unknown_rewriter_is_skipped(self, caplog) -> None:
        config = FormatterConfig(rewriter_pre=("missing-one", "tailwind-class-sorter"))
        formatter = Formatter.from_config(config)
        assert [type(r) for r in formatter.pre_rewriters] == [TailwindClassSorter]
        assert "missing-one" in caplog.text

    def test_rewriter_failing_to_instantiate_is_skipped(self, caplog) -> None:
        class Exploding(StringRewriter):
            name = "exploding"

            def __init__(self, options=None):
                raise RuntimeError("boom")

            def rewrite(self, text, context):
                return text

        registry = RewriterRegistry()
        registry.register(Exploding)
        config = FormatterConfig(rewriter_post=("exploding",))
        formatter = Formatter.from_config(config, registry)
        assert formatter.post_rewriters == ()
        assert "boom" in caplog.text

    def test_repr(self) -> None:
        assert repr(TailwindClassSorter()) == "<TailwindClassSorter 'tailwind-class-sorter' (pre)>"

    def test_options(self) -> None:
        assert TrailingComment({"a": 1}).options == {"a": 1}
