"""Tests for script-tag normalization helpers."""

from __future__ import annotations

import pytest

from wren.nodes import UNKNOWN_LOCATION, ScriptComment, ScriptOutput
from wren.printer.scripts import (
    comment_lines,
    format_script_content,
    normalize_close_delim,
    render_script_tag,
)


class TestScriptContent:
    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("x", " x "),
            ("   x  ", " x "),
            ("", ""),
            (" \n\t ", ""),
            ("\n  x\n", "\n  x\n"),
            ("\n  x  ", "\n  x "),
            ("a\nb", " a\nb "),
        ],
    )
    def test_padding(self, content: str, expected: str) -> None:
        assert format_script_content(content) == expected

    def test_heredoc_forces_trailing_line_break(self) -> None:
        content = " text = <<~EOS\n  hi\nEOS "
        assert format_script_content(content) == " text = <<~EOS\n  hi\nEOS\n"

    def test_heredoc_on_one_line_is_ordinary(self) -> None:
        assert format_script_content("x <<~EOS") == " x <<~EOS "

    @pytest.mark.parametrize(
        ("close_delim", "expected"), [("%>", "%>"), ("-%>", "-%>"), ("=%>", "-%>")]
    )
    def test_close_delim(self, close_delim: str, expected: str) -> None:
        assert normalize_close_delim(close_delim) == expected


class TestComments:
    def test_comment_lines_dedent(self) -> None:
        assert comment_lines("\n    a\n      b\n\n  ") == ["a", "  b"]

    def test_render_comment_joins_lines(self) -> None:
        node = ScriptComment(location=UNKNOWN_LOCATION, open_delim="<%#", content="\n  a\n  b\n")
        assert render_script_tag(node) == "<%# a b %>"

    def test_empty_comment(self) -> None:
        node = ScriptComment(location=UNKNOWN_LOCATION, open_delim="<%#", content="   ")
        assert render_script_tag(node) == "<%#%>"

    def test_render_output(self) -> None:
        node = ScriptOutput(location=UNKNOWN_LOCATION, open_delim="<%==", content="x", close_delim="=%>")
        assert render_script_tag(node) == "<%== x -%>"
