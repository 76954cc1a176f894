"""Property-based tests for the formatter.

Uses hypothesis to verify invariants that must hold for all inputs:

- Formatting already-formatted output changes nothing
- Preformatted bodies survive formatting byte-for-byte
- The parser never raises, whatever the input
- Best-effort formatting of malformed input never crashes
"""

from __future__ import annotations

import re

from hypothesis import given, settings

from wren import format_string, parse
from wren.config import FormatterConfig

from .strategies import arbitrary_source, block_content, output_tag, raw_text, template

_PRE_BODY = re.compile(r"<pre>(.*?)</pre>", re.DOTALL)


class TestFormatterProperties:
    """Layout invariants over generated well-formed templates."""

    @given(source=template)
    @settings(max_examples=150, deadline=None)
    def test_idempotent(self, source: str) -> None:
        """Formatting twice gives the same text as formatting once."""
        once = format_string(source)
        assert format_string(once) == once

    @given(source=template)
    @settings(max_examples=100, deadline=None)
    def test_idempotent_narrow(self, source: str) -> None:
        """Idempotence also holds when most lines have to wrap."""
        config = FormatterConfig(max_line_length=24, indent_width=4)
        once = format_string(source, config=config)
        assert format_string(once, config=config) == once

    @given(body=raw_text, surrounding=block_content)
    @settings(max_examples=100, deadline=None)
    def test_preformatted_round_trip(self, body: str, surrounding: str) -> None:
        """A <pre> body is reproduced exactly wherever it sits."""
        source = f"<div>{surrounding}<pre>{body}</pre></div>"
        formatted = format_string(source)
        assert _PRE_BODY.findall(formatted) == _PRE_BODY.findall(source)

    @given(tag=output_tag)
    @settings(max_examples=200, deadline=None)
    def test_output_tags_stay_plain_output(self, tag: str) -> None:
        """Generated expressions never read as a block opener like ``do``."""
        document = parse(tag)
        assert document.errors == ()
        assert format_string(tag).startswith("<%=")

    @given(source=template)
    @settings(max_examples=100, deadline=None)
    def test_parses_without_errors(self, source: str) -> None:
        """Generated templates are well formed."""
        assert parse(source).errors == ()


class TestRobustness:
    @given(source=arbitrary_source)
    @settings(max_examples=300, deadline=None)
    def test_parse_never_raises(self, source: str) -> None:
        document = parse(source)
        assert document.source == source

    @given(source=arbitrary_source)
    @settings(max_examples=200, deadline=None)
    def test_best_effort_formatting_never_crashes(self, source: str) -> None:
        result = format_string(source, ignore_errors=True)
        assert isinstance(result, str)
