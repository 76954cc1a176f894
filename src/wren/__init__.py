"""Wren — layout engine and pretty-printer for HTML+ERB templates.

Takes a parsed template and re-emits it with consistent indentation, line
breaking, attribute wrapping and script-tag spacing, while leaving
whitespace-sensitive content exactly as written.

Quickstart:
    >>> from wren import format_string
    >>> format_string("<div><p>Hello</p></div>")
    '<div>\\n  <p>Hello</p>\\n</div>'

Files on disk:
    >>> from wren import Runner
    >>> summary = Runner(check=True).run(["app/views/users/show.html.erb"])
    >>> summary.changed_count
    0

Architecture:
Template Source → Parser → Document → (pre-rewriters) → FormatPrinter → text
→ (post-rewriters)

Pipeline stages:
1. **Parser**: Builds an immutable Document with all raw whitespace kept as
   Text nodes; syntax errors are recorded, never raised
2. **ElementAnalyzer**: Decides per element whether open tag, content and
   close tag stay on one line
3. **FormatPrinter**: Walks the tree, emitting lines into a PrinterContext;
   AttributeFormatter and TextFlowBuilder handle open tags and text flow
4. **Rewriters**: Optional named transforms before (tree) and after (text)
   the layout pass

Preserved Content:
- ``pre``, ``textarea``, ``script`` and ``style`` bodies are emitted verbatim
- ``<%# wren:formatter off %>`` … ``<%# wren:formatter on %>`` ranges are
  copied from the source unchanged
- ``<%# wren:formatter ignore %>`` anywhere leaves the whole file untouched

"""

from wren.config import DEFAULT_CONFIG, FormatterConfig
from wren.context import FormatContext
from wren.exceptions import (
    ConfigurationError,
    ErrorCode,
    FileError,
    RewriterError,
    SourceSnippet,
    TemplateSyntaxError,
    UnresolvedParseError,
    WrenError,
    build_source_snippet,
)
from wren.formatter import Formatter, format_string
from wren.parser import parse
from wren.printer import FormatPrinter, format_document
from wren.result import AggregatedResult, FormatResult
from wren.rewriters import ASTRewriter, RewriterRegistry, StringRewriter
from wren.runner import Runner

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "ASTRewriter",
    "AggregatedResult",
    "ConfigurationError",
    "ErrorCode",
    "FileError",
    "FormatContext",
    "FormatPrinter",
    "FormatResult",
    "Formatter",
    "FormatterConfig",
    "RewriterError",
    "RewriterRegistry",
    "Runner",
    "SourceSnippet",
    "StringRewriter",
    "TemplateSyntaxError",
    "UnresolvedParseError",
    "WrenError",
    "__version__",
    "build_source_snippet",
    "format_document",
    "format_string",
    "parse",
]
