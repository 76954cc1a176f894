"""Exceptions for the wren formatter.

Exception Hierarchy:
WrenError (base)
├── TemplateSyntaxError       # Parse problem recorded in Document.errors
├── UnresolvedParseError      # Printing refused because the tree has errors
├── RewriterError             # Rewriter lookup, loading or execution failed
├── ConfigurationError        # Invalid formatter configuration
└── FileError                 # Template file could not be read or written

Error Messages:
Every exception carries an ErrorCode and renders a compact diagnostic via
``format_compact()``; syntax errors include a source snippet with a caret:

    ```
    W-PAR-004: Missing close tag for <div>
      --> app/views/users/show.html.erb:3:2
       |
    >  3 |   <div class="card">
       |     ^
       |
    ```

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from wren import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for wren diagnostics.

    Format: W-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), FMT (formatter), RWR (rewriter),
    CFG (configuration), IO (file access)
    """

    # Parser errors (W-PAR-xxx)
    UNCLOSED_SCRIPT_TAG = "W-PAR-001"
    UNCLOSED_COMMENT = "W-PAR-002"
    UNCLOSED_OPEN_TAG = "W-PAR-003"
    MISSING_CLOSE_TAG = "W-PAR-004"
    UNEXPECTED_CLOSE_TAG = "W-PAR-005"
    UNCLOSED_CONTROL_FLOW = "W-PAR-006"
    UNEXPECTED_SCRIPT_KEYWORD = "W-PAR-007"
    UNTERMINATED_ATTRIBUTE = "W-PAR-008"
    INVALID_OPEN_TAG = "W-PAR-009"

    # Formatter errors (W-FMT-xxx)
    UNRESOLVED_PARSE_ERRORS = "W-FMT-001"

    # Rewriter errors (W-RWR-xxx)
    UNKNOWN_REWRITER = "W-RWR-001"
    REWRITER_FAILED = "W-RWR-002"
    INVALID_REWRITER = "W-RWR-003"

    # Configuration errors (W-CFG-xxx)
    INVALID_CONFIG = "W-CFG-001"

    # File errors (W-IO-xxx)
    FILE_NOT_FOUND = "W-IO-001"
    FILE_READ = "W-IO-002"
    FILE_WRITE = "W-IO-003"

    @property
    def docs_anchor(self) -> str:
        """Anchor of this code in docs/errors.md (e.g. "#w-par-004")."""
        return f"#{self.value.lower()}"

    @property
    def category(self) -> str:
        """Error category (e.g., 'parser', 'formatter', 'rewriter')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "FMT": "formatter",
            "RWR": "rewriter",
            "CFG": "config",
            "IO": "io",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format snippet in Rust-inspired diagnostic style with colors."""
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            is_error = lineno == self.error_line
            parts.append(terminal.format_source_line(lineno, content, is_error=is_error))
        if self.column is not None:
            caret = " " * (self.column + 2) + "^"
            parts.append(f"{terminal.dim_text('   |')} {terminal.error_line(caret)}")
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 0,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for caret pointer.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class WrenError(Exception):
    """Base exception for all wren errors.

    Attributes:
        code: ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-block, human-readable summary.

        Produces a diagnostic string suitable for terminal display, without
        Python traceback noise.
        """
        header = str(self)
        if self.code and self.code.value not in header:
            header = terminal.format_error_header(self.code.value, header)
        return header


class TemplateSyntaxError(WrenError):
    """A syntax problem found while parsing template source.

    The parser never raises this; it records instances on
    ``Document.errors`` and keeps going.
    """

    code: ErrorCode | None = ErrorCode.UNEXPECTED_CLOSE_TAG

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        *,
        filename: str | None = None,
        source: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.filename = filename
        self.source = source
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    @property
    def location(self) -> str:
        loc = self.filename or "<template>"
        if self.lineno:
            loc += f":{self.lineno}"
            if self.col_offset is not None:
                loc += f":{self.col_offset}"
        return loc

    def _format_message(self) -> str:
        return f"{self.message} ({self.location})"

    def format_compact(self) -> str:
        """Format syntax error as structured terminal diagnostic."""
        code = self.code.value if self.code else None
        parts = [terminal.format_error_header(code, self.message)]
        parts.append(f"  --> {terminal.location(self.location)}")
        if self.source and self.lineno:
            snippet = build_source_snippet(self.source, self.lineno, column=self.col_offset)
            if snippet.lines:
                parts.append(snippet.format())
        if self.code:
            anchor = f"docs/errors.md{self.code.docs_anchor}"
            parts.append(f"  {terminal.dim_text('Docs:')} {terminal.docs_url(anchor)}")
        return "\n".join(parts)


class UnresolvedParseError(WrenError):
    """Printing was requested for a tree that still carries parse errors."""

    code: ErrorCode | None = ErrorCode.UNRESOLVED_PARSE_ERRORS

    def __init__(self, errors: Sequence[TemplateSyntaxError], filename: str | None = None):
        self.errors = tuple(errors)
        self.filename = filename
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        name = filename or "<template>"
        super().__init__(f"{name} has {count} unresolved parse {noun}")

    def format_compact(self) -> str:
        parts = [super().format_compact()]
        parts.extend(error.format_compact() for error in self.errors)
        return "\n".join(parts)


class RewriterError(WrenError):
    """A rewriter could not be resolved, loaded or run."""

    code: ErrorCode | None = ErrorCode.REWRITER_FAILED

    def __init__(self, message: str, *, rewriter: str | None = None, code: ErrorCode | None = None):
        self.message = message
        self.rewriter = rewriter
        if code is not None:
            self.code = code
        super().__init__(message)


class ConfigurationError(WrenError):
    """Formatter configuration is invalid."""

    code: ErrorCode | None = ErrorCode.INVALID_CONFIG

    def __init__(self, message: str, *, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(f"{key}: {message}" if key else message)


class FileError(WrenError):
    """A template file could not be read or written."""

    code: ErrorCode | None = ErrorCode.FILE_READ

    def __init__(self, message: str, *, path: str | None = None, code: ErrorCode | None = None):
        self.message = message
        self.path = path
        if code is not None:
            self.code = code
        super().__init__(f"{path}: {message}" if path else message)
