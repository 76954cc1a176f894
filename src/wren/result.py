"""Format results for wren."""

from __future__ import annotations

import difflib
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from wren.exceptions import WrenError
from wren.terminal import format_diff_line


@dataclass(frozen=True, slots=True)
class FormatResult:
    """Outcome of formatting one file.

    ``formatted`` equals ``original`` when the file was ignored or failed.
    """

    file_path: str
    original: str
    formatted: str
    ignored: bool = False
    error: BaseException | None = None

    @property
    def changed(self) -> bool:
        return self.original != self.formatted

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def diff(self, *, color: bool = False, context_lines: int = 3) -> str:
        """Unified diff from original to formatted ("" when unchanged)."""
        if not self.changed:
            return ""
        lines = difflib.unified_diff(
            self.original.splitlines(keepends=True),
            self.formatted.splitlines(keepends=True),
            fromfile=f"a/{self.file_path}",
            tofile=f"b/{self.file_path}",
            n=context_lines,
        )
        text = "".join(_ensure_newline(line) for line in lines)
        if not color:
            return text
        return "".join(
            format_diff_line(line, force=True) + "\n" for line in text.splitlines()
        )

    def error_message(self) -> str | None:
        if self.error is None:
            return None
        if isinstance(self.error, WrenError):
            return self.error.format_compact()
        return f"{type(self.error).__name__}: {self.error}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "changed": self.changed,
            "ignored": self.ignored,
            "error": self.error_message(),
        }


@dataclass(frozen=True, slots=True)
class AggregatedResult:
    """Summary over the results of a run."""

    results: tuple[FormatResult, ...] = field(default=())

    @classmethod
    def from_results(cls, results: Iterable[FormatResult]) -> AggregatedResult:
        return cls(tuple(results))

    @property
    def file_count(self) -> int:
        return len(self.results)

    @property
    def changed_count(self) -> int:
        return sum(1 for r in self.results if r.changed and not r.is_error)

    @property
    def ignored_count(self) -> int:
        return sum(1 for r in self.results if r.ignored)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if r.is_error)

    @property
    def unchanged_count(self) -> int:
        return self.file_count - self.changed_count - self.ignored_count - self.error_count

    @property
    def all_formatted(self) -> bool:
        """True if no file needed changes and none failed."""
        return self.changed_count == 0 and self.error_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": self.file_count,
            "changed": self.changed_count,
            "unchanged": self.unchanged_count,
            "ignored": self.ignored_count,
            "errors": self.error_count,
            "results": [result.to_dict() for result in self.results],
        }


def _ensure_newline(line: str) -> str:
    return line if line.endswith("\n") else line + "\n\\ No newline at end of file\n"
