"""Multi-file driver for wren.

Formats an explicit list of template paths. Each file is read, formatted and
(outside check mode) written back only when its text changed. A failure in
one file is recorded on that file's result and the run continues.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from wren.config import DEFAULT_CONFIG, FormatterConfig
from wren.exceptions import ErrorCode, FileError
from wren.formatter import Formatter
from wren.result import AggregatedResult, FormatResult
from wren.rewriters import RewriterRegistry

logger = logging.getLogger(__name__)


class Runner:
    """Formats files on disk.

    Args:
        config: Formatter configuration (defaults apply when omitted)
        check: Report what would change without writing files
        force: Format files even when they carry the ignore directive
        registry: Rewriter registry used to resolve configured rewriters

    Example:
        >>> runner = Runner(check=True)
        >>> summary = runner.run(["app/views/users/show.html.erb"])
        >>> summary.all_formatted
        True

    """

    __slots__ = ("check", "force", "formatter")

    def __init__(
        self,
        config: FormatterConfig | None = None,
        *,
        check: bool = False,
        force: bool = False,
        registry: RewriterRegistry | None = None,
    ):
        self.check = check
        self.force = force
        self.formatter = Formatter.from_config(config or DEFAULT_CONFIG, registry)

    def run(self, paths: Iterable[str | Path]) -> AggregatedResult:
        """Format every path in order and summarize the outcome."""
        results = [self.format_file(Path(path)) for path in paths]
        summary = AggregatedResult.from_results(results)
        logger.debug(
            "Processed %d file(s): %d changed, %d ignored, %d failed",
            summary.file_count,
            summary.changed_count,
            summary.ignored_count,
            summary.error_count,
        )
        return summary

    def format_source(self, source: str, file_path: str = "<template>") -> FormatResult:
        return self.formatter.format(source, file_path, force=self.force)

    def format_file(self, path: Path) -> FormatResult:
        file_path = str(path)
        try:
            source = _read(path)
        except FileError as e:
            logger.warning("%s", e)
            return FormatResult(file_path=file_path, original="", formatted="", error=e)

        result = self.format_source(source, file_path)
        if result.is_error:
            logger.warning("%s: %s", file_path, result.error)
            return result
        if result.changed and not self.check:
            try:
                _write(path, result.formatted)
            except FileError as e:
                logger.warning("%s", e)
                return FormatResult(
                    file_path=file_path, original=source, formatted=source, error=e
                )
        return result


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileError("File not found", path=str(path), code=ErrorCode.FILE_NOT_FOUND) from e
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Cannot read file: {e}", path=str(path), code=ErrorCode.FILE_READ) from e


def _write(path: Path, text: str) -> None:
    try:
        # newline="" keeps the line endings produced by the formatter
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise FileError(
            f"Cannot write file: {e}", path=str(path), code=ErrorCode.FILE_WRITE
        ) from e
