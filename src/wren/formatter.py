"""Single-file formatting pipeline for wren.

    source → parse → ignore check → pre-rewriters → FormatPrinter
           → post-rewriters → FormatResult

Any failure inside the pipeline is captured on the FormatResult (with the
original text kept as ``formatted``) so a driver can move on to the next
file.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from wren.config import DEFAULT_CONFIG, FormatterConfig
from wren.context import FormatContext
from wren.directives import has_ignore_directive
from wren.exceptions import ErrorCode, RewriterError, UnresolvedParseError, WrenError
from wren.nodes import Document
from wren.parser import parse
from wren.printer import FormatPrinter
from wren.result import FormatResult
from wren.rewriters import ASTRewriter, Rewriter, RewriterRegistry, StringRewriter

logger = logging.getLogger(__name__)


class Formatter:
    """Formats template source according to a FormatterConfig.

    Example:
        >>> formatter = Formatter()
        >>> formatter.format("<%=@user.name%>").formatted
        '<%= @user.name %>'

    """

    __slots__ = ("config", "pre_rewriters", "post_rewriters")

    def __init__(
        self,
        config: FormatterConfig | None = None,
        *,
        pre_rewriters: Sequence[ASTRewriter] = (),
        post_rewriters: Sequence[StringRewriter] = (),
    ):
        self.config = config or DEFAULT_CONFIG
        self.pre_rewriters = tuple(pre_rewriters)
        self.post_rewriters = tuple(post_rewriters)

    @classmethod
    def from_config(
        cls,
        config: FormatterConfig | None = None,
        registry: RewriterRegistry | None = None,
    ) -> Formatter:
        """Build a Formatter with the rewriters named in the config.

        Unknown rewriters and rewriters that fail to load or instantiate are
        skipped with a warning.
        """
        config = config or DEFAULT_CONFIG
        registry = registry or RewriterRegistry()
        pre = [
            rewriter
            for name in config.rewriter_pre
            if (rewriter := _instantiate(name, registry.resolve_ast_rewriter, "pre")) is not None
        ]
        post = [
            rewriter
            for name in config.rewriter_post
            if (rewriter := _instantiate(name, registry.resolve_string_rewriter, "post"))
            is not None
        ]
        return cls(config, pre_rewriters=pre, post_rewriters=post)

    def format(
        self,
        source: str,
        file_path: str = "<template>",
        *,
        force: bool = False,
    ) -> FormatResult:
        """Format one template; never raises for per-file failures."""
        context = FormatContext(source=source, file_path=file_path, config=self.config, force=force)
        try:
            return self._format(context)
        except Exception as e:
            logger.debug("%s: formatting failed: %s", file_path, e)
            return FormatResult(file_path=file_path, original=source, formatted=source, error=e)

    def _format(self, context: FormatContext) -> FormatResult:
        source = context.source
        file_path = context.file_path
        document = parse(source, filename=file_path)
        if document.errors:
            raise UnresolvedParseError(document.errors, file_path)

        if not context.force and has_ignore_directive(document):
            logger.debug("%s: ignore directive found, leaving unchanged", file_path)
            return FormatResult(file_path=file_path, original=source, formatted=source, ignored=True)

        for rewriter in self.pre_rewriters:
            logger.debug("%s: running pre-rewriter %s", file_path, rewriter.name)
            document = _run_rewriter(rewriter, document, context)

        formatted = FormatPrinter.format(document, context)

        for rewriter in self.post_rewriters:
            logger.debug("%s: running post-rewriter %s", file_path, rewriter.name)
            formatted = _run_rewriter(rewriter, formatted, context)

        return FormatResult(file_path=file_path, original=source, formatted=formatted)


def _run_rewriter(
    rewriter: ASTRewriter | StringRewriter,
    value: Document | str,
    context: FormatContext,
) -> Document | str:
    try:
        return rewriter.rewrite(value, context)
    except WrenError:
        raise
    except Exception as e:
        raise RewriterError(
            f"Rewriter {rewriter.name!r} failed: {e}",
            rewriter=rewriter.name,
            code=ErrorCode.REWRITER_FAILED,
        ) from e


def _instantiate(
    name: str,
    resolve: Callable[[str], type[Rewriter] | None],
    phase: str,
) -> Rewriter | None:
    try:
        rewriter_class = resolve(name)
        if rewriter_class is None:
            logger.warning("%s-format rewriter %r not found. Skipping.", phase.capitalize(), name)
            return None
        return rewriter_class()
    except Exception as e:
        logger.warning(
            "Failed to instantiate %s-format rewriter %r: %s", phase, name, e
        )
        return None


def format_string(
    source: str,
    *,
    config: FormatterConfig | None = None,
    force: bool = False,
    ignore_errors: bool = False,
) -> str:
    """Format template source and return the text.

    Unlike ``Formatter.format`` this raises instead of capturing errors.

    Raises:
        UnresolvedParseError: If the source has parse errors and
            ``ignore_errors`` is false.
    """
    document = parse(source)
    context = FormatContext(source=source, config=config or DEFAULT_CONFIG, force=force)
    return FormatPrinter.format(document, context, ignore_errors=ignore_errors)
