"""Rewriter interfaces for wren.

Rewriters are named transforms run by the Formatter around the layout pass:

- ASTRewriter (phase "pre") takes and returns a Document before layout.
- StringRewriter (phase "post") takes and returns formatted text.

Rewriters never mutate their input. AST rewriters build a new tree with
``traverse`` (see ``wren.analysis.visitor.transform``).

Example:
    >>> from dataclasses import replace
    >>> from wren.nodes import Doctype
    >>> class UppercaseDoctype(ASTRewriter):
    ...     name = "uppercase-doctype"
    ...     description = "Write <!DOCTYPE html> in upper case"
    ...
    ...     def rewrite(self, document, context):
    ...         return self.traverse(document, self._visit)
    ...
    ...     def _visit(self, node):
    ...         if isinstance(node, Doctype):
    ...             return replace(node, value=node.value.upper())
    ...         return None
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from wren.analysis.visitor import transform

if TYPE_CHECKING:
    from wren.context import FormatContext
    from wren.nodes import Document, Node

Phase = Literal["pre", "post"]


class Rewriter:
    """Common base for both rewriter phases.

    Subclasses set ``name`` (the registry key) and ``description``.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    phase: ClassVar[Phase]

    def __init__(self, options: Mapping[str, Any] | None = None):
        self.options: dict[str, Any] = dict(options or {})

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} ({self.phase})>"


class ASTRewriter(Rewriter):
    """Transforms the document tree before layout."""

    phase: ClassVar[Phase] = "pre"

    def rewrite(self, document: Document, context: FormatContext) -> Document:
        raise NotImplementedError(f"{type(self).__name__} must implement rewrite()")

    def traverse(self, node: Node, visit: Callable[[Node], Node | None]) -> Any:
        """Rebuild node bottom-up, replacing nodes for which visit returns one."""
        return transform(node, visit)


class StringRewriter(Rewriter):
    """Transforms formatted text after layout."""

    phase: ClassVar[Phase] = "post"

    def rewrite(self, text: str, context: FormatContext) -> str:
        raise NotImplementedError(f"{type(self).__name__} must implement rewrite()")
