"""Rewriters: named tree and text transforms run around the layout pass."""

from __future__ import annotations

from wren.rewriters.base import ASTRewriter, Phase, Rewriter, StringRewriter
from wren.rewriters.registry import BUILTIN_REWRITERS, RewriterRegistry
from wren.rewriters.tailwind import TailwindClassSorter, sort_classes, tailwind_sort_key

__all__ = [
    "BUILTIN_REWRITERS",
    "ASTRewriter",
    "Phase",
    "Rewriter",
    "RewriterRegistry",
    "StringRewriter",
    "TailwindClassSorter",
    "sort_classes",
    "tailwind_sort_key",
]
