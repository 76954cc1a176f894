"""Rewriter registry for wren.

Maps rewriter names to classes. Built-in rewriters are registered on
construction. A name that is not registered but looks like a dotted module
path (``myapp.rewriters``) is imported, and every rewriter subclass defined
in that module is registered, before the lookup is retried.
"""

from __future__ import annotations

import inspect
import logging
from importlib import import_module

from wren.exceptions import ErrorCode, RewriterError
from wren.rewriters.base import ASTRewriter, Rewriter, StringRewriter
from wren.rewriters.tailwind import TailwindClassSorter

logger = logging.getLogger(__name__)

BUILTIN_REWRITERS: tuple[type[Rewriter], ...] = (TailwindClassSorter,)


class RewriterRegistry:
    """Name → rewriter class lookup.

    Supports:
        - registry.register(MyRewriter)
        - registry.get("my-rewriter")
        - "my-rewriter" in registry

    """

    __slots__ = ("_rewriters",)

    def __init__(self, *, builtins: bool = True):
        self._rewriters: dict[str, type[Rewriter]] = {}
        if builtins:
            for rewriter_class in BUILTIN_REWRITERS:
                self.register(rewriter_class)

    def register(self, rewriter_class: type[Rewriter]) -> None:
        """Register a rewriter class under its ``name``.

        Raises:
            RewriterError: If the class is not a concrete ASTRewriter or
                StringRewriter subclass with a name.
        """
        _validate(rewriter_class)
        if rewriter_class.name in self._rewriters:
            logger.debug("Replacing rewriter %r", rewriter_class.name)
        self._rewriters[rewriter_class.name] = rewriter_class

    def get(self, name: str) -> type[Rewriter] | None:
        return self._rewriters.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._rewriters

    def __contains__(self, name: object) -> bool:
        return name in self._rewriters

    def names(self) -> list[str]:
        return list(self._rewriters)

    def all(self) -> list[type[Rewriter]]:
        return list(self._rewriters.values())

    def resolve_ast_rewriter(self, name: str) -> type[ASTRewriter] | None:
        """Look up a pre-phase rewriter, auto-discovering dotted module paths."""
        rewriter_class = self._resolve(name)
        if rewriter_class is None or not issubclass(rewriter_class, ASTRewriter):
            return None
        return rewriter_class

    def resolve_string_rewriter(self, name: str) -> type[StringRewriter] | None:
        """Look up a post-phase rewriter, auto-discovering dotted module paths."""
        rewriter_class = self._resolve(name)
        if rewriter_class is None or not issubclass(rewriter_class, StringRewriter):
            return None
        return rewriter_class

    def load_module(self, module_name: str) -> list[str]:
        """Import a module and register the rewriter classes it defines.

        Returns:
            Names of the rewriters registered from the module.

        Raises:
            RewriterError: If the module cannot be imported.
        """
        try:
            module = import_module(module_name)
        except ImportError as e:
            raise RewriterError(
                f"Cannot import rewriter module {module_name!r}: {e}",
                rewriter=module_name,
                code=ErrorCode.UNKNOWN_REWRITER,
            ) from e

        loaded = []
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if obj.__module__ != module.__name__:
                continue
            if issubclass(obj, (ASTRewriter, StringRewriter)) and obj.name:
                self.register(obj)
                loaded.append(obj.name)
        logger.debug("Loaded rewriters %s from %s", loaded, module_name)
        return loaded

    def _resolve(self, name: str) -> type[Rewriter] | None:
        rewriter_class = self.get(name)
        if rewriter_class is not None or "." not in name:
            return rewriter_class
        module_name, _, attribute = name.rpartition(".")
        # "package.module" registers everything; "package.module.Class" picks one
        try:
            loaded = self.load_module(name)
        except RewriterError:
            loaded = self.load_module(module_name)
            for rewriter_class in self.all():
                if rewriter_class.__name__ == attribute:
                    return rewriter_class
            return None
        return self.get(loaded[0]) if len(loaded) == 1 else None


def _validate(rewriter_class: object) -> None:
    if not inspect.isclass(rewriter_class) or not issubclass(
        rewriter_class, (ASTRewriter, StringRewriter)
    ):
        raise RewriterError(
            f"{rewriter_class!r} must inherit from ASTRewriter or StringRewriter",
            code=ErrorCode.INVALID_REWRITER,
        )
    if not rewriter_class.name:
        raise RewriterError(
            f"{rewriter_class.__name__} must define a non-empty 'name'",
            rewriter=rewriter_class.__name__,
            code=ErrorCode.INVALID_REWRITER,
        )
    if rewriter_class.rewrite in (ASTRewriter.rewrite, StringRewriter.rewrite):
        raise RewriterError(
            f"{rewriter_class.__name__} must implement rewrite()",
            rewriter=rewriter_class.name,
            code=ErrorCode.INVALID_REWRITER,
        )
