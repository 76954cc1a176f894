"""Generic traversal over the wren document tree.

Provides iter_child_nodes and walk for analysis passes that do not care
about layout (directive detection, rewriters), plus transform for building
a modified copy of a tree.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import replace

from wren.nodes import (
    Attribute,
    Document,
    Element,
    Node,
    ScriptBranch,
    ScriptControlFlow,
)

# Fields holding child node sequences, per node type
CHILD_FIELDS: dict[type[Node], tuple[str, ...]] = {
    Document: ("children",),
    Element: ("attributes", "children"),
    Attribute: ("value",),
    ScriptControlFlow: ("body", "branches"),
    ScriptBranch: ("body",),
}


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of a node in source order."""
    for name in CHILD_FIELDS.get(type(node), ()):
        yield from getattr(node, name) or ()
    if isinstance(node, ScriptControlFlow) and node.end is not None:
        yield node.end


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all its descendants, depth-first in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))


def transform(node: Node, visit: Callable[[Node], Node | None]) -> Node:
    """Return a copy of the tree with nodes replaced bottom-up.

    ``visit`` receives each node after its children were transformed and
    returns a replacement, or None to keep the node. Unchanged subtrees are
    reused, not copied.
    """
    changes = {}
    for name in CHILD_FIELDS.get(type(node), ()):
        items = getattr(node, name)
        if items is None:
            continue
        new_items = tuple(transform(child, visit) for child in items)
        if any(new is not old for new, old in zip(new_items, items, strict=True)):
            changes[name] = new_items
    if changes:
        node = replace(node, **changes)
    replacement = visit(node)
    return node if replacement is None else replacement
