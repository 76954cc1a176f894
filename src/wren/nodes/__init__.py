"""Document tree for wren.

Every node is a frozen, slotted dataclass carrying its source Location.

Node kinds:
    HTML: Document, Element, Attribute, Text, HTMLComment, Doctype
    Script: ScriptOutput, ScriptExecution, ScriptComment,
        ScriptControlFlow, ScriptBranch, ScriptEnd
"""

from __future__ import annotations

from wren.nodes.base import UNKNOWN_LOCATION, Location, Node, Position
from wren.nodes.html import Attribute, Doctype, Document, Element, HTMLComment, Text
from wren.nodes.script import (
    BranchKind,
    ControlFlowKind,
    ScriptBranch,
    ScriptComment,
    ScriptControlFlow,
    ScriptEnd,
    ScriptExecution,
    ScriptOutput,
    ScriptTag,
)

# Every concrete node class the printer must handle.
NODE_TYPES: tuple[type[Node], ...] = (
    Document,
    Element,
    Attribute,
    Text,
    HTMLComment,
    Doctype,
    ScriptOutput,
    ScriptExecution,
    ScriptComment,
    ScriptControlFlow,
    ScriptBranch,
    ScriptEnd,
)

__all__ = [
    "NODE_TYPES",
    "UNKNOWN_LOCATION",
    "Attribute",
    "BranchKind",
    "ControlFlowKind",
    "Doctype",
    "Document",
    "Element",
    "HTMLComment",
    "Location",
    "Node",
    "Position",
    "ScriptBranch",
    "ScriptComment",
    "ScriptControlFlow",
    "ScriptEnd",
    "ScriptExecution",
    "ScriptOutput",
    "ScriptTag",
    "Text",
]
