"""Embedded-script (ERB) nodes for wren."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from wren.nodes.base import Node

ControlFlowKind = Literal[
    "if", "unless", "case", "case_in", "for", "while", "until", "block", "begin"
]
BranchKind = Literal["elsif", "else", "when", "in", "rescue", "ensure"]


@dataclass(frozen=True, slots=True)
class ScriptTag(Node):
    """Base class for every node built from a ``<% ... %>`` tag.

    ``content`` is the raw text between the delimiters, whitespace included.
    """

    open_delim: str = "<%"
    content: str = ""
    close_delim: str = "%>"


@dataclass(frozen=True, slots=True)
class ScriptOutput(ScriptTag):
    """Output tag: <%= expr %> or <%== expr %>."""


@dataclass(frozen=True, slots=True)
class ScriptExecution(ScriptTag):
    """Execution tag with no structural role: <% code %>."""


@dataclass(frozen=True, slots=True)
class ScriptComment(ScriptTag):
    """Comment tag: <%# text %>."""


@dataclass(frozen=True, slots=True)
class ScriptBranch(ScriptTag):
    """Continuation of a control-flow construct (elsif, else, when, ...)."""

    kind: BranchKind = "else"
    body: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class ScriptEnd(ScriptTag):
    """Closing <% end %> of a control-flow construct."""


@dataclass(frozen=True, slots=True)
class ScriptControlFlow(ScriptTag):
    """A control-flow construct: opening tag, body, branches and end.

    Output tags ending in ``do`` (``<%= form_with do |f| %>``) are parsed as
    kind ``block``. ``end`` is None when the construct was never closed.
    """

    kind: ControlFlowKind = "if"
    body: Sequence[Node] = ()
    branches: Sequence[ScriptBranch] = ()
    end: ScriptEnd | None = None
