"""Static analysis over the wren document tree.

Provides the element layout classifier and generic tree traversal.
"""

from __future__ import annotations

from wren.analysis.decision import LayoutDecision
from wren.analysis.element_analyzer import ElementAnalyzer, has_multiline_control_flow
from wren.analysis.visitor import iter_child_nodes, transform, walk

__all__ = [
    "ElementAnalyzer",
    "LayoutDecision",
    "has_multiline_control_flow",
    "iter_child_nodes",
    "transform",
    "walk",
]
