"""Parser for HTML+ERB templates.

Builds a Document tree from source text, recording (not raising) syntax
errors. See ``wren.parser.core`` for the entry points.
"""

from __future__ import annotations

from wren.parser.core import Parser, parse
from wren.parser.script import classify_script

__all__ = ["Parser", "classify_script", "parse"]
