"""Base node types for the wren document tree."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A point in template source (1-based line, 0-based column and offset)."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Location:
    """Half-open source span covered by a node."""

    start: Position
    end: Position

    @property
    def is_multiline(self) -> bool:
        """True if the span crosses at least one line break."""
        return self.end.line > self.start.line


UNKNOWN_POSITION = Position(line=1, column=0, offset=0)
UNKNOWN_LOCATION = Location(start=UNKNOWN_POSITION, end=UNKNOWN_POSITION)


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all document nodes.

    Nodes are immutable. Rewriters produce new trees with
    ``dataclasses.replace`` instead of mutating in place.

    """

    location: Location
