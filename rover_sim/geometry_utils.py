"""
Grid geometry for the rover simulation.

Provides the integer cell coordinate (Position) and the four compass
headings with their unit steps and rotation order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


# ---------------------------------------------------------------------------
# Cell coordinates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Position:
    """Integer cell on the unbounded grid.

    Attributes
    ----------
    x : int
        Column, increasing to the east.
    y : int
        Row, increasing to the north.
    """

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        """Return a new position shifted by (dx, dy)."""
        return Position(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @classmethod
    def coerce(cls, value: Union["Position", Tuple[int, int]]) -> "Position":
        """Accept a Position or an (x, y) pair."""
        if isinstance(value, Position):
            return value
        x, y = value
        return cls(int(x), int(y))


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------


class Heading(Enum):
    """Compass direction the rover is facing."""

    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit step (dx, dy) when moving forward along this heading."""
        return _DELTAS[self]

    def left(self) -> "Heading":
        """Heading after a 90 degree counter-clockwise turn."""
        return _LEFT_OF[self]

    def right(self) -> "Heading":
        """Heading after a 90 degree clockwise turn."""
        return _RIGHT_OF[self]

    @classmethod
    def from_name(cls, name: str) -> "Heading":
        """Parse a heading name such as ``"north"`` or ``"N"``."""
        key = str(name).strip().upper()
        for heading in cls:
            if key in (heading.value, heading.value[0]):
                return heading
        raise ValueError(f"Unknown heading: {name!r}")


_DELTAS = {
    Heading.NORTH: (0, 1),
    Heading.SOUTH: (0, -1),
    Heading.EAST: (1, 0),
    Heading.WEST: (-1, 0),
}

# WEST -> SOUTH -> EAST -> NORTH -> WEST
_LEFT_OF = {
    Heading.NORTH: Heading.WEST,
    Heading.WEST: Heading.SOUTH,
    Heading.SOUTH: Heading.EAST,
    Heading.EAST: Heading.NORTH,
}
_RIGHT_OF = {after: before for before, after in _LEFT_OF.items()}

HEADING_ORDER = (Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST)


def heading_index(heading: Heading) -> int:
    """Clockwise index of a heading starting from NORTH (0..3)."""
    return HEADING_ORDER.index(heading)
