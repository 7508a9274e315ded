"""Grid cell vocabulary: cell types, cells, positions and directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

Position = tuple[int, int]
"""Grid coordinate as ``(x, y)``; ``y`` is the row index."""


class CellType(Enum):
    """Kind of floor (or obstacle) a cell represents."""

    EMPTY = "empty"
    CHAIR = "chair"
    WALL = "wall"
    HALLWAY = "hallway"
    AISLE = "aisle"
    CARPET = "carpet"
    PODIUM = "podium"
    ROW_AISLE = "row-aisle"
    SIGN = "sign"


class Direction(Enum):
    """Cardinal step directions with their ``(dx, dy)`` deltas."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Position:
        return _DELTAS[self]

    def apply(self, position: Position) -> Position:
        """Return the cell one step from ``position`` in this direction."""
        dx, dy = _DELTAS[self]
        return position[0] + dx, position[1] + dy


_DELTAS: dict[Direction, Position] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass
class Cell:
    """A single grid cell.

    ``occupant_id`` is a derived index: agent positions are authoritative and
    the world rebuilds this field after every applied move batch.
    """

    cell_type: CellType
    occupant_id: int | None = None
    chair_id: int | None = None
    score: int | None = None

    @property
    def is_chair(self) -> bool:
        return self.cell_type is CellType.CHAIR

    @property
    def is_wall(self) -> bool:
        return self.cell_type is CellType.WALL


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def sign(value: int) -> int:
    return (value > 0) - (value < 0)
