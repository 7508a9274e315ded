"""Venue grid generation, ASCII layouts, seat scores and layout validation.

The generated room is laid out front to back::

    row 0            outer wall
    stage rows       podium block centred on a carpet strip, signs in the corners
    front aisle      row aisle
    chair rows       chairs on every other column, separated by row aisles
    hallway          entrance hallway where the crowd spawns
    last row         outer wall

Chairs never sit side by side, so the gaps between them double as
passages through a chair row. Smaller row indices are closer to the podium
and earn higher seat scores.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import networkx as nx

from seat_chase.config.constants import MAX_SEAT_SCORE, MIN_SEAT_SCORE
from seat_chase.config.types import VenueConfig
from seat_chase.domain.cells import Cell, CellType, Position

LAYOUT_SYMBOLS: dict[str, CellType] = {
    "#": CellType.WALL,
    "c": CellType.CHAIR,
    "h": CellType.HALLWAY,
    "a": CellType.AISLE,
    "r": CellType.ROW_AISLE,
    ".": CellType.CARPET,
    "p": CellType.PODIUM,
    "s": CellType.SIGN,
    " ": CellType.EMPTY,
}
"""ASCII symbol -> cell type for hand-written layouts."""

SYMBOL_FOR_TYPE: dict[CellType, str] = {v: k for k, v in LAYOUT_SYMBOLS.items()}


class VenueLayoutError(ValueError):
    """Raised when a venue violates a generation-time layout invariant."""


def seat_score(
    chair_row: int,
    total_rows: int,
    min_score: int = MIN_SEAT_SCORE,
    max_score: int = MAX_SEAT_SCORE,
) -> int:
    """Score of a chair in ``chair_row``; rows nearer the podium score higher.

    ``min + (total_rows - chair_row) / total_rows * (max - min)``, rounded.
    """
    if total_rows < 1:
        raise ValueError("total_rows must be >= 1")
    if not 0 <= chair_row < total_rows:
        raise ValueError(f"chair_row must be in [0, {total_rows})")
    normalized = (total_rows - chair_row) / total_rows
    return round(min_score + normalized * (max_score - min_score))


@dataclass
class Grid:
    """Fixed-size 2D array of cells indexed as ``cells[y][x]``."""

    width: int
    height: int
    cells: list[list[Cell]]

    def in_bounds(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Cell:
        if not self.in_bounds((x, y)):
            raise IndexError(f"cell out of bounds: x={x}, y={y}")
        return self.cells[y][x]

    def positions_of(self, cell_type: CellType) -> list[Position]:
        """Positions of every cell of ``cell_type`` in row-major order."""
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.cells[y][x].cell_type is cell_type
        ]

    def chair_positions(self) -> list[Position]:
        """Chair positions ordered by chair id."""
        chairs = self.positions_of(CellType.CHAIR)
        return sorted(chairs, key=lambda pos: self.cells[pos[1]][pos[0]].chair_id or 0)

    def spawn_positions(self) -> list[Position]:
        """Hallway cells in queue order: column by column, front to back."""
        hallway = self.positions_of(CellType.HALLWAY)
        return sorted(hallway, key=lambda pos: (pos[0], pos[1]))


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def _blank_grid(width: int, height: int) -> Grid:
    cells = [[Cell(CellType.CARPET) for _ in range(width)] for _ in range(height)]
    for x in range(width):
        cells[0][x].cell_type = CellType.WALL
        cells[height - 1][x].cell_type = CellType.WALL
    for y in range(height):
        cells[y][0].cell_type = CellType.WALL
        cells[y][width - 1].cell_type = CellType.WALL
    return Grid(width=width, height=height, cells=cells)


def generate_venue(config: VenueConfig) -> Grid:
    """Build the conference-room grid described by ``config``."""
    w, h = config.grid_width, config.grid_height
    grid = _blank_grid(w, h)
    cells = grid.cells
    center = w // 2

    podium_left = center - config.podium_width // 2
    for y in range(1, 1 + config.stage_depth):
        for x in range(podium_left, podium_left + config.podium_width):
            cells[y][x].cell_type = CellType.PODIUM
    for x in (1, w - 2):
        if cells[1][x].cell_type is CellType.CARPET:
            cells[1][x].cell_type = CellType.SIGN

    front_aisle = config.stage_depth + 1
    for k in range(config.chair_rows + 1):
        y = front_aisle + 2 * k
        for x in range(1, w - 1):
            cells[y][x].cell_type = CellType.ROW_AISLE

    for k in range(config.chair_rows):
        y = config.first_chair_row + 2 * k
        for i in range(config.seats_per_side):
            cells[y][2 + 2 * i].cell_type = CellType.CHAIR
        for i in range(config.seats_per_side):
            cells[y][center + 2 + 2 * i].cell_type = CellType.CHAIR

    for y in range(front_aisle, config.hallway_top):
        for x in (center - 1, center):
            cells[y][x].cell_type = CellType.AISLE

    for y in range(config.hallway_top, h - 1):
        for x in range(1, w - 1):
            cells[y][x].cell_type = CellType.HALLWAY

    return grid


def parse_layout(rows: Sequence[str]) -> Grid:
    """Build a grid from ASCII rows (see ``LAYOUT_SYMBOLS``)."""
    if not rows:
        raise VenueLayoutError("layout must contain at least one row")
    width = len(rows[0])
    cells: list[list[Cell]] = []
    for y, row in enumerate(rows):
        if len(row) != width:
            raise VenueLayoutError(f"layout row {y} has width {len(row)}, expected {width}")
        try:
            cells.append([Cell(LAYOUT_SYMBOLS[symbol]) for symbol in row])
        except KeyError as exc:
            raise VenueLayoutError(f"unknown layout symbol {exc.args[0]!r} in row {y}") from exc
    return Grid(width=width, height=len(rows), cells=cells)


def _number_chairs(
    grid: Grid, chair_count: int | None, min_score: int, max_score: int
) -> None:
    """Assign chair ids and scores front to back; demote chairs beyond ``chair_count``."""
    next_id = 0
    for y in range(grid.height):
        for x in range(grid.width):
            cell = grid.cells[y][x]
            if cell.cell_type is not CellType.CHAIR:
                continue
            if chair_count is not None and next_id >= chair_count:
                cell.cell_type = CellType.CARPET
                continue
            cell.chair_id = next_id
            cell.score = seat_score(y, grid.height, min_score, max_score)
            next_id += 1


def chair_capacity(config: VenueConfig) -> int:
    """Number of chairs the layout offers before any truncation."""
    if config.layout is not None:
        return sum(row.count("c") for row in config.layout)
    return 2 * config.seats_per_side * config.chair_rows


def build_grid(config: VenueConfig, chair_count: int | None = None) -> Grid:
    """Generate (or parse) the venue, number its chairs and validate it."""
    grid = parse_layout(config.layout) if config.layout is not None else generate_venue(config)
    _number_chairs(grid, chair_count, config.min_seat_score, config.max_seat_score)
    validate_venue(grid, require_podium=config.layout is None)
    return grid


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def walkable_graph(grid: Grid) -> nx.Graph:
    """4-connected graph over cells an NPC may cross on its way (no walls, no chairs)."""
    g = nx.Graph()
    for y in range(grid.height):
        for x in range(grid.width):
            cell = grid.cells[y][x]
            if cell.is_wall or cell.is_chair:
                continue
            g.add_node((x, y))
            for nx_, ny_ in ((x - 1, y), (x, y - 1)):
                if g.has_node((nx_, ny_)):
                    g.add_edge((x, y), (nx_, ny_))
    return g


def validate_venue(grid: Grid, require_podium: bool = False) -> None:
    """Check the generation-time invariants; raise ``VenueLayoutError`` on failure.

    - podium cells form exactly one connected region (hand-written layouts
      may omit the podium unless ``require_podium`` is set)
    - every chair borders a cell reachable from the spawn hallway
    """
    podium = grid.positions_of(CellType.PODIUM)
    if require_podium and not podium:
        raise VenueLayoutError("venue has no podium")
    if podium:
        stage = walkable_graph(grid).subgraph(podium)
        if nx.number_connected_components(stage) != 1:
            raise VenueLayoutError("podium must form exactly one connected region")

    spawn = grid.spawn_positions()
    if not spawn:
        raise VenueLayoutError("venue has no hallway cells to spawn agents in")
    walkable = walkable_graph(grid)
    reachable: set[Position] = set()
    for start in spawn:
        if start not in reachable:
            reachable |= nx.node_connected_component(walkable, start)

    for x, y in grid.chair_positions():
        neighbours = ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1))
        if not any(n in reachable for n in neighbours):
            raise VenueLayoutError(f"chair at ({x}, {y}) is unreachable from the hallway")


def render_grid(grid: Grid) -> list[str]:
    """Inverse of ``parse_layout`` (occupants are not drawn)."""
    return ["".join(SYMBOL_FOR_TYPE[cell.cell_type] for cell in row) for row in grid.cells]
