"""Move legality shared by planning (frozen snapshot) and application (live grid)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from seat_chase.domain.cells import Position

if TYPE_CHECKING:
    from seat_chase.domain.venue import Grid
    from seat_chase.domain.world import Agent


def is_valid_move(
    grid: Grid,
    occupancy: Mapping[Position, int],
    agent: Agent,
    target: Position,
) -> bool:
    """Return whether ``agent`` may stand on ``target`` given ``occupancy``.

    Out of bounds, walls and cells held by another agent are illegal. A chair
    is legal for the user agent (any chair) and for an NPC only when it is
    that NPC's own target seat. Every other cell is legal.
    """
    if not grid.in_bounds(target):
        return False
    cell = grid.cells[target[1]][target[0]]
    if cell.is_wall:
        return False
    occupant = occupancy.get(target)
    if occupant is not None and occupant != agent.agent_id:
        return False
    if cell.is_chair:
        return agent.is_user or agent.target_seat == target
    return True
