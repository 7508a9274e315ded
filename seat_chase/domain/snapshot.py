"""Immutable views of the world handed to presentation collaborators."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from seat_chase.config.constants import NO_OCCUPANT
from seat_chase.domain.cells import CellType, Position
from seat_chase.domain.venue import SYMBOL_FOR_TYPE
from seat_chase.domain.world import WorldState


@dataclass(frozen=True)
class CellView:
    """Read-only copy of one grid cell."""

    cell_type: CellType
    occupant_id: int | None
    chair_id: int | None
    score: int | None


@dataclass(frozen=True)
class AgentView:
    """Read-only copy of one agent."""

    agent_id: int
    x: int
    y: int
    seated: bool
    is_user: bool
    target_seat: Position | None

    @property
    def position(self) -> Position:
        return (self.x, self.y)


@dataclass(frozen=True)
class WorldSnapshot:
    """Grid, agents and derived counters at one point in time."""

    width: int
    height: int
    cells: tuple[tuple[CellView, ...], ...]
    agents: tuple[AgentView, ...]
    tick: int
    user_moves: int
    seated_count: int
    user_score: int | None
    phase: str
    end_reason: str | None = None

    @classmethod
    def capture(
        cls,
        world: WorldState,
        *,
        tick: int,
        user_moves: int,
        user_score: int | None,
        phase: str,
        end_reason: str | None = None,
    ) -> WorldSnapshot:
        cells = tuple(
            tuple(CellView(c.cell_type, c.occupant_id, c.chair_id, c.score) for c in row)
            for row in world.grid.cells
        )
        agents = tuple(
            AgentView(a.agent_id, a.x, a.y, a.seated, a.is_user, a.target_seat)
            for a in sorted(world.agents.values(), key=lambda a: a.agent_id)
        )
        return cls(
            width=world.grid.width,
            height=world.grid.height,
            cells=cells,
            agents=agents,
            tick=tick,
            user_moves=user_moves,
            seated_count=world.seated_count,
            user_score=user_score,
            phase=phase,
            end_reason=end_reason,
        )

    def occupancy_matrix(self) -> np.ndarray:
        """``(height, width)`` int array of occupant ids, ``NO_OCCUPANT`` where empty."""
        matrix = np.full((self.height, self.width), NO_OCCUPANT, dtype=np.int64)
        for agent in self.agents:
            matrix[agent.y, agent.x] = agent.agent_id
        return matrix

    def render_ascii(self) -> str:
        """Debug text map: ``@`` user, ``o`` standing NPC, ``x`` seated NPC."""
        lines: list[list[str]] = [
            [SYMBOL_FOR_TYPE[cell.cell_type] for cell in row] for row in self.cells
        ]
        for agent in self.agents:
            if agent.is_user:
                mark = "@"
            else:
                mark = "x" if agent.seated else "o"
            lines[agent.y][agent.x] = mark
        return "\n".join("".join(line) for line in lines)
