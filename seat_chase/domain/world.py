"""Authoritative world state: venue grid plus agent roster.

Agent positions are the single source of truth. ``Cell.occupant_id`` is a
derived index rebuilt for every affected cell after each applied batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from seat_chase.config.types import GameConfig
from seat_chase.domain.cells import Cell, CellType, Position, manhattan
from seat_chase.domain.events import EventBus, SeatedEvent
from seat_chase.domain.rules import is_valid_move
from seat_chase.domain.venue import Grid, VenueLayoutError, build_grid, chair_capacity

logger = logging.getLogger(__name__)

Move = tuple[int, Position]
"""``(agent_id, new_position)`` pair as produced by the movement resolver."""


@dataclass
class Agent:
    """A single attendee on the grid."""

    agent_id: int
    x: int
    y: int
    seated: bool = False
    target_seat: Position | None = None
    next_move_tick: int | None = None
    is_user: bool = False

    @property
    def position(self) -> Position:
        return (self.x, self.y)


@dataclass
class WorldState:
    """Grid + agents with a single batch mutator, ``apply_moves``."""

    grid: Grid
    agents: dict[int, Agent]
    user_id: int | None = None
    bus: EventBus | None = None

    @classmethod
    def create(cls, config: GameConfig, bus: EventBus | None = None) -> WorldState:
        """Build the venue and line the crowd up two abreast in the hallway."""
        capacity = chair_capacity(config.venue)
        grid = build_grid(config.venue, chair_count=config.resolved_chair_count(capacity))
        spawn = grid.spawn_positions()
        if len(spawn) < config.agent_count:
            raise VenueLayoutError(
                f"hallway holds {len(spawn)} agents, {config.agent_count} requested"
            )
        chairs = grid.chair_positions()
        if not chairs:
            raise VenueLayoutError("venue has no chairs")

        agents: dict[int, Agent] = {}
        npc_index = 0
        for agent_id in range(config.agent_count):
            x, y = spawn[agent_id]
            is_user = agent_id == config.user_index
            target: Position | None = None
            if not is_user:
                # Modular reuse when NPCs outnumber chairs.
                target = chairs[npc_index % len(chairs)]
                npc_index += 1
            agents[agent_id] = Agent(
                agent_id=agent_id,
                x=x,
                y=y,
                target_seat=target,
                next_move_tick=None if is_user else config.move_interval,
                is_user=is_user,
            )

        world = cls(grid=grid, agents=agents, user_id=config.user_index, bus=bus)
        world.resync_occupancy()
        return world

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def cell_at(self, x: int, y: int) -> Cell:
        return self.grid.cell_at(x, y)

    def agent_at(self, x: int, y: int) -> Agent | None:
        occupant = self.grid.cell_at(x, y).occupant_id
        return None if occupant is None else self.agents[occupant]

    def agent(self, agent_id: int) -> Agent:
        return self.agents[agent_id]

    @property
    def user(self) -> Agent | None:
        return None if self.user_id is None else self.agents[self.user_id]

    def npcs(self) -> list[Agent]:
        return [a for a in self.agents.values() if not a.is_user]

    def occupancy(self) -> dict[Position, int]:
        """Frozen copy of position -> agent id, derived from agent positions."""
        return {agent.position: agent.agent_id for agent in self.agents.values()}

    def open_chairs(self) -> list[Position]:
        """Chairs nobody stands on, in chair-id order."""
        occupied = self.occupancy()
        return [pos for pos in self.grid.chair_positions() if pos not in occupied]

    @property
    def seated_count(self) -> int:
        return sum(1 for a in self.agents.values() if a.seated)

    def all_seated(self) -> bool:
        return all(a.seated for a in self.agents.values())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply_moves(self, moves: Sequence[Move], tick: int = 0) -> list[bool]:
        """Apply ``moves`` in order, re-validating each against the updating grid.

        Returns one flag per move; ``False`` means the move was rejected (the
        mover is seated or unknown, the target is not one step away, or
        ``is_valid_move`` fails now). Rejections never raise.
        """
        live = self.occupancy()
        applied: list[bool] = []
        affected: set[Position] = set()
        for agent_id, target in moves:
            agent = self.agents.get(agent_id)
            if (
                agent is None
                or agent.seated
                or manhattan(agent.position, target) != 1
                or not is_valid_move(self.grid, live, agent, target)
            ):
                logger.debug("rejected move of agent %s to %s", agent_id, target)
                applied.append(False)
                continue
            old = agent.position
            del live[old]
            live[target] = agent_id
            agent.x, agent.y = target
            affected.update((old, target))
            if self.grid.cells[target[1]][target[0]].is_chair:
                self._seat(agent, tick)
            applied.append(True)
        self.resync_occupancy(affected)
        return applied

    def mark_seated(self, agent_id: int, tick: int = 0) -> bool:
        """Seat an agent already standing on a chair; ``False`` if it is not."""
        agent = self.agents[agent_id]
        if agent.seated:
            return False
        if self.grid.cells[agent.y][agent.x].cell_type is not CellType.CHAIR:
            return False
        self._seat(agent, tick)
        return True

    def _seat(self, agent: Agent, tick: int) -> None:
        agent.seated = True
        score = self.grid.cells[agent.y][agent.x].score
        logger.debug("agent %s seated at %s (score=%s)", agent.agent_id, agent.position, score)
        if self.bus is not None:
            self.bus.emit(
                SeatedEvent(
                    agent_id=agent.agent_id,
                    position=agent.position,
                    score=score,
                    tick=tick,
                    is_user=agent.is_user,
                )
            )

    def resync_occupancy(self, positions: Iterable[Position] | None = None) -> None:
        """Rebuild ``Cell.occupant_id`` for ``positions`` (all cells when ``None``)."""
        if positions is None:
            for row in self.grid.cells:
                for cell in row:
                    cell.occupant_id = None
            for agent in self.agents.values():
                self.grid.cells[agent.y][agent.x].occupant_id = agent.agent_id
            return
        wanted = set(positions)
        for x, y in wanted:
            self.grid.cells[y][x].occupant_id = None
        for agent in self.agents.values():
            if agent.position in wanted:
                self.grid.cells[agent.y][agent.x].occupant_id = agent.agent_id

    def occupancy_violations(self) -> list[str]:
        """Describe every mismatch between the occupancy index and agent positions."""
        problems: list[str] = []
        expected = self.occupancy()
        if len(expected) != len(self.agents):
            problems.append("two or more agents share a cell")
        for y, row in enumerate(self.grid.cells):
            for x, cell in enumerate(row):
                owner = expected.get((x, y))
                if cell.occupant_id != owner:
                    problems.append(
                        f"cell ({x}, {y}) lists {cell.occupant_id}, agent positions say {owner}"
                    )
        return problems
