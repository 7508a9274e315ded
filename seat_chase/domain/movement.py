"""NPC and user movement policies.

Every NPC decision of one tick is computed against a single frozen occupancy
snapshot (see ``plan_tick``); ``WorldState.apply_moves`` then re-validates the
batch sequentially against the updating grid, so two agents trying to swap
cells both fail and simply retry on a later tick.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from random import Random

from seat_chase.config.constants import MOVE_INTERVAL
from seat_chase.domain.cells import Direction, Position, manhattan, sign
from seat_chase.domain.rules import is_valid_move
from seat_chase.domain.world import Agent, Move, WorldState

logger = logging.getLogger(__name__)


class MovementResolver:
    """Decides each agent's intended next cell.

    All tie-breaking (axis order, fallback direction order, batch order) draws
    from the injected ``rng`` so a fixed seed reproduces a run exactly.
    """

    def __init__(
        self,
        rng: Random,
        move_interval: int = MOVE_INTERVAL,
        reassign_taken_seats: bool = True,
    ) -> None:
        if move_interval < 1:
            raise ValueError("move_interval must be >= 1")
        self.rng = rng
        self.move_interval = move_interval
        self.reassign_taken_seats = reassign_taken_seats

    def plan_npc_move(
        self, world: WorldState, agent: Agent, occupancy: Mapping[Position, int]
    ) -> Position | None:
        """Greedy step toward the target seat with a randomized fallback.

        Returns ``None`` when the agent is seated, already on its target, or
        boxed in this tick.
        """
        if agent.seated or agent.target_seat is None or agent.position == agent.target_seat:
            return None
        x, y = agent.position
        tx, ty = agent.target_seat
        dx, dy = sign(tx - x), sign(ty - y)
        horizontal = (x + dx, y) if dx else None
        vertical = (x, y + dy) if dy else None
        primaries = [horizontal, vertical] if self.rng.random() < 0.5 else [vertical, horizontal]
        for candidate in primaries:
            if candidate is not None and is_valid_move(world.grid, occupancy, agent, candidate):
                return candidate

        directions = list(Direction)
        self.rng.shuffle(directions)
        for direction in directions:
            candidate = direction.apply(agent.position)
            if is_valid_move(world.grid, occupancy, agent, candidate):
                return candidate
        return None

    def plan_tick(self, world: WorldState, tick: int) -> list[Move]:
        """Plan moves for every standing NPC due at ``tick`` from one frozen snapshot."""
        frozen = world.occupancy()
        moves: list[Move] = []
        for agent in sorted(world.npcs(), key=lambda a: a.agent_id):
            if agent.seated or agent.next_move_tick is None or agent.next_move_tick > tick:
                continue
            agent.next_move_tick = tick + self.move_interval
            if agent.position == agent.target_seat:
                world.mark_seated(agent.agent_id, tick)
                continue
            target = self.plan_npc_move(world, agent, frozen)
            if target is not None:
                moves.append((agent.agent_id, target))
        self.rng.shuffle(moves)
        return moves

    def retarget_taken_seats(self, world: WorldState) -> list[int]:
        """Send NPCs whose target chair is taken to the nearest open chair.

        Chairs no other standing NPC is heading for are preferred; ties break
        on chair id. Returns the ids of reassigned agents. A no-op when
        reassignment is disabled, leaving those NPCs waiting outside the
        taken chair.
        """
        if not self.reassign_taken_seats:
            return []
        occupancy = world.occupancy()
        open_chairs = world.open_chairs()
        standing = sorted(
            (a for a in world.npcs() if not a.seated and a.target_seat is not None),
            key=lambda a: a.agent_id,
        )
        claimed = Counter(a.target_seat for a in standing)
        reassigned: list[int] = []
        for agent in standing:
            occupant = occupancy.get(agent.target_seat)  # type: ignore[arg-type]
            if occupant is None or occupant == agent.agent_id or not open_chairs:
                continue
            unclaimed = [c for c in open_chairs if claimed[c] == 0]
            pool = unclaimed or open_chairs
            best = min(
                pool,
                key=lambda c: (manhattan(agent.position, c), world.cell_at(*c).chair_id or 0),
            )
            logger.debug(
                "agent %s seat %s taken by %s, heading for %s",
                agent.agent_id,
                agent.target_seat,
                occupant,
                best,
            )
            claimed[agent.target_seat] -= 1
            claimed[best] += 1
            agent.target_seat = best
            reassigned.append(agent.agent_id)
        return reassigned

    def plan_user_move(self, world: WorldState, direction: Direction) -> Move | None:
        """One validated cardinal step for the user agent, or ``None``."""
        user = world.user
        if user is None or user.seated:
            return None
        target = direction.apply(user.position)
        if not is_valid_move(world.grid, world.occupancy(), user, target):
            return None
        return (user.agent_id, target)
