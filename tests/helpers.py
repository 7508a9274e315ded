"""Shared fixtures-in-code for the seat_chase test suite."""

from __future__ import annotations

from random import Random

from seat_chase.config.types import GameConfig, VenueConfig
from seat_chase.domain.world import WorldState

# Two adjacent chairs reached through a single-cell aisle.
ADJACENT_SEATS_LAYOUT = (
    "######",
    "#cc###",
    "#..###",
    "##a###",
    "##a###",
    "#hh###",
    "######",
)

# Small open room with one chair; (1, 2) is walled off.
OPEN_ROOM_LAYOUT = (
    "#######",
    "#.....#",
    "##c...#",
    "#.....#",
    "#hhhhh#",
    "#######",
)

# Two chairs in the front row, a user-friendly hallway of four cells.
TWO_CHAIR_LAYOUT = (
    "#######",
    "#c.c..#",
    "#hhhh.#",
    "#######",
)


class ScriptedRandom(Random):
    """Random source with a fixed ``random()`` value and order-preserving shuffle."""

    def __init__(self, value: float = 0.0) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value

    def shuffle(self, x) -> None:  # type: ignore[override]
        return None


def layout_config(layout: tuple[str, ...], **kwargs) -> GameConfig:
    kwargs.setdefault("user_index", None)
    return GameConfig(venue=VenueConfig(layout=layout), **kwargs)


def layout_world(layout: tuple[str, ...], **kwargs) -> WorldState:
    return WorldState.create(layout_config(layout, **kwargs))


def place(world: WorldState, agent_id: int, position: tuple[int, int]) -> None:
    """Teleport an agent for test setup and resync the occupancy index."""
    agent = world.agents[agent_id]
    agent.x, agent.y = position
    world.resync_occupancy()
