"""Domain layer: venue grid, world state, movement rules, events and snapshots."""

from seat_chase.domain.cells import Cell, CellType, Direction, Position
from seat_chase.domain.events import EventBus, GameEndedEvent, GameStartedEvent, SeatedEvent
from seat_chase.domain.movement import MovementResolver
from seat_chase.domain.rules import is_valid_move
from seat_chase.domain.snapshot import AgentView, CellView, WorldSnapshot
from seat_chase.domain.venue import (
    Grid,
    VenueLayoutError,
    build_grid,
    generate_venue,
    parse_layout,
    seat_score,
    validate_venue,
)
from seat_chase.domain.world import Agent, Move, WorldState

__all__ = [
    "Agent",
    "AgentView",
    "Cell",
    "CellType",
    "CellView",
    "Direction",
    "EventBus",
    "GameEndedEvent",
    "GameStartedEvent",
    "Grid",
    "Move",
    "MovementResolver",
    "Position",
    "SeatedEvent",
    "VenueLayoutError",
    "WorldSnapshot",
    "WorldState",
    "build_grid",
    "generate_venue",
    "is_valid_move",
    "parse_layout",
    "seat_score",
    "validate_venue",
]
