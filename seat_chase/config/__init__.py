"""Configuration layer: constants and typed config dataclasses."""

from seat_chase.config.constants import (
    CHAIR_ROWS,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_SEAT_SCORE,
    MAX_TICKS,
    MIN_SEAT_SCORE,
    MOVE_INTERVAL,
    NUM_AGENTS,
    SEATS_PER_SIDE,
    USER_INDEX,
)
from seat_chase.config.types import (
    EndReason,
    GameConfig,
    GamePhase,
    GameResult,
    SweepConfig,
    VenueConfig,
)

__all__ = [
    "CHAIR_ROWS",
    "EndReason",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "GameConfig",
    "GamePhase",
    "GameResult",
    "MAX_SEAT_SCORE",
    "MAX_TICKS",
    "MIN_SEAT_SCORE",
    "MOVE_INTERVAL",
    "NUM_AGENTS",
    "SEATS_PER_SIDE",
    "SweepConfig",
    "USER_INDEX",
    "VenueConfig",
]
