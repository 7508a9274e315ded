"""Crowd seat-chase simulation on a gridded conference venue."""

from seat_chase.config.types import EndReason, GameConfig, GamePhase, VenueConfig
from seat_chase.domain.cells import Direction
from seat_chase.simulation.controller import GameController

__all__ = [
    "Direction",
    "EndReason",
    "GameConfig",
    "GameController",
    "GamePhase",
    "VenueConfig",
]

__version__ = "0.1.0"
