"""Simulation layer: logical clock and the game controller."""

from seat_chase.simulation.clock import LogicalClock
from seat_chase.simulation.controller import GameController, SnapshotListener

__all__ = [
    "GameController",
    "LogicalClock",
    "SnapshotListener",
]
