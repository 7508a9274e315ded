"""Centralized domain constants for the seat-chase simulation.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_HEIGHT = 15
"""Default venue height in rows (including the outer walls)."""

GRID_WIDTH = 30
"""Default venue width in columns (including the outer walls)."""

NUM_AGENTS = 48
"""Default number of agents, user included."""

USER_INDEX = 24
"""Default spawn slot (and agent id) of the user-controlled agent."""

CHAIR_ROWS = 4
"""Number of chair rows in the generated venue."""

SEATS_PER_SIDE = 6
"""Chairs per row on each side of the center aisle."""

STAGE_DEPTH = 2
"""Rows occupied by the stage/podium strip at the front of the venue."""

PODIUM_WIDTH = 6
"""Width in cells of the podium block centred on the stage strip."""

MIN_SEAT_SCORE = 100
"""Score awarded for a chair in the row farthest from the podium."""

MAX_SEAT_SCORE = 500
"""Upper bound of the seat score, approached by the front row."""

MOVE_INTERVAL = 1
"""Ticks between two move opportunities of the same NPC."""

MAX_TICKS = 5_000
"""Safety cap on ticks for one headless run."""

NO_OCCUPANT = -1
"""Sentinel used in numeric occupancy matrices for an empty cell."""
