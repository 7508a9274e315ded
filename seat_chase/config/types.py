"""Configuration dataclasses, lifecycle enums and result containers.

All frozen dataclasses that parameterise venue generation, single games and
multi-seed sweeps live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from seat_chase.config.constants import (
    CHAIR_ROWS,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_SEAT_SCORE,
    MAX_TICKS,
    MIN_SEAT_SCORE,
    MOVE_INTERVAL,
    NUM_AGENTS,
    PODIUM_WIDTH,
    SEATS_PER_SIDE,
    STAGE_DEPTH,
    USER_INDEX,
)

__all__ = [
    "EndReason",
    "GameConfig",
    "GamePhase",
    "GameResult",
    "SweepConfig",
    "VenueConfig",
]

# ---------------------------------------------------------------------------
# Lifecycle enums
# ---------------------------------------------------------------------------


class GamePhase(Enum):
    """Termination state machine of one game."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    ENDED = "ended"


class EndReason(Enum):
    """Why a game transitioned to ``GamePhase.ENDED``."""

    ALL_SEATED = "all_seated"
    VENUE_FULL = "venue_full"


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameResult:
    """Outcome of one headless game."""

    seed: int
    ended: bool
    end_reason: str | None
    ticks: int
    seated_count: int
    agent_count: int
    user_seated: bool
    user_score: int | None


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VenueConfig:
    """Venue geometry for the generated conference room.

    When ``layout`` is given, the grid is parsed from those ASCII rows and the
    generator knobs are ignored.
    """

    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    chair_rows: int = CHAIR_ROWS
    seats_per_side: int = SEATS_PER_SIDE
    stage_depth: int = STAGE_DEPTH
    podium_width: int = PODIUM_WIDTH
    min_seat_score: int = MIN_SEAT_SCORE
    max_seat_score: int = MAX_SEAT_SCORE
    layout: tuple[str, ...] | None = None
    """Optional ASCII rows overriding the generated layout."""

    def __post_init__(self) -> None:
        if self.min_seat_score > self.max_seat_score:
            raise ValueError("min_seat_score must be <= max_seat_score")
        if self.layout is not None:
            if not self.layout:
                raise ValueError("layout must contain at least one row")
            if len({len(row) for row in self.layout}) != 1:
                raise ValueError("layout rows must all have the same width")
            return
        if self.grid_width < 3 or self.grid_height < 3:
            raise ValueError("grid dimensions must be >= 3")
        if self.chair_rows < 1:
            raise ValueError("chair_rows must be >= 1")
        if self.seats_per_side < 1:
            raise ValueError("seats_per_side must be >= 1")
        if self.stage_depth < 1:
            raise ValueError("stage_depth must be >= 1")
        if not 1 <= self.podium_width <= self.grid_width - 2:
            raise ValueError("podium_width must fit inside the walls")
        if self.hallway_depth < 1:
            raise ValueError("grid_height leaves no room for the entrance hallway")
        center = self.grid_width // 2
        last_offset = 2 * (self.seats_per_side - 1)
        if 2 + last_offset > center - 3 or center + 2 + last_offset > self.grid_width - 3:
            raise ValueError("grid_width too small for seats_per_side")

    @property
    def first_chair_row(self) -> int:
        """Row index of the chair row closest to the stage."""
        return self.stage_depth + 2

    @property
    def hallway_top(self) -> int:
        """First row of the entrance hallway behind the last row aisle."""
        return self.first_chair_row + 2 * self.chair_rows

    @property
    def hallway_depth(self) -> int:
        return self.grid_height - 1 - self.hallway_top


@dataclass(frozen=True)
class GameConfig:
    """Parameters of one game: venue, roster and NPC behaviour."""

    venue: VenueConfig = field(default_factory=VenueConfig)
    agent_count: int = NUM_AGENTS
    user_index: int | None = USER_INDEX
    """Spawn slot and id of the user agent; ``None`` runs a crowd without a user."""
    chair_count: int | None = None
    """Chairs to place; ``None`` gives one seat fewer than agents when a user plays."""
    move_interval: int = MOVE_INTERVAL
    reassign_taken_seats: bool = True
    """Send an NPC whose chair was taken to the nearest open chair instead of waiting."""
    seed: int = 0

    def __post_init__(self) -> None:
        if self.agent_count < 1:
            raise ValueError("agent_count must be >= 1")
        if self.user_index is not None and not 0 <= self.user_index < self.agent_count:
            raise ValueError("user_index must be in [0, agent_count)")
        if self.chair_count is not None and self.chair_count < 1:
            raise ValueError("chair_count must be >= 1")
        if self.move_interval < 1:
            raise ValueError("move_interval must be >= 1")

    def resolved_chair_count(self, capacity: int) -> int:
        """Return how many of ``capacity`` layout chairs this game places."""
        if self.chair_count is not None:
            if self.chair_count > capacity:
                raise ValueError(
                    f"chair_count {self.chair_count} exceeds venue capacity {capacity}"
                )
            return self.chair_count
        wanted = self.agent_count - 1 if self.user_index is not None else self.agent_count
        return max(1, min(capacity, wanted))


@dataclass(frozen=True)
class SweepConfig:
    """Multi-seed headless batch parameters."""

    n_runs: int = 10
    base_seed: int = 0
    max_ticks: int = MAX_TICKS
    game: GameConfig = field(default_factory=GameConfig)
    out_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.n_runs < 1:
            raise ValueError("n_runs must be >= 1")
        if self.max_ticks < 1:
            raise ValueError("max_ticks must be >= 1")
