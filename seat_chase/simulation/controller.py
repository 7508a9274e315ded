"""Single owner of one game: world state, clock, termination and subscribers.

All mutation funnels through this controller on one thread. NPC batches run
on ``tick()``; user input is applied immediately by ``request_user_move()``
through the same ``WorldState.apply_moves`` path, so the occupancy index is
never read half-updated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from random import Random

from seat_chase.config.constants import MAX_TICKS
from seat_chase.config.types import EndReason, GameConfig, GamePhase, GameResult
from seat_chase.domain.cells import Direction
from seat_chase.domain.events import EventBus, GameEndedEvent, GameStartedEvent, SeatedEvent
from seat_chase.domain.movement import MovementResolver
from seat_chase.domain.snapshot import WorldSnapshot
from seat_chase.domain.world import WorldState
from seat_chase.simulation.clock import LogicalClock

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[WorldSnapshot], None]


class GameController:
    """Runs the ``NOT_STARTED -> RUNNING -> ENDED`` lifecycle of one game."""

    def __init__(self, config: GameConfig | None = None, rng: Random | None = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else Random(self.config.seed)
        self.events = EventBus()
        self.events.subscribe(SeatedEvent, self._on_seated)
        self.clock = LogicalClock()
        self.resolver = MovementResolver(
            self.rng,
            move_interval=self.config.move_interval,
            reassign_taken_seats=self.config.reassign_taken_seats,
        )
        self.phase = GamePhase.NOT_STARTED
        self.end_reason: EndReason | None = None
        self.user_moves = 0
        self.user_score: int | None = None
        self._world: WorldState | None = None
        self._listeners: list[SnapshotListener] = []

    @property
    def world(self) -> WorldState:
        if self._world is None:
            raise RuntimeError("game has not been started")
        return self._world

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_game(self) -> WorldSnapshot:
        """Build a fresh world and enter ``RUNNING``."""
        self.events.clear()
        self.clock.reset()
        self._world = WorldState.create(self.config, bus=self.events)
        self.phase = GamePhase.RUNNING
        self.end_reason = None
        self.user_moves = 0
        self.user_score = None
        chair_count = len(self._world.grid.chair_positions())
        logger.info(
            "game started: %d agents, %d chairs", len(self._world.agents), chair_count
        )
        self.events.emit(
            GameStartedEvent(agent_count=len(self._world.agents), chair_count=chair_count)
        )
        return self._publish()

    def restart_game(self, seed: int | None = None) -> WorldSnapshot:
        """Discard all state and start over, optionally reseeding the random source."""
        if seed is not None:
            self.config = replace(self.config, seed=seed)
            self.rng.seed(seed)
        return self.start_game()

    def tick(self) -> int:
        """Advance one tick: plan every due NPC, apply the batch, check the end.

        Returns the number of moves applied. Does nothing unless ``RUNNING``.
        """
        if self.phase is not GamePhase.RUNNING:
            return 0
        world = self.world
        now = self.clock.advance()
        self.resolver.retarget_taken_seats(world)
        moves = self.resolver.plan_tick(world, now)
        applied = world.apply_moves(moves, tick=now)
        self._check_end()
        self._publish()
        return sum(applied)

    def request_user_move(self, direction: Direction | str) -> bool:
        """Apply one user step right away; ``False`` when ignored or illegal."""
        if self.phase is not GamePhase.RUNNING:
            return False
        move = self.resolver.plan_user_move(self.world, Direction(direction))
        if move is None:
            return False
        applied = self.world.apply_moves([move], tick=self.clock.now)[0]
        if applied:
            self.user_moves += 1
            self._check_end()
            self._publish()
        return applied

    def run_until_ended(self, max_ticks: int = MAX_TICKS) -> GameResult:
        """Tick until the game ends or ``max_ticks`` is reached."""
        if self.phase is GamePhase.NOT_STARTED:
            self.start_game()
        while self.phase is GamePhase.RUNNING and self.clock.now < max_ticks:
            self.tick()
        if self.phase is not GamePhase.ENDED:
            logger.warning(
                "game still running after %d ticks (%d/%d seated)",
                self.clock.now,
                self.world.seated_count,
                len(self.world.agents),
            )
        return self.result()

    def _check_end(self) -> None:
        """Fire the ``ENDED`` transition at most once, after a whole batch."""
        if self.phase is not GamePhase.RUNNING:
            return
        world = self.world
        if world.all_seated():
            reason = EndReason.ALL_SEATED
        # With every chair taken nobody left standing can ever sit, so waiting is pointless.
        elif not world.open_chairs():
            reason = EndReason.VENUE_FULL
        else:
            return
        self.phase = GamePhase.ENDED
        self.end_reason = reason
        logger.info(
            "game ended at tick %d: %s (%d/%d seated)",
            self.clock.now,
            reason.value,
            world.seated_count,
            len(world.agents),
        )
        self.events.emit(
            GameEndedEvent(tick=self.clock.now, reason=reason.value, seated_count=world.seated_count)
        )

    def _on_seated(self, event: SeatedEvent) -> None:
        if event.is_user:
            self.user_score = event.score
            logger.info("user seated at %s for %s points", event.position, event.score)

    # ------------------------------------------------------------------
    # Presentation interface
    # ------------------------------------------------------------------

    def subscribe(self, listener: SnapshotListener) -> None:
        """Receive a snapshot after every applied batch or user move."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        self._listeners.remove(listener)

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot.capture(
            self.world,
            tick=self.clock.now,
            user_moves=self.user_moves,
            user_score=self.user_score,
            phase=self.phase.value,
            end_reason=None if self.end_reason is None else self.end_reason.value,
        )

    def _publish(self) -> WorldSnapshot:
        self.events.drain()
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)
        return snap

    def result(self) -> GameResult:
        world = self.world
        user = world.user
        return GameResult(
            seed=self.config.seed,
            ended=self.phase is GamePhase.ENDED,
            end_reason=None if self.end_reason is None else self.end_reason.value,
            ticks=self.clock.now,
            seated_count=world.seated_count,
            agent_count=len(world.agents),
            user_seated=bool(user is not None and user.seated),
            user_score=self.user_score,
        )
