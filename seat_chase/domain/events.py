"""Game events and a small queue-then-drain event bus.

Events are plain frozen dataclasses. ``emit()`` only appends; the controller
drains the bus once after every applied move batch, so handlers never observe
a half-applied batch. Handlers may emit further events, which are processed
in the same drain pass.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from seat_chase.domain.cells import Position


@dataclass(frozen=True)
class GameStartedEvent:
    """A fresh world was built (start or restart)."""

    agent_count: int
    chair_count: int


@dataclass(frozen=True)
class SeatedEvent:
    """An agent landed on a chair and is seated for the rest of the game."""

    agent_id: int
    position: Position
    score: int | None
    tick: int
    is_user: bool = False


@dataclass(frozen=True)
class GameEndedEvent:
    """The game transitioned to ``GamePhase.ENDED``."""

    tick: int
    reason: str
    seated_count: int


_MAX_DRAIN_PASSES = 1000


class EventBus:
    """Fire-and-forget event bus keyed by event class name."""

    def __init__(self) -> None:
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable[[Any], None]]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    def emit(self, event: Any) -> None:
        """Queue an event for processing on the next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str | type, handler: Callable[[Any], None]) -> None:
        """Register ``handler`` for events of ``event_type`` (class or class name)."""
        name = event_type if isinstance(event_type, str) else event_type.__name__
        self._subs[name].append(handler)

    def drain(self) -> int:
        """Process all queued events in FIFO order; return the number processed.

        A handler error propagates after the rest of its batch is put back on
        the queue, so a later ``drain()`` still delivers those events.
        """
        processed = 0
        passes = 0
        while self._queue and passes < _MAX_DRAIN_PASSES:
            batch = self._queue[:]
            self._queue.clear()
            for i, event in enumerate(batch):
                name = type(event).__name__
                self._stats[name] += 1
                try:
                    for handler in self._subs.get(name, []):
                        handler(event)
                except Exception:
                    # Undelivered events stay queued ahead of anything emitted since.
                    self._queue[:0] = batch[i + 1 :]
                    raise
            processed += len(batch)
            passes += 1
        return processed

    def clear(self) -> None:
        """Discard all pending events."""
        self._queue.clear()

    def stats(self) -> dict[str, int]:
        """Cumulative event counts by type."""
        return dict(self._stats)

    def pending_count(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
