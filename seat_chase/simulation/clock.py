"""Logical clock driving discrete simulation ticks, decoupled from wall time."""

from __future__ import annotations


class LogicalClock:
    """Monotonic tick counter; tick 0 is the moment the game starts."""

    def __init__(self) -> None:
        self._now = 0

    @property
    def now(self) -> int:
        return self._now

    def advance(self) -> int:
        """Move to the next tick and return it."""
        self._now += 1
        return self._now

    def reset(self) -> None:
        self._now = 0

    def __repr__(self) -> str:
        return f"LogicalClock(now={self._now})"
