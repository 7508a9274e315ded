"""Tests for seat_chase.config constants and dataclasses."""

from __future__ import annotations

from pathlib import Path

import pytest

from seat_chase.config.constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_SEAT_SCORE,
    MIN_SEAT_SCORE,
    NUM_AGENTS,
    USER_INDEX,
)
from seat_chase.config.types import GameConfig, SweepConfig, VenueConfig


def test_default_grid_is_fifteen_by_thirty() -> None:
    assert (GRID_HEIGHT, GRID_WIDTH) == (15, 30)


def test_user_index_within_roster() -> None:
    assert 0 <= USER_INDEX < NUM_AGENTS


def test_seat_score_bounds_ordered() -> None:
    assert MIN_SEAT_SCORE < MAX_SEAT_SCORE


class TestVenueConfig:
    def test_default_row_plan(self) -> None:
        cfg = VenueConfig()
        assert cfg.first_chair_row == 4
        assert cfg.hallway_top == 12
        assert cfg.hallway_depth == 2

    def test_too_short_for_hallway(self) -> None:
        with pytest.raises(ValueError, match="hallway"):
            VenueConfig(grid_height=12)

    def test_too_narrow_for_seats(self) -> None:
        with pytest.raises(ValueError, match="seats_per_side"):
            VenueConfig(seats_per_side=7)

    def test_score_bounds_validated(self) -> None:
        with pytest.raises(ValueError, match="min_seat_score"):
            VenueConfig(min_seat_score=600)

    def test_layout_rows_must_match(self) -> None:
        with pytest.raises(ValueError, match="same width"):
            VenueConfig(layout=("###", "##"))

    def test_layout_skips_generator_checks(self) -> None:
        cfg = VenueConfig(grid_height=3, layout=("#c#", "#h#", "###"))
        assert cfg.layout is not None


class TestGameConfig:
    def test_user_index_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="user_index"):
            GameConfig(agent_count=4, user_index=4)

    def test_move_interval_positive(self) -> None:
        with pytest.raises(ValueError, match="move_interval"):
            GameConfig(move_interval=0)

    def test_default_chairs_one_fewer_than_agents(self) -> None:
        assert GameConfig().resolved_chair_count(48) == 47

    def test_default_chairs_without_user(self) -> None:
        assert GameConfig(user_index=None).resolved_chair_count(48) == 48

    def test_default_chairs_capped_by_capacity(self) -> None:
        assert GameConfig(agent_count=10, user_index=None).resolved_chair_count(4) == 4

    def test_explicit_chairs_over_capacity(self) -> None:
        with pytest.raises(ValueError, match="capacity"):
            GameConfig(chair_count=49).resolved_chair_count(48)


class TestSweepConfig:
    def test_runs_positive(self) -> None:
        with pytest.raises(ValueError, match="n_runs"):
            SweepConfig(n_runs=0)

    def test_out_dir_optional(self, tmp_path: Path) -> None:
        assert SweepConfig(out_dir=tmp_path).out_dir == tmp_path
