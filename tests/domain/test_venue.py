"""Tests for seat_chase.domain.venue."""

from __future__ import annotations

import networkx as nx
import pytest

from seat_chase.config.types import VenueConfig
from seat_chase.domain.cells import CellType
from seat_chase.domain.venue import (
    VenueLayoutError,
    build_grid,
    chair_capacity,
    generate_venue,
    parse_layout,
    render_grid,
    seat_score,
    validate_venue,
    walkable_graph,
)


class TestSeatScore:
    def test_worked_examples(self) -> None:
        assert seat_score(5, 15) == 367
        assert seat_score(14, 15) == 127

    def test_front_row_scores_max(self) -> None:
        assert seat_score(0, 15) == 500

    def test_non_increasing_with_row(self) -> None:
        scores = [seat_score(row, 15) for row in range(15)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_custom_bounds(self) -> None:
        assert seat_score(2, 4, min_score=0, max_score=100) == 50

    def test_row_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            seat_score(15, 15)

    def test_total_rows_positive(self) -> None:
        with pytest.raises(ValueError):
            seat_score(0, 0)


class TestGeneratedVenue:
    def test_dimensions(self) -> None:
        grid = generate_venue(VenueConfig())
        assert (grid.width, grid.height) == (30, 15)
        assert len(grid.cells) == 15
        assert all(len(row) == 30 for row in grid.cells)

    def test_outer_walls(self) -> None:
        grid = generate_venue(VenueConfig())
        for x in range(grid.width):
            assert grid.cell_at(x, 0).is_wall
            assert grid.cell_at(x, grid.height - 1).is_wall
        for y in range(grid.height):
            assert grid.cell_at(0, y).is_wall
            assert grid.cell_at(grid.width - 1, y).is_wall

    def test_capacity(self) -> None:
        assert chair_capacity(VenueConfig()) == 48
        assert len(generate_venue(VenueConfig()).positions_of(CellType.CHAIR)) == 48

    def test_chairs_never_side_by_side(self) -> None:
        grid = generate_venue(VenueConfig())
        for x, y in grid.positions_of(CellType.CHAIR):
            assert not grid.cell_at(x + 1, y).is_chair

    def test_single_podium_region(self) -> None:
        grid = generate_venue(VenueConfig())
        podium = grid.positions_of(CellType.PODIUM)
        assert len(podium) == 12
        assert nx.number_connected_components(walkable_graph(grid).subgraph(podium)) == 1

    def test_spawn_queue_two_abreast(self) -> None:
        grid = generate_venue(VenueConfig())
        spawn = grid.spawn_positions()
        assert len(spawn) == 56
        assert spawn[:4] == [(1, 12), (1, 13), (2, 12), (2, 13)]
        assert spawn[24] == (13, 12)

    def test_generated_venue_validates(self) -> None:
        validate_venue(generate_venue(VenueConfig()))


class TestBuildGrid:
    def test_chair_ids_front_to_back(self) -> None:
        grid = build_grid(VenueConfig())
        chairs = grid.chair_positions()
        assert chairs[0] == (2, 4)
        assert chairs[11] == (27, 4)
        assert chairs[12] == (2, 6)
        assert [grid.cell_at(*c).chair_id for c in chairs] == list(range(48))

    def test_chair_scores_follow_rows(self) -> None:
        grid = build_grid(VenueConfig())
        assert grid.cell_at(2, 4).score == seat_score(4, 15)
        assert grid.cell_at(12, 10).score == 233

    def test_truncated_chairs_become_carpet(self) -> None:
        grid = build_grid(VenueConfig(), chair_count=47)
        assert len(grid.chair_positions()) == 47
        last = grid.cell_at(27, 10)
        assert last.cell_type is CellType.CARPET
        assert last.chair_id is None

    def test_layout_override(self) -> None:
        rows = ("#####", "#c.c#", "#hhh#", "#####")
        grid = build_grid(VenueConfig(layout=rows))
        assert grid.chair_positions() == [(1, 1), (3, 1)]
        assert grid.cell_at(1, 1).score == seat_score(1, 4)


class TestParseLayout:
    def test_round_trip(self) -> None:
        rows = ["#####", "#psc#", "#ra.#", "#hh #", "#####"]
        assert render_grid(parse_layout(rows)) == rows

    def test_unknown_symbol(self) -> None:
        with pytest.raises(VenueLayoutError, match="unknown layout symbol"):
            parse_layout(["#z#"])

    def test_ragged_rows(self) -> None:
        with pytest.raises(VenueLayoutError, match="width"):
            parse_layout(["###", "##"])


class TestValidateVenue:
    def test_split_podium_rejected(self) -> None:
        grid = parse_layout(["#####", "#p.p#", "#c..#", "#hhh#", "#####"])
        with pytest.raises(VenueLayoutError, match="podium"):
            validate_venue(grid)

    def test_walled_in_chair_rejected(self) -> None:
        grid = parse_layout(["#####", "#c#.#", "###.#", "#hhh#", "#####"])
        with pytest.raises(VenueLayoutError, match="unreachable"):
            validate_venue(grid)

    def test_chair_behind_other_chair_rejected(self) -> None:
        grid = parse_layout(["#####", "#c###", "#c###", "#hhh#", "#####"])
        with pytest.raises(VenueLayoutError, match="unreachable"):
            validate_venue(grid)

    def test_generated_venue_requires_podium(self) -> None:
        grid = generate_venue(VenueConfig())
        for x, y in grid.positions_of(CellType.PODIUM):
            grid.cell_at(x, y).cell_type = CellType.CARPET
        validate_venue(grid)
        with pytest.raises(VenueLayoutError, match="no podium"):
            validate_venue(grid, require_podium=True)

    def test_layout_may_omit_podium(self) -> None:
        rows = ("#####", "#c.c#", "#hhh#", "#####")
        grid = build_grid(VenueConfig(layout=rows))
        assert grid.positions_of(CellType.PODIUM) == []

    def test_missing_hallway_rejected(self) -> None:
        grid = parse_layout(["####", "#c.#", "####"])
        with pytest.raises(VenueLayoutError, match="hallway"):
            validate_venue(grid)

    def test_layout_error_is_value_error(self) -> None:
        assert issubclass(VenueLayoutError, ValueError)
