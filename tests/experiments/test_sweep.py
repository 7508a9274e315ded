from pathlib import Path

import pyarrow.parquet as pq
import pytest
from helpers import ADJACENT_SEATS_LAYOUT, layout_config

from seat_chase.config.types import GameResult, SweepConfig
from seat_chase.experiments.sweep import RUNS_FILENAME, run_sweep, summarize_sweep
from seat_chase.io.schemas import SWEEP_SCHEMA_VERSION


def _result(seed: int, ticks: int, ended: bool = True, reason: str | None = "all_seated") -> GameResult:
    return GameResult(
        seed=seed,
        ended=ended,
        end_reason=reason if ended else None,
        ticks=ticks,
        seated_count=2,
        agent_count=2,
        user_seated=False,
        user_score=None,
    )


def test_run_sweep_uses_consecutive_seeds() -> None:
    config = SweepConfig(
        n_runs=3,
        base_seed=10,
        max_ticks=500,
        game=layout_config(ADJACENT_SEATS_LAYOUT, agent_count=2),
    )
    results = run_sweep(config)
    assert [r.seed for r in results] == [10, 11, 12]
    assert all(r.end_reason == "all_seated" for r in results)


def test_run_sweep_writes_parquet(tmp_path: Path) -> None:
    config = SweepConfig(
        n_runs=2,
        max_ticks=500,
        game=layout_config(ADJACENT_SEATS_LAYOUT, agent_count=2),
        out_dir=tmp_path / "sweep",
    )
    run_sweep(config)

    table = pq.read_table(tmp_path / "sweep" / RUNS_FILENAME)
    assert table.num_rows == 2
    expected = {
        "schema_version",
        "seed",
        "ended",
        "end_reason",
        "ticks",
        "seated_count",
        "agent_count",
        "user_seated",
        "user_score",
    }
    assert expected == set(table.column_names)
    assert table.column("schema_version").to_pylist() == [SWEEP_SCHEMA_VERSION] * 2
    assert table.column("user_score").to_pylist() == [None, None]


def test_summarize_sweep_tick_stats() -> None:
    results = [_result(0, 10), _result(1, 20), _result(2, 30, reason="venue_full")]
    summary = summarize_sweep(results)
    assert summary["runs"] == 3
    assert summary["end_rate"] == 1.0
    assert summary["all_seated"] == 2
    assert summary["venue_full"] == 1
    assert summary["ticks_mean"] == pytest.approx(20.0)
    assert summary["ticks_median"] == pytest.approx(20.0)
    assert summary["ticks_p90"] == pytest.approx(28.0)
    assert summary["ticks_max"] == 30


def test_summarize_sweep_ignores_unfinished_runs() -> None:
    summary = summarize_sweep([_result(0, 12), _result(1, 500, ended=False)])
    assert summary["ended"] == 1
    assert summary["end_rate"] == 0.5
    assert summary["ticks_max"] == 12


def test_summarize_sweep_nothing_ended() -> None:
    summary = summarize_sweep([_result(0, 500, ended=False)])
    assert summary["end_rate"] == 0.0
    assert summary["ticks_mean"] is None
    assert summary["ticks_p90"] is None
