"""Headless multi-seed sweeps: how quickly does the crowd find its seats?"""

from __future__ import annotations

import logging
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from seat_chase.config.types import GameResult, SweepConfig
from seat_chase.io.schemas import SWEEP_RUNS_SCHEMA, SWEEP_SCHEMA_VERSION
from seat_chase.simulation.controller import GameController

logger = logging.getLogger(__name__)

RUNS_FILENAME = "sweep_runs.parquet"


def run_sweep(config: SweepConfig) -> list[GameResult]:
    """Play ``config.n_runs`` user-idle games with consecutive seeds."""
    results: list[GameResult] = []
    for i in range(config.n_runs):
        seed = config.base_seed + i
        controller = GameController(replace(config.game, seed=seed))
        result = controller.run_until_ended(max_ticks=config.max_ticks)
        logger.debug("seed %d: %s after %d ticks", seed, result.end_reason, result.ticks)
        results.append(result)

    if config.out_dir is not None:
        write_sweep_runs(results, Path(config.out_dir))
    return results


def write_sweep_runs(results: list[GameResult], out_dir: Path) -> Path:
    """Persist one row per run to ``out_dir/sweep_runs.parquet``."""
    out_dir.mkdir(parents=True, exist_ok=True)
    rows = [{"schema_version": SWEEP_SCHEMA_VERSION, **asdict(result)} for result in results]
    path = out_dir / RUNS_FILENAME
    pq.write_table(pa.Table.from_pylist(rows, schema=SWEEP_RUNS_SCHEMA), path)
    return path


def summarize_sweep(results: list[GameResult]) -> dict[str, Any]:
    """Aggregate end rate and tick statistics over ended runs."""
    ended = [r for r in results if r.ended]
    summary: dict[str, Any] = {
        "runs": len(results),
        "ended": len(ended),
        "end_rate": len(ended) / len(results) if results else 0.0,
        "all_seated": sum(1 for r in results if r.end_reason == "all_seated"),
        "venue_full": sum(1 for r in results if r.end_reason == "venue_full"),
        "ticks_mean": None,
        "ticks_median": None,
        "ticks_p90": None,
        "ticks_max": None,
    }
    if ended:
        ticks = np.array([r.ticks for r in ended], dtype=np.float64)
        summary["ticks_mean"] = float(np.mean(ticks))
        summary["ticks_median"] = float(np.median(ticks))
        summary["ticks_p90"] = float(np.percentile(ticks, 90))
        summary["ticks_max"] = int(np.max(ticks))
    return summary
