"""Experiments layer: headless multi-seed sweeps."""

from seat_chase.experiments.sweep import run_sweep, summarize_sweep, write_sweep_runs

__all__ = [
    "run_sweep",
    "summarize_sweep",
    "write_sweep_runs",
]
