"""I/O layer: Arrow schemas for experiment artifacts."""

from seat_chase.io.schemas import SWEEP_RUNS_SCHEMA, SWEEP_SCHEMA_VERSION

__all__ = ["SWEEP_RUNS_SCHEMA", "SWEEP_SCHEMA_VERSION"]
