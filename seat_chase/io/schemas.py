"""Parquet schema definitions for sweep artifacts.

Game state itself is never persisted; only per-run sweep summaries are.
"""

from __future__ import annotations

import pyarrow as pa

SWEEP_SCHEMA_VERSION = 1

SWEEP_RUNS_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("seed", pa.int64()),
        ("ended", pa.bool_()),
        ("end_reason", pa.string()),
        ("ticks", pa.int64()),
        ("seated_count", pa.int64()),
        ("agent_count", pa.int64()),
        ("user_seated", pa.bool_()),
        ("user_score", pa.int64()),
    ]
)
