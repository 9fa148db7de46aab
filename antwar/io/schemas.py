"""Parquet schema definitions for simulation artifacts.

All Arrow schemas used for persisting destruction logs and run summaries are
centralised here so that every module works against the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

RUN_SUMMARY_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Batch run schemas
# ---------------------------------------------------------------------------

DESTRUCTION_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("seed", pa.int64()),
        ("tick", pa.int64()),
        ("colony", pa.string()),
        ("agent_ids", pa.list_(pa.int64())),
        ("n_agents", pa.int64()),
    ]
)

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("run_id", pa.string()),
        ("seed", pa.int64()),
        ("n_ants", pa.int64()),
        ("ticks", pa.int64()),
        ("n_events", pa.int64()),
        ("surviving_agents", pa.int64()),
        ("surviving_colonies", pa.int64()),
        ("termination_reason", pa.string()),
        ("elapsed_seconds", pa.float64()),
    ]
)
