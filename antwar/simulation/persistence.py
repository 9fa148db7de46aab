"""Parquet persistence helpers for destruction log streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from antwar.io.schemas import DESTRUCTION_LOG_SCHEMA


def new_event_columns() -> dict[str, list]:
    """Empty column buffers matching ``DESTRUCTION_LOG_SCHEMA``."""
    return {name: [] for name in DESTRUCTION_LOG_SCHEMA.names}


def flush_event_columns(
    event_columns: dict[str, list],
    destruction_log_path: Path,
    event_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated destruction rows to Parquet and clear in-memory buffers."""
    if not event_columns["run_id"]:
        return event_writer
    event_table = pa.Table.from_pydict(event_columns, schema=DESTRUCTION_LOG_SCHEMA)
    if event_writer is None:
        event_writer = pq.ParquetWriter(destruction_log_path, DESTRUCTION_LOG_SCHEMA)
    event_writer.write_table(event_table)
    for values in event_columns.values():
        values.clear()
    return event_writer
