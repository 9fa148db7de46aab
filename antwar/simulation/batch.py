"""Seeded batch runs over one map with Parquet persistence."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from antwar.config.constants import FLUSH_THRESHOLD
from antwar.config.types import RunSummary, SimulationConfig
from antwar.domain.colony_graph import ColonyGraph
from antwar.domain.errors import InvalidConfiguration
from antwar.io.paths import (
    destruction_log_path,
    logs_dir,
    maps_dir,
    remaining_map_path,
    run_summary_path,
)
from antwar.io.report import format_map
from antwar.io.schemas import (
    DESTRUCTION_LOG_SCHEMA,
    RUN_SUMMARY_SCHEMA,
    RUN_SUMMARY_SCHEMA_VERSION,
)
from antwar.simulation.engine import SimulationEngine
from antwar.simulation.persistence import flush_event_columns, new_event_columns

logger = logging.getLogger(__name__)


def deterministic_run_id(seed: int) -> str:
    """Build a run ID that is stable across invocations for identical seeds."""
    return f"run_s{seed}"


def run_batch(
    graph: ColonyGraph,
    n_runs: int,
    out_dir: Path,
    base_seed: int = 0,
    config: SimulationConfig | None = None,
) -> list[RunSummary]:
    """Run ``n_runs`` seeded simulations on copies of ``graph`` and persist logs.

    Run ``i`` uses seed ``base_seed + i``; ``config.seed`` is ignored. The
    input graph is never mutated.
    """
    if n_runs < 1:
        raise InvalidConfiguration("n_runs must be >= 1")
    sim_config = config or SimulationConfig()

    out_dir = Path(out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    maps_dir(out_dir).mkdir(parents=True, exist_ok=True)
    events_path = destruction_log_path(out_dir)

    event_writer: pq.ParquetWriter | None = None
    event_columns = new_event_columns()
    summaries: list[RunSummary] = []
    summary_rows: list[dict[str, int | str | float]] = []

    try:
        for i in range(n_runs):
            seed = base_seed + i
            run_id = deterministic_run_id(seed)
            started = time.perf_counter()
            with SimulationEngine(graph.copy(), sim_config.with_seed(seed)) as engine:
                result = engine.run()
            elapsed = time.perf_counter() - started

            for event in result.events:
                event_columns["run_id"].append(run_id)
                event_columns["seed"].append(seed)
                event_columns["tick"].append(event.tick)
                event_columns["colony"].append(event.colony)
                event_columns["agent_ids"].append(list(event.agent_ids))
                event_columns["n_agents"].append(len(event.agent_ids))
            if len(event_columns["run_id"]) >= FLUSH_THRESHOLD:
                event_writer = flush_event_columns(event_columns, events_path, event_writer)

            remaining_map_path(out_dir, run_id).write_text(
                format_map(result.remaining_map) + "\n", encoding="utf-8"
            )

            summary = RunSummary(
                run_id=run_id,
                seed=seed,
                ticks=result.ticks,
                n_events=len(result.events),
                surviving_agents=len(result.surviving_agents),
                surviving_colonies=len(result.remaining_map),
                termination_reason=result.termination_reason or "",
                elapsed_seconds=elapsed,
            )
            summaries.append(summary)
            summary_rows.append(
                {
                    "schema_version": RUN_SUMMARY_SCHEMA_VERSION,
                    "run_id": run_id,
                    "seed": seed,
                    "n_ants": sim_config.n_ants,
                    "ticks": summary.ticks,
                    "n_events": summary.n_events,
                    "surviving_agents": summary.surviving_agents,
                    "surviving_colonies": summary.surviving_colonies,
                    "termination_reason": summary.termination_reason,
                    "elapsed_seconds": summary.elapsed_seconds,
                }
            )
            logger.info(
                "%s: %d ticks, %d colonies destroyed, %s",
                run_id,
                summary.ticks,
                summary.n_events,
                summary.termination_reason,
            )

        event_writer = flush_event_columns(event_columns, events_path, event_writer)
        if event_writer is None:
            # No run destroyed anything; still leave a readable, empty log
            pq.write_table(
                pa.Table.from_pydict(new_event_columns(), schema=DESTRUCTION_LOG_SCHEMA),
                events_path,
            )
    finally:
        if event_writer is not None:
            event_writer.close()

    pq.write_table(
        pa.Table.from_pylist(summary_rows, schema=RUN_SUMMARY_SCHEMA),
        run_summary_path(out_dir),
    )
    return summaries
