#!/usr/bin/env python3
"""Wall-clock benchmark of full simulations.

Times complete runs on the two-colony map (``A north=B``, ``B south=A``) for
a few ant counts, or on any map given with ``--map``. Ants share starting
colonies and each ant may move at most MAX_MOVES_PER_ANT times.

Usage:
    uv run python scripts/benchmark.py --repeats 50
    uv run python scripts/benchmark.py --map maps/large.txt --ant-counts 100,1000 \\
        --workers 4 --out-file data/benchmark.parquet
"""

from __future__ import annotations

import argparse
import logging
import statistics
import time
from collections.abc import Sequence
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from antwar.config.constants import BENCHMARK_ANT_COUNTS, MAX_MOVES_PER_ANT
from antwar.config.types import PlacementPolicy, SimulationConfig
from antwar.domain.colony_graph import ColonyGraph
from antwar.io.map_parser import load_map, parse_map
from antwar.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)

TWO_COLONY_MAP = ("A north=B", "B south=A")

BENCHMARK_SCHEMA = pa.schema(
    [
        ("n_ants", pa.int64()),
        ("workers", pa.int64()),
        ("repeats", pa.int64()),
        ("mean_seconds", pa.float64()),
        ("best_seconds", pa.float64()),
        ("mean_ticks", pa.float64()),
    ]
)


def _parse_ant_counts(raw: str) -> tuple[int, ...]:
    counts = tuple(int(part) for part in raw.split(",") if part.strip())
    if not counts or any(count < 1 for count in counts):
        raise ValueError("ant-counts must be positive integers")
    return counts


def run_benchmark(
    ant_counts: Sequence[int] = BENCHMARK_ANT_COUNTS,
    repeats: int = 10,
    workers: int = 1,
    graph: ColonyGraph | None = None,
) -> list[dict[str, int | float]]:
    """Time ``repeats`` full runs per ant count and return one row per count."""
    if repeats < 1:
        raise ValueError("repeats must be >= 1")
    base_graph = graph if graph is not None else parse_map(TWO_COLONY_MAP)
    rows: list[dict[str, int | float]] = []
    for n_ants in ant_counts:
        durations: list[float] = []
        ticks: list[int] = []
        for seed in range(repeats):
            config = SimulationConfig(
                n_ants=n_ants,
                seed=seed,
                max_moves_per_ant=MAX_MOVES_PER_ANT,
                workers=workers,
                placement=PlacementPolicy.SHARED,
            )
            run_graph = base_graph.copy()
            started = time.perf_counter()
            with SimulationEngine(run_graph, config) as engine:
                result = engine.run()
            durations.append(time.perf_counter() - started)
            ticks.append(result.ticks)
        row = {
            "n_ants": n_ants,
            "workers": workers,
            "repeats": repeats,
            "mean_seconds": statistics.fmean(durations),
            "best_seconds": min(durations),
            "mean_ticks": statistics.fmean(ticks),
        }
        logger.info("simulation/%d_ants: mean %.6fs", n_ants, row["mean_seconds"])
        rows.append(row)
    return rows


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Benchmark full colony simulations")
    p.add_argument("--map", type=Path, default=None, help="map file (default: two colonies)")
    p.add_argument(
        "--ant-counts",
        type=str,
        default=",".join(str(count) for count in BENCHMARK_ANT_COUNTS),
    )
    p.add_argument("--repeats", type=int, default=10)
    p.add_argument("--workers", type=int, default=1)
    p.add_argument("--out-file", type=Path, default=None, help="optional Parquet output")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = parse_args(argv)
    graph = load_map(args.map) if args.map is not None else None
    rows = run_benchmark(
        ant_counts=_parse_ant_counts(args.ant_counts),
        repeats=args.repeats,
        workers=args.workers,
        graph=graph,
    )
    for row in rows:
        print(
            f"simulation/{row['n_ants']}_ants  "
            f"mean {row['mean_seconds'] * 1e6:10.1f} us  "
            f"best {row['best_seconds'] * 1e6:10.1f} us  "
            f"ticks {row['mean_ticks']:.1f}"
        )
    if args.out_file is not None:
        args.out_file.parent.mkdir(parents=True, exist_ok=True)
        pq.write_table(pa.Table.from_pylist(rows, schema=BENCHMARK_SCHEMA), args.out_file)
        logger.info("wrote %s", args.out_file)


if __name__ == "__main__":
    main()
