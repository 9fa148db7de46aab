"""Centralized constants for colony simulations.

Defaults shared by the engine, the batch runner, the CLI and the benchmark
script live here. Consuming modules should import from this module rather
than defining their own inline literals.
"""

from __future__ import annotations

MAX_TICKS = 100_000
"""Default safety cap on simulation ticks."""

MAX_MOVES_PER_ANT = 10_000
"""Per-ant move budget used by the benchmark and available via --max-moves."""

DEFAULT_WORKERS = 1
"""Default size of the move-phase worker pool (1 = serial)."""

CARDINAL_DIRECTIONS: tuple[str, ...] = ("north", "south", "east", "west")
"""Direction labels written first, in this order, when rendering a map."""

FLUSH_THRESHOLD = 8_192
"""Flush destruction log rows to Parquet once this in-memory row count is reached."""

BENCHMARK_ANT_COUNTS: tuple[int, ...] = (3, 6, 9)
"""Ant counts timed by scripts/benchmark.py."""
