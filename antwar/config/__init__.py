"""Configuration layer: constants and typed config dataclasses."""

from antwar.config.constants import (
    BENCHMARK_ANT_COUNTS,
    CARDINAL_DIRECTIONS,
    DEFAULT_WORKERS,
    FLUSH_THRESHOLD,
    MAX_MOVES_PER_ANT,
    MAX_TICKS,
)
from antwar.config.types import (
    PlacementPolicy,
    RunSummary,
    SimulationConfig,
    SimulationResult,
)

__all__ = [
    "BENCHMARK_ANT_COUNTS",
    "CARDINAL_DIRECTIONS",
    "DEFAULT_WORKERS",
    "FLUSH_THRESHOLD",
    "MAX_MOVES_PER_ANT",
    "MAX_TICKS",
    "PlacementPolicy",
    "RunSummary",
    "SimulationConfig",
    "SimulationResult",
]
