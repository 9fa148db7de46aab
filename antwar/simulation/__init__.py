"""Simulation layer: tick engine, batch runs and Parquet persistence."""

from antwar.simulation.batch import deterministic_run_id, run_batch
from antwar.simulation.engine import EngineState, SimulationEngine, simulate
from antwar.simulation.persistence import flush_event_columns

__all__ = [
    "EngineState",
    "SimulationEngine",
    "deterministic_run_id",
    "flush_event_columns",
    "run_batch",
    "simulate",
]
