"""Human-readable rendering of destruction events and surviving maps."""

from __future__ import annotations

from collections.abc import Mapping

from antwar.config.constants import CARDINAL_DIRECTIONS
from antwar.config.types import SimulationResult
from antwar.domain.colony_graph import ColonyGraph
from antwar.domain.events import DestructionEvent


def _join_ants(agent_ids: tuple[int, ...]) -> str:
    names = [f"ant {ant_id}" for ant_id in agent_ids]
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} and {names[-1]}"


def format_destruction(event: DestructionEvent) -> str:
    """``"Fizz has been destroyed by ant 0 and ant 1!"``"""
    return f"{event.colony} has been destroyed by {_join_ants(event.agent_ids)}!"


def _ordered_directions(exits: Mapping[str, str]) -> list[str]:
    """Cardinal directions first in north/south/east/west order, then the rest sorted."""
    cardinal = [d for d in CARDINAL_DIRECTIONS if d in exits]
    others = sorted(d for d in exits if d not in CARDINAL_DIRECTIONS)
    return cardinal + others


def format_colony(name: str, exits: Mapping[str, str]) -> str:
    """Render one colony as a map-file line."""
    parts = [name] + [f"{d}={exits[d]}" for d in _ordered_directions(exits)]
    return " ".join(parts)


def format_map(graph: ColonyGraph | Mapping[str, Mapping[str, str]]) -> str:
    """Render surviving colonies in map-file format, one line per colony."""
    layout = graph.to_dict() if isinstance(graph, ColonyGraph) else graph
    return "\n".join(format_colony(name, exits) for name, exits in layout.items())


def format_summary(result: SimulationResult, elapsed_seconds: float | None = None) -> str:
    """One-line closing summary of a run."""
    reason = result.termination_reason or "running"
    head = "Simulation completed"
    if elapsed_seconds is not None:
        head += f" in {elapsed_seconds:.6f}s"
    return (
        f"{head} after {result.ticks} ticks ({reason}): "
        f"{len(result.events)} colonies destroyed, "
        f"{len(result.surviving_agents)} ants and {len(result.remaining_map)} colonies left"
    )
