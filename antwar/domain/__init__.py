"""Domain layer: colony graph, ant roster, events, errors and termination filters."""

from antwar.domain.colony_graph import ColonyGraph, Exit
from antwar.domain.errors import InvalidConfiguration, MapParseError, UnknownColony
from antwar.domain.events import DestructionEvent
from antwar.domain.filters import CycleDetector, TerminationReason
from antwar.domain.roster import AntRoster

__all__ = [
    "AntRoster",
    "ColonyGraph",
    "CycleDetector",
    "DestructionEvent",
    "Exit",
    "InvalidConfiguration",
    "MapParseError",
    "TerminationReason",
    "UnknownColony",
]
