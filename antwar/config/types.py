"""Configuration dataclasses and result containers for simulation runs.

All frozen dataclasses that parameterise single runs and batch runs live
here, together with the result records they produce.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from antwar.config.constants import MAX_TICKS
from antwar.domain.errors import InvalidConfiguration
from antwar.domain.events import DestructionEvent

__all__ = [
    "PlacementPolicy",
    "RunSummary",
    "SimulationConfig",
    "SimulationResult",
]

# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationResult:
    """Final state of one simulation run."""

    ticks: int
    events: tuple[DestructionEvent, ...]
    termination_reason: str | None
    surviving_agents: dict[int, str] = field(default_factory=dict)
    remaining_map: dict[str, dict[str, str]] = field(default_factory=dict)


@dataclass(frozen=True)
class RunSummary:
    """One row of a batch run summary."""

    run_id: str
    seed: int
    ticks: int
    n_events: int
    surviving_agents: int
    surviving_colonies: int
    termination_reason: str
    elapsed_seconds: float


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


class PlacementPolicy(Enum):
    """How ants are assigned starting colonies."""

    DISTINCT = "distinct"
    SHARED = "shared"


@dataclass(frozen=True)
class SimulationConfig:
    """Runtime knobs for one simulation."""

    n_ants: int = 1
    seed: int | None = None
    max_ticks: int | None = MAX_TICKS
    max_moves_per_ant: int | None = None
    workers: int = 1
    placement: PlacementPolicy = PlacementPolicy.DISTINCT
    detect_cycles: bool = True
    head_on_collisions: bool = True

    def __post_init__(self) -> None:
        if self.n_ants < 1:
            raise InvalidConfiguration("n_ants must be >= 1")
        if self.max_ticks is not None and self.max_ticks < 1:
            raise InvalidConfiguration("max_ticks must be >= 1")
        if self.max_moves_per_ant is not None and self.max_moves_per_ant < 1:
            raise InvalidConfiguration("max_moves_per_ant must be >= 1")
        if self.workers < 1:
            raise InvalidConfiguration("workers must be >= 1")
        if not isinstance(self.placement, PlacementPolicy):
            raise InvalidConfiguration("placement must be a PlacementPolicy")

    def with_seed(self, seed: int | None) -> SimulationConfig:
        """Return a copy of this config using ``seed``."""
        return replace(self, seed=seed)
