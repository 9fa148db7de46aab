"""Tick engine: seeded ant movement, collision detection and colony destruction.

Every tick is a scatter/gather pass. Exit choices are computed against a graph
that stays read-only for the whole move phase, optionally on a thread pool.
Moves and destructions are then applied by the engine thread alone, so a run
depends only on its random sequence and never on thread scheduling.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from random import Random
from types import TracebackType

from antwar.config.types import PlacementPolicy, SimulationConfig, SimulationResult
from antwar.domain.colony_graph import ColonyGraph
from antwar.domain.errors import InvalidConfiguration, UnknownColony
from antwar.domain.events import DestructionEvent
from antwar.domain.filters import CycleDetector, TerminationReason
from antwar.domain.roster import AntRoster

logger = logging.getLogger(__name__)

DestructionCallback = Callable[[DestructionEvent], None]

PlannedMove = tuple[int, str | None, int]
"""``(ant_id, target, n_exits)``; target is None for a trapped ant."""


class EngineState(str, Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class SimulationEngine:
    """Run one simulation over a graph and roster it owns exclusively.

    ``rng`` defaults to ``Random(config.seed)``; pass an explicit instance to
    share or inject a random sequence. Without a ``roster`` the engine
    scatters ``config.n_ants`` ants according to ``config.placement``.
    ``on_destruction`` is called once per destruction event, in order.
    """

    def __init__(
        self,
        graph: ColonyGraph,
        config: SimulationConfig,
        rng: Random | None = None,
        roster: AntRoster | None = None,
        on_destruction: DestructionCallback | None = None,
    ) -> None:
        self.graph = graph
        self.config = config
        self._rng = rng if rng is not None else Random(config.seed)
        self.roster = roster if roster is not None else self._scatter_ants()
        for ant_id in self.roster.active_agents():
            colony = self.roster.position(ant_id)
            if not graph.exists(colony):
                raise UnknownColony(colony)

        self._on_destruction = on_destruction
        self._executor: ThreadPoolExecutor | None = None
        self._trapped: set[int] = set()
        # Repeated states only prove a loop while moves are unbudgeted
        self._cycle_detector = (
            CycleDetector()
            if config.detect_cycles and config.max_moves_per_ant is None
            else None
        )
        self.tick = 0
        self.events: list[DestructionEvent] = []
        self.state = EngineState.RUNNING
        self.termination_reason: TerminationReason | None = None

        # Ants dropped on the same colony fight before anyone moves
        self._destroy_crowded()
        self._update_state(forced=False)

    def __enter__(self) -> SimulationEngine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the move-phase worker pool, if one was started."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Public driving API
    # ------------------------------------------------------------------

    @property
    def terminated(self) -> bool:
        return self.state is EngineState.TERMINATED

    def run(self) -> SimulationResult:
        """Step until terminated and return the final result."""
        try:
            while self.state is EngineState.RUNNING:
                self.step()
        finally:
            self.close()
        return self.result()

    def step(self) -> list[DestructionEvent]:
        """Advance one tick and return the destruction events it produced.

        A terminated engine does nothing and returns an empty list.
        """
        if self.state is EngineState.TERMINATED:
            return []
        self.tick += 1

        movers = [ant_id for ant_id in self.roster.active_agents() if self._may_move(ant_id)]
        # Draw before the scatter so choices never depend on worker order
        draws = [self._rng.random() for _ in movers]

        forced = True
        moves: list[tuple[int, str, str]] = []
        for ant_id, target, n_exits in self._plan_moves(movers, draws):
            if n_exits > 1:
                forced = False
            if target is None:
                self._trapped.add(ant_id)
            else:
                moves.append((ant_id, self.roster.position(ant_id), target))

        self._apply_moves(moves)
        events = self._destroy_crowded()
        self._update_state(forced=forced and not events)
        return events

    def result(self) -> SimulationResult:
        reason = self.termination_reason.value if self.termination_reason is not None else None
        return SimulationResult(
            ticks=self.tick,
            events=tuple(self.events),
            termination_reason=reason,
            surviving_agents=self.roster.positions(),
            remaining_map=self.graph.to_dict(),
        )

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def _scatter_ants(self) -> AntRoster:
        colonies = list(self.graph.colonies())
        if not colonies:
            raise InvalidConfiguration("map contains no colonies")
        distinct = self.config.placement is PlacementPolicy.DISTINCT
        if distinct and self.config.n_ants > len(colonies):
            raise InvalidConfiguration(
                f"cannot place {self.config.n_ants} ants on distinct colonies; "
                f"map has {len(colonies)}"
            )
        return AntRoster.scatter(colonies, self.config.n_ants, self._rng, distinct=distinct)

    # ------------------------------------------------------------------
    # Move phase (scatter)
    # ------------------------------------------------------------------

    def _exhausted(self, ant_id: int) -> bool:
        budget = self.config.max_moves_per_ant
        return budget is not None and self.roster.moves(ant_id) >= budget

    def _may_move(self, ant_id: int) -> bool:
        return ant_id not in self._trapped and not self._exhausted(ant_id)

    def _plan_moves(self, movers: list[int], draws: list[float]) -> list[PlannedMove]:
        workers = self.config.workers
        if workers == 1 or len(movers) < 2:
            return self._choose_exits(movers, draws)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="antwar-move"
            )
        size = -(-len(movers) // workers)
        starts = range(0, len(movers), size)
        # map() yields chunks in submission order and returns only after all finish
        chunks = self._executor.map(
            self._choose_exits,
            [movers[i : i + size] for i in starts],
            [draws[i : i + size] for i in starts],
        )
        return [move for chunk in chunks for move in chunk]

    def _choose_exits(self, movers: Sequence[int], draws: Sequence[float]) -> list[PlannedMove]:
        planned: list[PlannedMove] = []
        for ant_id, draw in zip(movers, draws, strict=True):
            exits = self.graph.neighbors(self.roster.position(ant_id))
            if not exits:
                planned.append((ant_id, None, 0))
                continue
            _, target = exits[int(draw * len(exits))]
            planned.append((ant_id, target, len(exits)))
        return planned

    # ------------------------------------------------------------------
    # Gather phase: single writer
    # ------------------------------------------------------------------

    def _apply_moves(self, moves: list[tuple[int, str, str]]) -> None:
        cancelled = self._head_on_crossings(moves) if self.config.head_on_collisions else set()
        for ant_id, _, target in moves:
            if ant_id not in cancelled:
                self.roster.move(ant_id, target)

    @staticmethod
    def _head_on_crossings(moves: list[tuple[int, str, str]]) -> set[int]:
        """Return the ants whose move is cancelled by a head-on crossing.

        An ant moving Y -> X meets the earliest unpaired ant already moving
        X -> Y; it stays at Y, where the earlier ant arrives.
        """
        waiting: defaultdict[tuple[str, str], deque[int]] = defaultdict(deque)
        cancelled: set[int] = set()
        for ant_id, source, target in moves:
            if source == target:
                continue
            opposite = waiting.get((target, source))
            if opposite:
                opposite.popleft()
                cancelled.add(ant_id)
            else:
                waiting[(source, target)].append(ant_id)
        return cancelled

    def _destroy_crowded(self) -> list[DestructionEvent]:
        events: list[DestructionEvent] = []
        for colony in self.roster.crowded_colonies():
            agent_ids = tuple(sorted(self.roster.occupants(colony)))
            for ant_id in agent_ids:
                self.roster.remove(ant_id)
                self._trapped.discard(ant_id)
            severed = self.graph.destroy(colony)
            event = DestructionEvent(tick=self.tick, colony=colony, agent_ids=agent_ids)
            logger.debug(
                "tick %d: %s destroyed by ants %s, %d tunnels severed",
                self.tick,
                colony,
                list(agent_ids),
                len(severed),
            )
            events.append(event)
            self.events.append(event)
            if self._on_destruction is not None:
                self._on_destruction(event)
        return events

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------

    def _update_state(self, forced: bool) -> None:
        reason = self._termination_reason(forced)
        if reason is None:
            return
        self.state = EngineState.TERMINATED
        self.termination_reason = reason
        logger.info(
            "simulation terminated after %d ticks: %s (%d ants, %d colonies left)",
            self.tick,
            reason.value,
            len(self.roster),
            self.graph.colony_count(),
        )

    def _termination_reason(self, forced: bool) -> TerminationReason | None:
        if not self.roster:
            return TerminationReason.NO_AGENTS
        mobile = [
            ant_id
            for ant_id in self.roster.active_agents()
            if self.graph.has_exits(self.roster.position(ant_id))
        ]
        if not mobile:
            return TerminationReason.NO_MOVES
        if all(self._exhausted(ant_id) for ant_id in mobile):
            return TerminationReason.MOVES_EXHAUSTED
        if self._cycle_detector is not None:
            snapshot = self.roster.snapshot()
            if not forced:
                # A random choice or a destruction starts a fresh chain
                self._cycle_detector.reset()
                self._cycle_detector.observe(snapshot)
            elif self._cycle_detector.observe(snapshot):
                return TerminationReason.CYCLE
        if self.config.max_ticks is not None and self.tick >= self.config.max_ticks:
            return TerminationReason.TICK_LIMIT
        return None


def simulate(
    graph: ColonyGraph,
    config: SimulationConfig,
    rng: Random | None = None,
    on_destruction: DestructionCallback | None = None,
) -> SimulationResult:
    """Run a complete simulation on ``graph`` and return its result."""
    with SimulationEngine(graph, config, rng=rng, on_destruction=on_destruction) as engine:
        return engine.run()
