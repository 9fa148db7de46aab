"""Active-ant bookkeeping: positions, move counts and per-colony occupancy."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from random import Random


class AntRoster:
    """Tracks every live ant and the reverse colony -> ants index.

    Invariant: ``ant in roster`` iff the ant has not been destroyed, and the
    occupancy index always agrees with each ant's position.
    """

    def __init__(self) -> None:
        self._positions: dict[int, str] = {}
        self._moves: dict[int, int] = {}
        self._occupants: defaultdict[str, set[int]] = defaultdict(set)

    @classmethod
    def scatter(
        cls,
        colonies: Sequence[str],
        n_ants: int,
        rng: Random,
        distinct: bool = True,
    ) -> AntRoster:
        """Place ``n_ants`` ants, numbered from 0, on randomly chosen colonies.

        With ``distinct`` every ant gets its own colony; otherwise colonies
        are drawn independently and may repeat.
        """
        if distinct:
            starts = rng.sample(list(colonies), n_ants)
        else:
            starts = [rng.choice(colonies) for _ in range(n_ants)]
        roster = cls()
        for ant_id, colony in enumerate(starts):
            roster.place(ant_id, colony)
        return roster

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, ant_id: object) -> bool:
        return ant_id in self._positions

    def place(self, ant_id: int, colony: str) -> None:
        """Put ``ant_id`` on ``colony``, relocating it if already placed."""
        previous = self._positions.get(ant_id)
        if previous is not None:
            self._vacate(ant_id, previous)
        else:
            self._moves[ant_id] = 0
        self._positions[ant_id] = colony
        self._occupants[colony].add(ant_id)

    def move(self, ant_id: int, colony: str) -> None:
        """Relocate a placed ant and count the move."""
        self.place(ant_id, colony)
        self._moves[ant_id] += 1

    def remove(self, ant_id: int) -> None:
        """Drop a destroyed ant from every index."""
        colony = self._positions.pop(ant_id)
        del self._moves[ant_id]
        self._vacate(ant_id, colony)

    def _vacate(self, ant_id: int, colony: str) -> None:
        occupants = self._occupants[colony]
        occupants.discard(ant_id)
        if not occupants:
            del self._occupants[colony]

    def position(self, ant_id: int) -> str:
        return self._positions[ant_id]

    def moves(self, ant_id: int) -> int:
        return self._moves[ant_id]

    def occupants(self, colony: str) -> frozenset[int]:
        return frozenset(self._occupants.get(colony, ()))

    def active_agents(self) -> list[int]:
        """Live ants in placement order."""
        return list(self._positions)

    def crowded_colonies(self) -> list[str]:
        """Colonies holding two or more ants, sorted by name."""
        return sorted(colony for colony, ants in self._occupants.items() if len(ants) >= 2)

    def snapshot(self) -> tuple[tuple[int, str], ...]:
        """Hashable ``(ant_id, colony)`` view of every live ant."""
        return tuple(self._positions.items())

    def positions(self) -> dict[int, str]:
        return dict(self._positions)
