from __future__ import annotations

import hashlib
from collections.abc import Hashable
from enum import Enum


class TerminationReason(str, Enum):
    """Termination reason labels persisted in run summaries."""

    NO_AGENTS = "no_agents"
    NO_MOVES = "no_moves"
    MOVES_EXHAUSTED = "moves_exhausted"
    CYCLE = "cycle"
    TICK_LIMIT = "tick_limit"


def snapshot_digest(snapshot: Hashable) -> bytes:
    """Fixed-size fingerprint of a roster snapshot built from ints and strings."""
    return hashlib.blake2b(repr(snapshot).encode(), digest_size=16).digest()


class CycleDetector:
    """Detect a repeated roster snapshot across consecutive forced ticks.

    While every mover has exactly one exit and no colony is destroyed, the
    simulation is a deterministic function of the roster, so a repeated
    snapshot means the ants will circle forever without meeting.

    Only 16-byte digests are kept, so a forced chain of ``n`` ticks holds
    ``n`` digests whatever the number of ants.
    """

    def __init__(self) -> None:
        self._seen: set[bytes] = set()

    def observe(self, snapshot: Hashable) -> bool:
        """Return True if ``snapshot`` was already seen since the last reset."""
        digest = snapshot_digest(snapshot)
        if digest in self._seen:
            return True
        self._seen.add(digest)
        return False

    def reset(self) -> None:
        self._seen.clear()

    def __len__(self) -> int:
        return len(self._seen)
