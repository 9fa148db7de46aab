"""Typed records emitted by the simulation engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DestructionEvent:
    """A colony destroyed by the ants that collided there during ``tick``.

    ``agent_ids`` is sorted ascending and always holds at least two ids.
    Tick 0 marks collisions between ants that were placed on the same colony.
    """

    tick: int
    colony: str
    agent_ids: tuple[int, ...]
