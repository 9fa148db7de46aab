"""Directed colony graph with direction-labelled tunnels.

Backed by a ``networkx.MultiDiGraph`` whose edge keys are direction labels, so
one source may hold several tunnels to the same target under different
directions. networkx keeps both successor and predecessor adjacency, which
makes neighbor lookup O(1) and destruction O(degree) instead of a scan over
every colony.
"""

from __future__ import annotations

from collections.abc import Iterator

import networkx as nx

from antwar.domain.errors import UnknownColony

Exit = tuple[str, str]
"""A ``(direction, target)`` pair leaving a colony."""


class ColonyGraph:
    """Mutable store of colonies and the tunnels between them."""

    def __init__(self, graph: nx.MultiDiGraph | None = None) -> None:
        self._graph: nx.MultiDiGraph = graph if graph is not None else nx.MultiDiGraph()

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, name: object) -> bool:
        return name in self._graph

    def __repr__(self) -> str:
        return (
            f"ColonyGraph(colonies={self._graph.number_of_nodes()}, "
            f"tunnels={self._graph.number_of_edges()})"
        )

    def add_colony(self, name: str) -> None:
        """Create ``name`` with no tunnels; existing colonies are left untouched."""
        self._graph.add_node(name)

    def add_edge(self, source: str, direction: str, target: str) -> None:
        """Record the tunnel ``source --direction--> target``.

        Replaces any tunnel already leaving ``source`` in ``direction``.
        """
        if source not in self._graph:
            raise UnknownColony(source)
        if target not in self._graph:
            raise UnknownColony(target)
        stale = [
            (source, dst, key)
            for _, dst, key in self._graph.out_edges(source, keys=True)
            if key == direction
        ]
        self._graph.remove_edges_from(stale)
        self._graph.add_edge(source, target, key=direction)

    def neighbors(self, name: str) -> list[Exit]:
        """Return the current ``(direction, target)`` exits of ``name``.

        Unknown or destroyed colonies have no exits.
        """
        if name not in self._graph:
            return []
        return [(key, dst) for _, dst, key in self._graph.out_edges(name, keys=True)]

    def exits(self, name: str) -> dict[str, str]:
        """Return the exits of ``name`` as a direction -> target mapping."""
        return dict(self.neighbors(name))

    def has_exits(self, name: str) -> bool:
        return name in self._graph and self._graph.out_degree(name) > 0

    def destroy(self, name: str) -> list[Exit]:
        """Remove ``name`` and every tunnel leading into or out of it.

        Returns the severed incoming tunnels as ``(source, direction)`` pairs.
        Destroying an absent colony is a no-op.
        """
        if name not in self._graph:
            return []
        severed = [
            (src, key)
            for src, _, key in self._graph.in_edges(name, keys=True)
            if src != name
        ]
        self._graph.remove_node(name)
        return severed

    def exists(self, name: str) -> bool:
        return name in self._graph

    def colony_count(self) -> int:
        return self._graph.number_of_nodes()

    def tunnel_count(self) -> int:
        return self._graph.number_of_edges()

    def colonies(self) -> Iterator[str]:
        """Iterate colony names in insertion order."""
        return iter(self._graph.nodes)

    def copy(self) -> ColonyGraph:
        """Return an independent copy for a fresh run on the same map."""
        return ColonyGraph(self._graph.copy())

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Plain ``colony -> {direction: target}`` snapshot of the graph."""
        return {name: self.exits(name) for name in self._graph.nodes}

    @classmethod
    def from_dict(cls, layout: dict[str, dict[str, str]]) -> ColonyGraph:
        """Build a graph from a ``colony -> {direction: target}`` mapping.

        Every target must also appear as a key.
        """
        graph = cls()
        for name in layout:
            graph.add_colony(name)
        for name, exits in layout.items():
            for direction, target in exits.items():
                graph.add_edge(name, direction, target)
        return graph
