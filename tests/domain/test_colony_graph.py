"""Tests for antwar.domain.colony_graph."""

from __future__ import annotations

import pytest

from antwar.domain.colony_graph import ColonyGraph
from antwar.domain.errors import UnknownColony


def _graph(layout: dict[str, dict[str, str]]) -> ColonyGraph:
    return ColonyGraph.from_dict(layout)


class TestColonyGraphBuild:
    def test_add_colony_is_idempotent(self) -> None:
        graph = ColonyGraph()
        graph.add_colony("A")
        graph.add_edge("A", "north", "A")
        graph.add_colony("A")
        assert graph.colony_count() == 1
        assert graph.neighbors("A") == [("north", "A")]

    def test_add_edge_overwrites_same_direction(self) -> None:
        graph = _graph({"A": {"north": "B"}, "B": {}, "C": {}})
        graph.add_edge("A", "north", "C")
        assert graph.neighbors("A") == [("north", "C")]
        assert graph.tunnel_count() == 1

    def test_two_directions_to_same_target(self) -> None:
        graph = _graph({"A": {"north": "B", "east": "B"}, "B": {}})
        assert sorted(graph.neighbors("A")) == [("east", "B"), ("north", "B")]

    @pytest.mark.parametrize(("source", "target"), [("X", "A"), ("A", "X")])
    def test_add_edge_unknown_endpoint(self, source: str, target: str) -> None:
        graph = _graph({"A": {}})
        with pytest.raises(UnknownColony) as excinfo:
            graph.add_edge(source, "north", target)
        assert excinfo.value.name == "X"
        assert isinstance(excinfo.value, LookupError)

    def test_from_dict_to_dict(self) -> None:
        layout = {"A": {"north": "B"}, "B": {"south": "A"}, "C": {}}
        assert _graph(layout).to_dict() == layout


class TestColonyGraphQueries:
    def test_neighbors_of_absent_colony(self) -> None:
        assert ColonyGraph().neighbors("nowhere") == []

    def test_dead_end_has_no_exits(self) -> None:
        graph = _graph({"A": {"north": "B"}, "B": {}})
        assert graph.has_exits("A")
        assert not graph.has_exits("B")
        assert not graph.has_exits("missing")

    def test_exists_and_contains(self) -> None:
        graph = _graph({"A": {}})
        assert graph.exists("A") and "A" in graph
        assert not graph.exists("B") and "B" not in graph
        assert len(graph) == 1

    def test_colonies_keep_insertion_order(self) -> None:
        graph = _graph({"Zed": {}, "Alpha": {}, "Mid": {}})
        assert list(graph.colonies()) == ["Zed", "Alpha", "Mid"]

    def test_exits_mapping(self) -> None:
        graph = _graph({"A": {"north": "B", "west": "C"}, "B": {}, "C": {}})
        assert graph.exits("A") == {"north": "B", "west": "C"}


class TestColonyGraphDestroy:
    def test_destroy_removes_incoming_from_every_source(self) -> None:
        graph = _graph(
            {
                "Hub": {"north": "A"},
                "A": {"south": "Hub"},
                "B": {"east": "Hub", "west": "A"},
                "C": {"north": "Hub"},
            }
        )
        severed = graph.destroy("Hub")
        assert sorted(severed) == [("A", "south"), ("B", "east"), ("C", "north")]
        assert not graph.exists("Hub")
        assert graph.to_dict() == {"A": {}, "B": {"west": "A"}, "C": {}}

    def test_destroy_absent_is_noop(self) -> None:
        graph = _graph({"A": {}})
        assert graph.destroy("B") == []
        graph.destroy("A")
        assert graph.destroy("A") == []
        assert graph.colony_count() == 0

    def test_destroy_self_loop(self) -> None:
        graph = _graph({"A": {"north": "A"}, "B": {"south": "A"}})
        assert graph.destroy("A") == [("B", "south")]
        assert graph.to_dict() == {"B": {}}

    def test_no_dangling_edges_after_destroy(self) -> None:
        graph = _graph(
            {
                "A": {"north": "B", "south": "C"},
                "B": {"south": "A", "east": "C"},
                "C": {"west": "B"},
            }
        )
        graph.destroy("B")
        layout = graph.to_dict()
        for exits in layout.values():
            for target in exits.values():
                assert target in layout


class TestColonyGraphCopy:
    def test_copy_is_independent(self) -> None:
        graph = _graph({"A": {"north": "B"}, "B": {}})
        clone = graph.copy()
        clone.destroy("B")
        assert graph.to_dict() == {"A": {"north": "B"}, "B": {}}
        assert clone.to_dict() == {"A": {}}
