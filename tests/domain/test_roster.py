"""Tests for antwar.domain.roster."""

from __future__ import annotations

from random import Random

import pytest

from antwar.domain.roster import AntRoster


class TestAntRosterPlacement:
    def test_place_and_occupants(self) -> None:
        roster = AntRoster()
        roster.place(0, "A")
        roster.place(1, "A")
        roster.place(2, "B")
        assert roster.occupants("A") == frozenset({0, 1})
        assert roster.occupants("B") == frozenset({2})
        assert roster.occupants("C") == frozenset()
        assert len(roster) == 3

    def test_relocation_updates_index(self) -> None:
        roster = AntRoster()
        roster.place(0, "A")
        roster.place(0, "B")
        assert roster.position(0) == "B"
        assert roster.occupants("A") == frozenset()
        assert roster.occupants("B") == frozenset({0})

    def test_move_counts_moves(self) -> None:
        roster = AntRoster()
        roster.place(0, "A")
        assert roster.moves(0) == 0
        roster.move(0, "B")
        roster.move(0, "A")
        assert roster.moves(0) == 2
        roster.place(0, "C")
        assert roster.moves(0) == 2

    def test_active_agents_in_placement_order(self) -> None:
        roster = AntRoster()
        for ant_id, colony in [(5, "A"), (2, "B"), (9, "C")]:
            roster.place(ant_id, colony)
        assert roster.active_agents() == [5, 2, 9]


class TestAntRosterRemoval:
    def test_remove_drops_from_all_indices(self) -> None:
        roster = AntRoster()
        roster.place(0, "A")
        roster.place(1, "A")
        roster.remove(0)
        assert 0 not in roster
        assert roster.occupants("A") == frozenset({1})
        assert roster.active_agents() == [1]

    def test_remove_unknown_raises(self) -> None:
        with pytest.raises(KeyError):
            AntRoster().remove(3)


class TestAntRosterCollisions:
    def test_crowded_colonies_sorted(self) -> None:
        roster = AntRoster()
        for ant_id, colony in enumerate(["Zulu", "Alpha", "Zulu", "Mid", "Alpha", "Alpha"]):
            roster.place(ant_id, colony)
        assert roster.crowded_colonies() == ["Alpha", "Zulu"]

    def test_snapshot_is_hashable(self) -> None:
        roster = AntRoster()
        roster.place(0, "A")
        roster.place(1, "B")
        snapshot = roster.snapshot()
        assert snapshot == ((0, "A"), (1, "B"))
        assert hash(snapshot) == hash(((0, "A"), (1, "B")))


class TestAntRosterScatter:
    def test_distinct_placement_is_unique(self) -> None:
        colonies = [f"c{i}" for i in range(10)]
        roster = AntRoster.scatter(colonies, 10, Random(0), distinct=True)
        assert sorted(roster.positions().values()) == sorted(colonies)
        assert roster.active_agents() == list(range(10))

    def test_shared_placement_may_repeat(self) -> None:
        roster = AntRoster.scatter(["A", "B"], 6, Random(0), distinct=False)
        assert len(roster) == 6
        assert set(roster.positions().values()) <= {"A", "B"}
        assert roster.crowded_colonies()

    def test_scatter_is_seeded(self) -> None:
        colonies = [f"c{i}" for i in range(20)]
        first = AntRoster.scatter(colonies, 5, Random(42)).positions()
        second = AntRoster.scatter(colonies, 5, Random(42)).positions()
        assert first == second
