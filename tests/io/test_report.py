"""Tests for event, map and summary rendering."""

from __future__ import annotations

from antwar.config.types import SimulationResult
from antwar.domain.events import DestructionEvent
from antwar.io.map_parser import parse_map, parse_map_text
from antwar.io.report import format_colony, format_destruction, format_map, format_summary


def test_format_destruction_two_ants() -> None:
    event = DestructionEvent(tick=1, colony="Fizz", agent_ids=(0, 1))
    assert format_destruction(event) == "Fizz has been destroyed by ant 0 and ant 1!"


def test_format_destruction_three_ants() -> None:
    event = DestructionEvent(tick=3, colony="Hub", agent_ids=(2, 5, 9))
    assert format_destruction(event) == "Hub has been destroyed by ant 2, ant 5 and ant 9!"


def test_format_colony_orders_directions() -> None:
    exits = {"up": "U", "west": "W", "north": "N", "down": "D"}
    assert format_colony("X", exits) == "X north=N west=W down=D up=U"


def test_format_colony_without_exits() -> None:
    assert format_colony("Lonely", {}) == "Lonely"


def test_format_map_round_trips_through_parser() -> None:
    text = "Foo north=Bar west=Baz\nBar south=Foo\nBaz"
    graph = parse_map_text(text)
    assert format_map(graph) == text
    assert parse_map_text(format_map(graph)).to_dict() == graph.to_dict()


def test_format_map_after_destruction() -> None:
    graph = parse_map(["Fizz north=Buzz", "Buzz south=Fizz"])
    graph.destroy("Buzz")
    assert format_map(graph) == "Fizz"
    assert format_map(graph.to_dict()) == "Fizz"


def test_format_map_empty() -> None:
    assert format_map({}) == ""


def test_format_summary() -> None:
    result = SimulationResult(
        ticks=1,
        events=(DestructionEvent(tick=1, colony="Buzz", agent_ids=(0, 1)),),
        termination_reason="no_agents",
        surviving_agents={},
        remaining_map={"Fizz": {}},
    )
    assert format_summary(result) == (
        "Simulation completed after 1 ticks (no_agents): "
        "1 colonies destroyed, 0 ants and 1 colonies left"
    )
    assert format_summary(result, 0.5).startswith("Simulation completed in 0.500000s after 1")
