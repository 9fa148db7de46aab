"""Tests for scripts/benchmark.py."""

from __future__ import annotations

from pathlib import Path

import pyarrow.parquet as pq
import pytest

from antwar.io.map_parser import parse_map
from scripts.benchmark import BENCHMARK_SCHEMA, _parse_ant_counts, main, run_benchmark


def test_parse_ant_counts() -> None:
    assert _parse_ant_counts("3, 6,9") == (3, 6, 9)
    with pytest.raises(ValueError):
        _parse_ant_counts("0")
    with pytest.raises(ValueError):
        _parse_ant_counts("")


def test_run_benchmark_rows() -> None:
    rows = run_benchmark(ant_counts=(1, 3), repeats=2)
    assert [row["n_ants"] for row in rows] == [1, 3]
    for row in rows:
        assert row["repeats"] == 2
        assert row["workers"] == 1
        assert row["best_seconds"] <= row["mean_seconds"]
    # a lone ant bounces between the two colonies until its budget runs out
    assert rows[0]["mean_ticks"] == 10_000


def test_run_benchmark_custom_graph_and_workers() -> None:
    graph = parse_map(["A east=B", "B east=C", "C east=A"])
    rows = run_benchmark(ant_counts=(4,), repeats=1, workers=2, graph=graph)
    assert rows[0]["workers"] == 2
    assert graph.colony_count() == 3


def test_run_benchmark_rejects_zero_repeats() -> None:
    with pytest.raises(ValueError, match="repeats"):
        run_benchmark(repeats=0)


def test_main_writes_parquet(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_file = tmp_path / "bench" / "results.parquet"
    main(["--ant-counts", "2", "--repeats", "1", "--out-file", str(out_file)])
    assert "simulation/2_ants" in capsys.readouterr().out
    table = pq.read_table(out_file)
    assert table.schema.equals(BENCHMARK_SCHEMA)
    assert table.num_rows == 1
