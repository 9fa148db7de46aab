"""Path construction helpers for simulation output directories.

Centralises the directory/file naming conventions used by the batch runner
and the CLI.
"""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def maps_dir(out_dir: Path) -> Path:
    """Return path to the remaining-map subdirectory within an output directory."""
    return out_dir / "maps"


def destruction_log_path(out_dir: Path) -> Path:
    """Return path to the destruction log Parquet file."""
    return logs_dir(out_dir) / "destruction_log.parquet"


def run_summary_path(out_dir: Path) -> Path:
    """Return path to the run summary Parquet file."""
    return logs_dir(out_dir) / "run_summary.parquet"


def remaining_map_path(out_dir: Path, run_id: str) -> Path:
    """Return path to the remaining-map text file of one run."""
    return maps_dir(out_dir) / f"{run_id}.txt"
