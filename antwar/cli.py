"""CLI entrypoint for colony simulations.

This module owns CLI argument parsing, config-file resolution and mode
dispatch. All domain logic lives in the extracted modules:

- ``antwar.io.map_parser``         – map file loading
- ``antwar.config``                – configuration dataclasses
- ``antwar.simulation.engine``     – single-run tick engine
- ``antwar.simulation.batch``      – seeded batch runs with Parquet logs
- ``antwar.io.report``             – event and map rendering
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from antwar.config.constants import DEFAULT_WORKERS, MAX_TICKS
from antwar.config.types import PlacementPolicy, SimulationConfig
from antwar.domain.colony_graph import ColonyGraph
from antwar.domain.errors import InvalidConfiguration, MapParseError
from antwar.domain.events import DestructionEvent
from antwar.io.map_parser import load_map
from antwar.io.report import format_destruction, format_map, format_summary
from antwar.simulation.batch import run_batch
from antwar.simulation.engine import simulate

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_INVALID_CONFIGURATION = 2
EXIT_MAP_PARSE_ERROR = 3
EXIT_MAP_UNREADABLE = 4

DEFAULT_OUT_DIR = "data"

# ---------------------------------------------------------------------------
# Config resolution helpers
# ---------------------------------------------------------------------------


_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def _coerce_bool(raw: object, key: str) -> bool:
    """Accept JSON booleans and on/off style strings for switches like ``quiet``."""
    if isinstance(raw, bool):
        return raw
    token = raw.strip().lower() if isinstance(raw, str) else None
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Counts and limits; whole-number floats from JSON are accepted."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"{key} must be an integer value, got {raw!r}")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc


def _coerce_str(raw: object, key: str) -> str:
    # map paths, output dirs and placement labels; bare numbers are valid file names
    if isinstance(raw, bool) or not isinstance(raw, (str, Path, int)):
        raise ValueError(f"{key} must be a string value")
    return str(raw)


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """Command line first, then the config file, then ``default``."""
    return cli_val if cli_val is not None else file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_optional_int(
    cli_val: int | None, key: str, file_cfg: dict[str, object]
) -> int | None:
    raw = _get_val(cli_val, key, file_cfg, None)
    return None if raw is None else _coerce_int(raw, key)


def _get_optional_str(
    cli_val: str | None, key: str, file_cfg: dict[str, object]
) -> str | None:
    raw = _get_val(cli_val, key, file_cfg, None)
    return None if raw is None else _coerce_str(raw, key)


def _parse_placement(raw_placement: str) -> PlacementPolicy:
    """Parse placement policy from CLI/config."""
    try:
        return PlacementPolicy(raw_placement)
    except ValueError as exc:
        valid = ", ".join(policy.value for policy in PlacementPolicy)
        raise ValueError(f"placement must be one of {valid}") from exc


def _limit_or_none(value: int) -> int | None:
    """Map the CLI convention ``0 = unlimited`` to ``None``."""
    return None if value == 0 else value


@dataclass(frozen=True)
class CliSettings:
    """Fully resolved CLI/config-file settings."""

    config: SimulationConfig
    map_path: Path
    runs: int
    out_dir: Path | None
    quiet: bool


def _resolve_settings(args: argparse.Namespace, file_cfg: dict[str, object]) -> CliSettings:
    """Merge CLI values over config-file values over defaults.

    Raises ``ValueError`` (including :exc:`InvalidConfiguration`) on bad values.
    """
    n_ants = _get_optional_int(args.ants, "ants", file_cfg)
    if n_ants is None:
        raise InvalidConfiguration("the number of ants is required (--ants)")
    map_raw = _get_optional_str(args.map, "map", file_cfg)
    if map_raw is None:
        raise InvalidConfiguration("a map file is required (--map)")
    out_dir_raw = _get_optional_str(args.out_dir, "out_dir", file_cfg)

    config = SimulationConfig(
        n_ants=n_ants,
        seed=_get_optional_int(args.seed, "seed", file_cfg),
        max_ticks=_limit_or_none(_get_int(args.max_ticks, "max_ticks", file_cfg, MAX_TICKS)),
        max_moves_per_ant=_limit_or_none(_get_int(args.max_moves, "max_moves", file_cfg, 0)),
        workers=_get_int(args.workers, "workers", file_cfg, DEFAULT_WORKERS),
        placement=_parse_placement(
            _coerce_str(
                _get_val(args.placement, "placement", file_cfg, PlacementPolicy.DISTINCT.value),
                "placement",
            )
        ),
        detect_cycles=_get_bool(args.detect_cycles, "detect_cycles", file_cfg, True),
        head_on_collisions=_get_bool(
            args.head_on_collisions, "head_on_collisions", file_cfg, True
        ),
    )
    if config.max_ticks is None and not config.detect_cycles:
        logger.warning("no tick limit and no cycle detection: the run may never end")
    runs = _get_int(args.runs, "runs", file_cfg, 1)
    if runs < 1:
        raise InvalidConfiguration("runs must be >= 1")
    return CliSettings(
        config=config,
        map_path=Path(map_raw),
        runs=runs,
        out_dir=Path(out_dir_raw) if out_dir_raw is not None else None,
        quiet=_get_bool(args.quiet, "quiet", file_cfg, False),
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="antwar",
        description="Release ants on a colony map and watch them destroy it",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("-a", "--ants", type=int, default=None, help="number of ants")
    parser.add_argument("-m", "--map", type=str, default=None, help="path to the map file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help=f"tick cap, 0 for none (default {MAX_TICKS})",
    )
    parser.add_argument(
        "--max-moves",
        type=int,
        default=None,
        help="per-ant move budget, 0 for none (default none)",
    )
    parser.add_argument("--workers", type=int, default=None, help="move-phase thread count")
    parser.add_argument(
        "--placement",
        type=str,
        choices=[policy.value for policy in PlacementPolicy],
        default=None,
    )
    parser.add_argument("--detect-cycles", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument(
        "--head-on-collisions", action=argparse.BooleanOptionalAction, default=None
    )
    parser.add_argument("--runs", type=int, default=None, help="number of seeded runs")
    parser.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help=f"write Parquet logs here (batch mode; default {DEFAULT_OUT_DIR!r} when --runs > 1)",
    )
    parser.add_argument("-q", "--quiet", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


# ---------------------------------------------------------------------------
# Mode runners
# ---------------------------------------------------------------------------


def _print_event(event: DestructionEvent) -> None:
    print(format_destruction(event))


def _run_single(graph: ColonyGraph, settings: CliSettings) -> None:
    """One run, reporting destructions as they happen."""
    started = time.perf_counter()
    result = simulate(
        graph,
        settings.config,
        on_destruction=None if settings.quiet else _print_event,
    )
    elapsed = time.perf_counter() - started
    if not settings.quiet:
        remaining = format_map(result.remaining_map)
        if result.events:
            print()
        if remaining:
            print(remaining)
        print()
    print(format_summary(result, elapsed))


def _run_batch(graph: ColonyGraph, settings: CliSettings) -> None:
    """Seeded runs persisted to Parquet, summarised as JSON."""
    out_dir = settings.out_dir or Path(DEFAULT_OUT_DIR)
    base_seed = settings.config.seed if settings.config.seed is not None else 0
    summaries = run_batch(
        graph,
        n_runs=settings.runs,
        out_dir=out_dir,
        base_seed=base_seed,
        config=settings.config,
    )
    reasons = Counter(s.termination_reason for s in summaries)
    summary = {
        "mode": "batch",
        "runs": len(summaries),
        "base_seed": base_seed,
        "out_dir": str(out_dir),
        "total_destroyed": sum(s.n_events for s in summaries),
        "mean_ticks": sum(s.ticks for s in summaries) / len(summaries),
        "termination_reasons": dict(sorted(reasons.items())),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def _fail(code: int, message: str) -> int:
    print(f"error: {message}", file=sys.stderr)
    return code


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit code.

    Supports ``--config path/to/config.json`` for reproducible runs. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text(encoding="utf-8"))
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except OSError as exc:
            parser.error(f"Cannot read config file: {args.config}: {exc.strerror or exc}")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    try:
        settings = _resolve_settings(args, file_cfg)
    except ValueError as exc:
        return _fail(EXIT_INVALID_CONFIGURATION, f"invalid configuration: {exc}")

    try:
        graph = load_map(settings.map_path)
    except MapParseError as exc:
        return _fail(EXIT_MAP_PARSE_ERROR, f"malformed map {settings.map_path}: {exc}")
    except OSError as exc:
        reason = exc.strerror or str(exc)
        return _fail(EXIT_MAP_UNREADABLE, f"cannot read map {settings.map_path}: {reason}")

    try:
        if settings.runs > 1 or settings.out_dir is not None:
            _run_batch(graph, settings)
        else:
            _run_single(graph, settings)
    except InvalidConfiguration as exc:
        return _fail(EXIT_INVALID_CONFIGURATION, f"invalid configuration: {exc}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
