"""Map-file loading.

Each non-blank line defines one colony and its outgoing tunnels::

    Fizz north=Buzz west=Bla
    Buzz south=Fizz

Lines starting with ``#`` are comments. Targets that never get a line of
their own become colonies with no exits.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from antwar.domain.colony_graph import ColonyGraph
from antwar.domain.errors import MapParseError

logger = logging.getLogger(__name__)


def _parse_line(line: str, line_number: int) -> tuple[str, dict[str, str]]:
    """Split one definition line into a colony name and its exits."""
    name, *tokens = line.split()
    if "=" in name:
        raise MapParseError(f"line must start with a colony name, got {name!r}", line_number)
    exits: dict[str, str] = {}
    for token in tokens:
        direction, sep, target = token.partition("=")
        if not sep:
            raise MapParseError(f"expected direction=target, got {token!r}", line_number)
        direction = direction.strip().lower()
        target = target.strip()
        if not direction or not target:
            raise MapParseError(f"empty direction or target in {token!r}", line_number)
        if "=" in target:
            raise MapParseError(f"colony name {target!r} must not contain '='", line_number)
        if direction in exits:
            raise MapParseError(
                f"colony {name!r} has more than one {direction!r} tunnel", line_number
            )
        exits[direction] = target
    return name, exits


def parse_map(lines: Iterable[str]) -> ColonyGraph:
    """Build a colony graph from map-file lines.

    Raises :exc:`MapParseError` on malformed tokens and duplicate colonies.
    """
    definitions: dict[str, dict[str, str]] = {}
    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        name, exits = _parse_line(line, line_number)
        if name in definitions:
            raise MapParseError(f"colony {name!r} is defined twice", line_number)
        definitions[name] = exits

    graph = ColonyGraph()
    for name in definitions:
        graph.add_colony(name)
    implicit = 0
    for exits in definitions.values():
        for target in exits.values():
            if not graph.exists(target):
                graph.add_colony(target)
                implicit += 1
    for name, exits in definitions.items():
        for direction, target in exits.items():
            graph.add_edge(name, direction, target)

    logger.debug(
        "parsed map: %d colonies (%d implicit), %d tunnels",
        graph.colony_count(),
        implicit,
        graph.tunnel_count(),
    )
    return graph


def parse_map_text(text: str) -> ColonyGraph:
    return parse_map(text.splitlines())


def _decode_lines(handle: Iterable[bytes]) -> Iterator[str]:
    for line_number, raw in enumerate(handle, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MapParseError(f"invalid UTF-8 at byte {exc.start}", line_number) from exc


def load_map(path: Path | str) -> ColonyGraph:
    """Read and parse a map file.

    ``OSError`` from opening the file propagates unchanged; bytes that are not
    UTF-8 raise :exc:`MapParseError` for the offending line.
    """
    with Path(path).open("rb") as handle:
        return parse_map(_decode_lines(handle))
