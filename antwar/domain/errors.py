"""Error taxonomy for map loading, configuration and graph invariants."""

from __future__ import annotations


class MapParseError(ValueError):
    """A map file line is malformed or redefines a colony."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class InvalidConfiguration(ValueError):
    """Simulation settings are out of range or incompatible with the map."""


class UnknownColony(LookupError):
    """A colony name was referenced that the graph does not contain.

    Raised only when a loader breaks the graph contract; the engine never
    triggers it on a well-formed graph.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown colony: {name!r}")
