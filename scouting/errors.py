"""Error taxonomy for scouting data exchange."""

from __future__ import annotations


class ScoutingDataError(ValueError):
    """Base class for rejected scouting payloads. The store is never mutated."""


class FormatError(ScoutingDataError):
    """Payload decoded, but is not a list of record objects."""


class ParseError(ScoutingDataError):
    """Payload is not well-formed JSON."""
