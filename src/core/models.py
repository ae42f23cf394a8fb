"""
Boundary layer data model(s).

These objects are used to communicate between the Service and the persistence layer.
The layout mirrors the persisted record exactly, so the scoring domain never has to know about the storage format
(and the storage never has to know about the domain dataclasses).
"""

from dataclasses import dataclass, field

# Type aliases to make MatchModel easier to read
PlayerRecord = dict[str, str | int]
CellRecord = dict[str, int | str]


@dataclass
class MatchModel:
    """Transport-safe representation of a match: `{home, away, scores}` with `""` as the empty game value."""

    home: list[PlayerRecord]
    away: list[PlayerRecord]
    scores: list[list[CellRecord]] = field(default_factory=list)
