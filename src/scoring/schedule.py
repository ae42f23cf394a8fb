"""
The fixed order in which the 9 pairings of a 3v3 handicap match are played.

Players are identified by their 1-based position in the roster, so "2 v 1" means:
home player 2 plays away player 1.
(placed in its own module as both the match model and the scoresheet read model need it)
"""

from collections import Counter
from dataclasses import dataclass

from src.core.exceptions import ScheduleError

ROSTER_SIZE = 3


@dataclass(frozen=True)
class Pairing:
    home: int
    away: int

    @property
    def label(self) -> str:
        return f"{self.home} v {self.away}"

    def player_indexes(self) -> tuple[int, int]:
        """0-based roster indexes of (home player, away player)."""
        return self.home - 1, self.away - 1


PAIRING_SCHEDULE: tuple[Pairing, ...] = (
    Pairing(2, 1),
    Pairing(1, 3),
    Pairing(3, 2),
    Pairing(2, 3),
    Pairing(3, 1),
    Pairing(1, 2),
    Pairing(3, 3),
    Pairing(2, 2),
    Pairing(1, 1),
)


def check_schedule(schedule: tuple[Pairing, ...]) -> None:
    """Every roster position has to appear exactly ROSTER_SIZE times on each side (full round-robin)."""
    if len(schedule) != ROSTER_SIZE * ROSTER_SIZE:
        raise ScheduleError(
            f"Expected {ROSTER_SIZE * ROSTER_SIZE} pairings, got {len(schedule)}."
        )

    if len(set(schedule)) != len(schedule):
        raise ScheduleError("A pairing is scheduled more than once.")

    positions = range(1, ROSTER_SIZE + 1)
    for side in ("home", "away"):
        counts = Counter(getattr(pairing, side) for pairing in schedule)
        if set(counts) != set(positions) or any(
            count != ROSTER_SIZE for count in counts.values()
        ):
            raise ScheduleError(
                f"Unbalanced {side} appearances in schedule: {dict(counts)}"
            )


check_schedule(PAIRING_SCHEDULE)
