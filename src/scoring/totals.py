"""
Derived totals of a score sheet.

All functions are pure: they only read the MatchState they are given, and never keep a reference to it.
Totals have to be displayable at any moment (also mid-edit), so unusable stored values count as 0 instead of raising.
"""

from dataclasses import dataclass
from itertools import accumulate

from src.core.exceptions import InvalidAddressError
from src.core.shared_types import Side
from src.scoring.coercion import as_number
from src.scoring.match import ROW_COUNT, MatchState


@dataclass(frozen=True)
class SideTotals:
    home: int = 0
    away: int = 0

    def __add__(self, other: "SideTotals") -> "SideTotals":
        return SideTotals(self.home + other.home, self.away + other.away)


def row_set_total(state: MatchState, row_index: int) -> SideTotals:
    """Points scored per side over the 4 games of one pairing. Empty cells contribute nothing."""
    if not 0 <= row_index < ROW_COUNT:
        raise InvalidAddressError(f"Row index {row_index} outside 0..{ROW_COUNT - 1}.")

    row = state.score_grid[row_index]
    return SideTotals(
        home=sum(as_number(cell.home) for cell in row),
        away=sum(as_number(cell.away) for cell in row),
    )


def handicap_total(state: MatchState, side: Side | str) -> int:
    return sum(as_number(player.handicap) for player in state.roster(side))


def handicap_totals(state: MatchState) -> SideTotals:
    return SideTotals(
        home=handicap_total(state, Side.HOME), away=handicap_total(state, Side.AWAY)
    )


def points_total(state: MatchState) -> SideTotals:
    """All points scored so far, without the handicap headstart."""
    return sum(
        (row_set_total(state, row) for row in range(ROW_COUNT)), start=SideTotals()
    )


def running_totals_by_row(state: MatchState) -> list[SideTotals]:
    """
    Running total after each row: handicap base + set totals up to and including that row.

    The prefix sum is seeded with the handicaps (not with zero), so the headstart is visible from the first row on.
    """
    set_totals = (row_set_total(state, row) for row in range(ROW_COUNT))
    running = accumulate(set_totals, initial=handicap_totals(state))
    # drop the seed itself: one entry per row
    return list(running)[1:]


def grand_totals(state: MatchState) -> SideTotals:
    """Final score: handicap base + every point scored (equals the last running total)."""
    return handicap_totals(state) + points_total(state)
