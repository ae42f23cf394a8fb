"""Owner of the live score sheet: applies edits coming from the UI, persists them, and answers totals queries."""

from copy import deepcopy
from typing import Any

from src.api.models import (
    GameCellResponse,
    PlayerResponse,
    ScoresheetResponse,
    ScoresheetRow,
    SideTotalsResponse,
)
from src.core.exceptions import InvalidAddressError
from src.core.logger import get_logger
from src.core.shared_types import LoadOutcome, Side
from src.scoring import totals
from src.scoring.coercion import as_number, clamp_int, clamp_int_or_blank
from src.scoring.match import (
    GAME_POINTS_RANGE,
    GAMES_PER_ROW,
    HANDICAP_RANGE,
    ROW_COUNT,
    GameCell,
    MatchState,
    Player,
    new_match_state,
    resolve_side,
)
from src.scoring.schedule import PAIRING_SCHEDULE, ROSTER_SIZE
from src.services.persistence import MatchPersistence

_log = get_logger("services.match_service")


class MatchService:
    """
    Owner of the live score sheet of one scoring session.

    Every edit is total for the *value* that was typed: out-of-range numbers are clamped, garbage becomes 0 (handicap)
    or blank (game cell). Every edit is saved before the call returns.
    Only a wrong address (unknown side, position or row/game outside the sheet) raises, and then nothing changes.
    """

    def __init__(self, persistence: MatchPersistence) -> None:
        self.persistence = persistence
        result = persistence.inspect()
        # only the outcome is public, the sheet itself belongs to this service alone
        self.load_outcome: LoadOutcome = result.outcome
        self.load_reason: str | None = result.reason
        self._state: MatchState = deepcopy(result.state)

    @property
    def state(self) -> MatchState:
        """Copy of the current sheet. Changing it has no effect on the session."""
        return deepcopy(self._state)

    # -- mutations --
    def set_player_name(self, side: Side | str, index: int, text: str | None) -> None:
        player = self._player(side, index)
        player.name = "" if text is None else str(text)
        self._save()

    def set_handicap(self, side: Side | str, index: int, raw_value: Any) -> None:
        player = self._player(side, index)
        player.handicap = clamp_int(raw_value, *HANDICAP_RANGE)
        self._save()

    def set_game_cell(
        self, row_index: int, game_index: int, side: Side | str, raw_value: Any
    ) -> None:
        cell = self._cell(row_index, game_index)
        cell.set(resolve_side(side), clamp_int_or_blank(raw_value, *GAME_POINTS_RANGE))
        self._save()

    def reset(self) -> None:
        """Start a new night: the whole sheet is replaced. Asking for confirmation is up to the caller."""
        self._state = new_match_state()
        self._save()
        _log.info(f"Match reset (slot {self.persistence.key!r})")

    # -- totals queries --
    def row_set_total(self, row_index: int) -> totals.SideTotals:
        return totals.row_set_total(self._state, row_index)

    def handicap_total(self, side: Side | str) -> int:
        return totals.handicap_total(self._state, side)

    def running_totals_by_row(self) -> list[totals.SideTotals]:
        return totals.running_totals_by_row(self._state)

    def grand_totals(self) -> totals.SideTotals:
        return totals.grand_totals(self._state)

    def scoresheet(self) -> ScoresheetResponse:
        """Everything needed to (re)render the sheet, derived from the current state in one pass."""
        state = self._state
        running = totals.running_totals_by_row(state)

        rows = []
        for row_index, pairing in enumerate(PAIRING_SCHEDULE):
            home_idx, away_idx = pairing.player_indexes()
            rows.append(
                ScoresheetRow(
                    row_index=row_index,
                    label=pairing.label,
                    home_player=state.home_roster[home_idx].name or "Home",
                    away_player=state.away_roster[away_idx].name or "Away",
                    games=[
                        GameCellResponse(
                            home=self._display_value(cell.home),
                            away=self._display_value(cell.away),
                        )
                        for cell in state.score_grid[row_index]
                    ],
                    set_total=self._totals_response(
                        totals.row_set_total(state, row_index)
                    ),
                    running_total=self._totals_response(running[row_index]),
                )
            )

        return ScoresheetResponse(
            home=self._roster_response(state.home_roster),
            away=self._roster_response(state.away_roster),
            handicap_totals=self._totals_response(totals.handicap_totals(state)),
            points_totals=self._totals_response(totals.points_total(state)),
            rows=rows,
            grand_totals=self._totals_response(totals.grand_totals(state)),
        )

    # -- Internal helpers --
    def _player(self, side: Side | str, index: int) -> Player:
        roster = self._state.roster(side)
        if not 0 <= index < ROSTER_SIZE:
            raise InvalidAddressError(
                f"Player index {index} outside 0..{ROSTER_SIZE - 1}."
            )
        return roster[index]

    def _cell(self, row_index: int, game_index: int) -> GameCell:
        if not 0 <= row_index < ROW_COUNT:
            raise InvalidAddressError(
                f"Row index {row_index} outside 0..{ROW_COUNT - 1}."
            )
        if not 0 <= game_index < GAMES_PER_ROW:
            raise InvalidAddressError(
                f"Game index {game_index} outside 0..{GAMES_PER_ROW - 1}."
            )
        return self._state.score_grid[row_index][game_index]

    def _save(self) -> None:
        self.persistence.save(self._state)

    @staticmethod
    def _display_value(value: Any) -> int | None:
        return None if value is None else as_number(value)

    @staticmethod
    def _totals_response(side_totals: totals.SideTotals) -> SideTotalsResponse:
        return SideTotalsResponse(home=side_totals.home, away=side_totals.away)

    @staticmethod
    def _roster_response(roster: list[Player]) -> list[PlayerResponse]:
        return [
            PlayerResponse(
                position=position,
                name=player.name,
                handicap=as_number(player.handicap),
            )
            for position, player in enumerate(roster, start=1)
        ]
