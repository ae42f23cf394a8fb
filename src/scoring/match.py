"""
The score sheet of one handicap match: two rosters of 3 players, and a 9x4 grid of game scores.

MatchState is pure structure. Mutations (with clamping) are the responsibility of the service layer,
derived totals live in src/scoring/totals.py.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import InvalidAddressError
from src.core.models import MatchModel
from src.core.shared_types import Side
from src.scoring.schedule import PAIRING_SCHEDULE, ROSTER_SIZE

ROW_COUNT = len(PAIRING_SCHEDULE)
GAMES_PER_ROW = 4
HANDICAP_RANGE = (0, 999)
GAME_POINTS_RANGE = (0, 11)

# Marker used for an unplayed game in the persisted layout. In the domain it is None.
EMPTY_CELL_VALUE = ""

# None = not played yet. Values read back from storage are not re-validated, so this is a promise of the write path only.
GameValue = Optional[int]


@dataclass
class Player:
    name: str
    handicap: int = 0


@dataclass
class GameCell:
    home: GameValue = None
    away: GameValue = None

    def set(self, side: Side, value: GameValue) -> None:
        if side == Side.HOME:
            self.home = value
        else:
            self.away = value


def resolve_side(side: Side | str) -> Side:
    try:
        return Side(side)
    except ValueError:
        raise InvalidAddressError(
            f"Unknown side {side!r}. Pick one from {','.join(s.value for s in Side)}"
        ) from None


def _default_roster(side: Side) -> list[Player]:
    return [Player(f"{side.value.capitalize()} {i}") for i in range(1, ROSTER_SIZE + 1)]


def _empty_grid() -> list[list[GameCell]]:
    return [[GameCell() for _ in range(GAMES_PER_ROW)] for _ in range(ROW_COUNT)]


@dataclass
class MatchState:
    home_roster: list[Player] = field(
        default_factory=lambda: _default_roster(Side.HOME)
    )
    away_roster: list[Player] = field(
        default_factory=lambda: _default_roster(Side.AWAY)
    )
    score_grid: list[list[GameCell]] = field(default_factory=_empty_grid)

    @classmethod
    def new(cls) -> Self:
        """Fresh sheet: default names, zero handicaps, every game unplayed."""
        return cls()

    def roster(self, side: Side | str) -> list[Player]:
        return self.home_roster if resolve_side(side) == Side.HOME else self.away_roster

    # --- conversion to/from the transport model used by the persistence layer ---
    @classmethod
    def from_model(cls, model: MatchModel) -> Self:
        """Build the domain state from an (already structurally validated) MatchModel, values as-is."""

        def _player(record: dict) -> Player:
            return Player(name=record.get("name", ""), handicap=record.get("hcap", 0))

        def _value(raw: object) -> object:
            return None if raw == EMPTY_CELL_VALUE else raw

        return cls(
            home_roster=[_player(p) for p in model.home],
            away_roster=[_player(p) for p in model.away],
            score_grid=[
                [GameCell(_value(c.get("h", "")), _value(c.get("a", ""))) for c in row]
                for row in model.scores
            ],
        )

    def to_model(self) -> MatchModel:
        """Encode back into the layout the persistence layer stores."""

        def _value(value: GameValue) -> int | str:
            return EMPTY_CELL_VALUE if value is None else value

        return MatchModel(
            home=[{"name": p.name, "hcap": p.handicap} for p in self.home_roster],
            away=[{"name": p.name, "hcap": p.handicap} for p in self.away_roster],
            scores=[
                [{"h": _value(cell.home), "a": _value(cell.away)} for cell in row]
                for row in self.score_grid
            ],
        )


def new_match_state() -> MatchState:
    return MatchState.new()
