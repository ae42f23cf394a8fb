"""Response models: everything the UI needs to render the score sheet after a mutation."""

from typing import Optional

from pydantic import BaseModel


class SideTotalsResponse(BaseModel):
    home: int
    away: int


class PlayerResponse(BaseModel):
    position: int  # 1-based, as used in the pairing labels
    name: str
    handicap: int


class GameCellResponse(BaseModel):
    # None = not played yet (rendered blank, unlike an explicit 0)
    home: Optional[int]
    away: Optional[int]


class ScoresheetRow(BaseModel):
    row_index: int
    label: str
    home_player: str
    away_player: str
    games: list[GameCellResponse]
    set_total: SideTotalsResponse
    running_total: SideTotalsResponse


class ScoresheetResponse(BaseModel):
    home: list[PlayerResponse]
    away: list[PlayerResponse]
    handicap_totals: SideTotalsResponse
    points_totals: SideTotalsResponse
    rows: list[ScoresheetRow]
    grand_totals: SideTotalsResponse
