"""Unit tests for src/services/match_service.py"""

import json
from typing import Any, Generator, Optional
from unittest.mock import patch

import pytest

from src.api.models import ScoresheetResponse
from src.core.exceptions import InvalidAddressError
from src.core.shared_types import LoadOutcome, Side
from src.scoring.match import GameCell, MatchState
from src.scoring.totals import SideTotals
from src.services.match_service import MatchService
from src.services.persistence import LoadResult, MatchPersistence

VERSION = "3"


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the SlotRepository using a dictionary, counting the writes."""

    def __init__(self) -> None:
        self._slots: dict[str, str] = {}
        self.writes = 0

    def read_slot(self, key: str) -> str | None:
        return self._slots.get(key)

    def write_slot(self, key: str, payload: str) -> None:
        self._slots[key] = payload
        self.writes += 1

    def delete_slot(self, key: str) -> bool:
        return self._slots.pop(key, None) is not None

    def list_slots(self) -> list[str]:
        return sorted(self._slots)

    def stored(self) -> Optional[dict[str, Any]]:
        raw = self._slots.get(f"handicap-cup-v{VERSION}")
        return json.loads(raw) if raw is not None else None

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._slots.clear()
        self.writes = 0


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> MatchService:
    return MatchService(MatchPersistence(mock_repository, version=VERSION))


def reopen(repository: MockRepository) -> MatchService:
    """Same storage, new session (e.g. the page was reloaded)."""
    return MatchService(MatchPersistence(repository, version=VERSION))


# --- SERVICE - START ----
def test_starts_with_fresh_sheet(
    service: MatchService, mock_repository: MockRepository
) -> None:
    assert service.state == MatchState.new()
    assert service.load_outcome == LoadOutcome.MISSING
    # loading alone does not write anything
    assert mock_repository.writes == 0


def test_state_accessor_returns_a_copy(service: MatchService) -> None:
    """Nobody outside the service gets hold of the live state."""
    copy = service.state
    copy.home_roster[0].handicap = 999
    copy.score_grid[0][0].home = 11

    assert service.handicap_total(Side.HOME) == 0
    assert service.row_set_total(0) == SideTotals(0, 0)


def test_loaded_state_is_not_shared(mock_repository: MockRepository) -> None:
    """Whoever reads the slot alongside the service cannot reach the live sheet through it."""
    gateway = MatchPersistence(mock_repository, version=VERSION)
    gateway.save(MatchState.new())

    results: list[LoadResult] = []
    inspect = gateway.inspect

    def _keep_result() -> LoadResult:
        results.append(inspect())
        return results[-1]

    with patch.object(gateway, "inspect", side_effect=_keep_result):
        service = MatchService(gateway)

    assert service.load_outcome == LoadOutcome.LOADED
    results[0].state.home_roster[0].handicap = 500
    results[0].state.score_grid[0][0].home = 11

    assert service.handicap_total(Side.HOME) == 0
    assert service.row_set_total(0) == SideTotals(0, 0)


def test_resumes_stored_sheet(mock_repository: MockRepository) -> None:
    first = reopen(mock_repository)
    first.set_player_name(Side.HOME, 0, "Ann")
    first.set_game_cell(0, 0, Side.HOME, "11")

    second = reopen(mock_repository)
    assert second.load_outcome == LoadOutcome.LOADED
    assert second.state == first.state


# --- SERVICE - PLAYER EDITS ----
def test_set_player_name(
    service: MatchService, mock_repository: MockRepository
) -> None:
    service.set_player_name(Side.AWAY, 2, "  Fay  ")

    assert service.state.away_roster[2].name == "  Fay  "
    stored = mock_repository.stored()
    assert stored is not None
    assert stored["away"][2]["name"] == "  Fay  "


def test_set_player_name_none_becomes_empty(service: MatchService) -> None:
    service.set_player_name("home", 1, None)
    assert service.state.home_roster[1].name == ""


def test_non_string_name_survives_reload(mock_repository: MockRepository) -> None:
    """A name that is not a string is stored as text, so the sheet still loads next time."""
    first = reopen(mock_repository)
    first.set_game_cell(0, 0, Side.HOME, "11")
    first.set_player_name(Side.HOME, 0, 42)  # type: ignore[arg-type]

    second = reopen(mock_repository)
    assert second.load_outcome == LoadOutcome.LOADED
    assert second.state.home_roster[0].name == "42"
    assert second.row_set_total(0) == SideTotals(11, 0)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("10", 10),
        (25, 25),
        ("1000", 999),
        ("-5", 0),
        ("abc", 0),
        ("", 0),
        (None, 0),
        ("9" * 5000, 999),
    ],
)
def test_set_handicap(service: MatchService, raw: Any, expected: int) -> None:
    service.set_handicap(Side.HOME, 0, raw)
    assert service.state.home_roster[0].handicap == expected


def test_unparseable_handicap_replaces_previous_value(service: MatchService) -> None:
    """Garbage input resolves to 0, not to the value that was there before."""
    service.set_handicap(Side.HOME, 0, "40")
    service.set_handicap(Side.HOME, 0, "abc")
    assert service.state.home_roster[0].handicap == 0
    assert service.handicap_total(Side.HOME) == 0


# --- SERVICE - GAME EDITS ----
def test_enter_and_clear_game_cell(
    service: MatchService, mock_repository: MockRepository
) -> None:
    service.set_game_cell(3, 1, Side.HOME, "7")
    assert service.row_set_total(3) == SideTotals(7, 0)
    assert service.state.score_grid[3][1] == GameCell(7, None)

    service.set_game_cell(3, 1, Side.HOME, "")
    assert service.row_set_total(3) == SideTotals(0, 0)
    assert service.state.score_grid[3][1] == GameCell(None, None)

    stored = mock_repository.stored()
    assert stored is not None
    assert stored["scores"][3][1] == {"h": "", "a": ""}


def test_blank_and_zero_are_stored_differently(
    service: MatchService, mock_repository: MockRepository
) -> None:
    service.set_game_cell(0, 0, Side.HOME, "0")
    service.set_game_cell(0, 0, Side.AWAY, "")

    assert service.state.score_grid[0][0] == GameCell(0, None)
    assert service.row_set_total(0) == SideTotals(0, 0)
    stored = mock_repository.stored()
    assert stored is not None
    assert stored["scores"][0][0] == {"h": 0, "a": ""}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("15", 11),
        ("-3", 0),
        ("11", 11),
        (" 9 ", 9),
        ("abc", None),
        ("   ", None),
        (None, None),
        ("9" * 5000, 11),
    ],
)
def test_set_game_cell_clamping(
    service: MatchService, raw: Any, expected: Optional[int]
) -> None:
    service.set_game_cell(8, 3, Side.AWAY, raw)
    assert service.state.score_grid[8][3].away == expected


def test_unparseable_game_value_clears_cell(service: MatchService) -> None:
    """Unparseable input means cleared/unknown, not a scored zero."""
    service.set_game_cell(2, 2, Side.HOME, "6")
    service.set_game_cell(2, 2, Side.HOME, "six")
    assert service.state.score_grid[2][2].home is None


# --- SERVICE - PERSISTENCE AFTER EVERY EDIT ----
def test_every_mutation_is_persisted(
    service: MatchService, mock_repository: MockRepository
) -> None:
    service.set_player_name(Side.HOME, 0, "Ann")
    service.set_handicap(Side.HOME, 0, "10")
    service.set_game_cell(0, 0, Side.HOME, "11")
    service.reset()

    assert mock_repository.writes == 4
    assert reopen(mock_repository).state == service.state


def test_reset(service: MatchService, mock_repository: MockRepository) -> None:
    service.set_player_name(Side.AWAY, 0, "Dan")
    service.set_handicap(Side.AWAY, 0, "12")
    service.set_game_cell(5, 0, Side.AWAY, "11")

    service.reset()

    assert service.state == MatchState.new()
    assert service.grand_totals() == SideTotals(0, 0)
    assert reopen(mock_repository).state == MatchState.new()


# --- SERVICE - ADDRESSING ----
@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.set_player_name(Side.HOME, 3, "x"),
        lambda s: s.set_player_name("visitors", 0, "x"),
        lambda s: s.set_handicap(Side.AWAY, -1, "5"),
        lambda s: s.set_game_cell(9, 0, Side.HOME, "5"),
        lambda s: s.set_game_cell(0, 4, Side.HOME, "5"),
        lambda s: s.set_game_cell(0, 0, "middle", "5"),
        lambda s: s.row_set_total(-1),
    ],
)
def test_unknown_address_raises_and_changes_nothing(
    service: MatchService, mock_repository: MockRepository, call: Any
) -> None:
    with pytest.raises(InvalidAddressError):
        call(service)

    assert service.state == MatchState.new()
    assert mock_repository.writes == 0


# --- SERVICE - TOTALS ----
def test_scenario_handicap_and_first_game(service: MatchService) -> None:
    service.set_handicap(Side.HOME, 0, "10")
    for index in range(3):
        service.set_handicap(Side.AWAY, index, "0")
    service.set_game_cell(0, 0, Side.HOME, "11")
    service.set_game_cell(0, 0, Side.AWAY, "3")

    assert service.row_set_total(0) == SideTotals(11, 3)
    assert service.running_totals_by_row()[0] == SideTotals(21, 3)
    assert service.grand_totals() == SideTotals(21, 3)


def test_scoresheet(service: MatchService) -> None:
    service.set_player_name(Side.HOME, 1, "Bob")
    service.set_player_name(Side.AWAY, 0, "")
    service.set_handicap(Side.HOME, 0, "10")
    service.set_game_cell(0, 0, Side.HOME, "11")
    service.set_game_cell(0, 0, Side.AWAY, "3")
    service.set_game_cell(0, 1, Side.AWAY, "0")

    sheet = service.scoresheet()

    assert isinstance(sheet, ScoresheetResponse)
    assert [p.name for p in sheet.home] == ["Home 1", "Bob", "Home 3"]
    assert sheet.home[0].position == 1
    assert sheet.home[0].handicap == 10
    assert sheet.handicap_totals.home == 10
    assert sheet.points_totals.home == 11
    assert sheet.points_totals.away == 3

    first = sheet.rows[0]
    assert first.label == "2 v 1"
    assert first.home_player == "Bob"
    # a blank name falls back to the side name
    assert first.away_player == "Away"
    assert first.games[0].home == 11
    assert first.games[1].home is None
    assert first.games[1].away == 0
    assert (first.set_total.home, first.set_total.away) == (11, 3)
    assert (first.running_total.home, first.running_total.away) == (21, 3)

    assert [row.label for row in sheet.rows][-1] == "1 v 1"
    last = sheet.rows[-1]
    assert (last.running_total.home, last.running_total.away) == (21, 3)
    assert (sheet.grand_totals.home, sheet.grand_totals.away) == (21, 3)
