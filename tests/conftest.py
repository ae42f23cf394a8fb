"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import Side
from src.db.schema import Base
from src.scoring.match import GameCell, MatchState, Player

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def played_state() -> MatchState:
    """A sheet halfway through the night: some handicaps, a few rows (partly) played."""
    state = MatchState.new()
    state.home_roster = [Player("Ann", 10), Player("Bob", 5), Player("Cat", 0)]
    state.away_roster = [Player("Dan", 3), Player("Eve", 0), Player("Fay", 12)]

    # row 0: "2 v 1", all 4 games played
    state.score_grid[0] = [
        GameCell(11, 3),
        GameCell(8, 11),
        GameCell(11, 9),
        GameCell(11, 0),
    ]
    # row 1: "1 v 3", two games played, an explicit 0 on the home side
    state.score_grid[1][0] = GameCell(0, 11)
    state.score_grid[1][1] = GameCell(11, 6)
    # row 4: only the away side of game 3 entered so far
    state.score_grid[4][2].set(Side.AWAY, 7)
    return state
