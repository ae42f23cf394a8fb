"""Entrypoint for a UI collaborator: wire database session, persistence gateway and state store together."""

from contextlib import contextmanager
from typing import Iterator

from src.core.config import Config
from src.db.database import SessionLocal, init_db
from src.db.sql_repository import SQLSlotRepository
from src.services.match_service import MatchService
from src.services.persistence import MatchPersistence


@contextmanager
def open_match(
    version: str = Config.APP_VERSION, purge_stale: bool = False
) -> Iterator[MatchService]:
    """Open the scoring session of the given application version, on the configured database.

    With purge_stale, slots left behind by other versions are removed first. Off by default: going back to an older
    version finds its sheet again.
    """
    init_db()
    db = SessionLocal()
    try:
        persistence = MatchPersistence(SQLSlotRepository(db), version=version)
        if purge_stale:
            persistence.purge_stale()
        yield MatchService(persistence)
    finally:
        db.close()
