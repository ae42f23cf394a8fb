"""Implementation of (Slot)Repository using SQLAlchemy"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import StorageError
from src.core.logger import get_logger
from src.db.schema import DBStorageSlot

_log = get_logger("db.sql_repository")


class SQLSlotRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def read_slot(self, key: str) -> str | None:
        """Get the raw payload stored under key, if the slot exists."""
        slot_db = self._fetch_slot(key)
        if slot_db:
            return slot_db.payload
        return None

    def write_slot(self, key: str, payload: str) -> None:
        """Create or overwrite the slot. Committed before returning."""
        slot_db = self._fetch_slot(key)
        if slot_db is None:
            self.db.add(DBStorageSlot(key=key, payload=payload))
        else:
            slot_db.payload = payload
        self._commit(f"write slot {key!r}")

    def delete_slot(self, key: str) -> bool:
        """Remove a slot. Returns whether there was anything to remove."""
        slot_db = self._fetch_slot(key)
        if not slot_db:
            return False
        self.db.delete(slot_db)
        self._commit(f"delete slot {key!r}")
        return True

    def list_slots(self) -> list[str]:
        """Keys of all existing slots."""
        query = select(DBStorageSlot.key).order_by(DBStorageSlot.key)
        return list(self.db.scalars(query))

    def _fetch_slot(self, key: str) -> DBStorageSlot | None:
        query = select(DBStorageSlot).where(DBStorageSlot.key == key)
        return self.db.scalar(query)

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            _log.error(f"Failed to {action}: {e}")
            raise StorageError(f"Failed to {action}.") from e
