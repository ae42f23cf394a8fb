"""Protocol repository for a durable key-value slot (SQLAlchemy, or a plain dict in memory)."""

from typing import Protocol


class SlotRepository(Protocol):
    """Persistence layer orchestration"""

    def read_slot(self, key: str) -> str | None:
        """Get the raw payload stored under key, if the slot exists."""
        ...

    def write_slot(self, key: str, payload: str) -> None:
        """Create or overwrite the slot. Durable once this returns."""
        ...

    def delete_slot(self, key: str) -> bool:
        """Remove a slot. Returns whether there was anything to remove."""
        ...

    def list_slots(self) -> list[str]:
        """Keys of all existing slots."""
        ...
