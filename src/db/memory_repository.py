"""Implementation of (Slot)Repository using a plain dictionary. Nothing survives the process."""


class InMemorySlotRepository:
    def __init__(self, slots: dict[str, str] | None = None) -> None:
        self._slots: dict[str, str] = dict(slots or {})

    def read_slot(self, key: str) -> str | None:
        return self._slots.get(key)

    def write_slot(self, key: str, payload: str) -> None:
        self._slots[key] = payload

    def delete_slot(self, key: str) -> bool:
        return self._slots.pop(key, None) is not None

    def list_slots(self) -> list[str]:
        return sorted(self._slots)
