"""
Saving and loading the match to/from a durable key-value slot.

Each application version owns its own slot (`handicap-cup-v3`, `handicap-cup-v4`, ...), so an upgrade never reads
data in a shape written by an older release.

Loading never fails. Anything that is not a structurally complete score sheet is discarded in favour of a fresh one:
a partially repaired sheet could show wrong totals, a fresh sheet is obviously fresh.
Values inside a structurally valid sheet are returned as they were stored (range checks happen when writing).
"""

import json
from dataclasses import asdict, dataclass
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from src.core.config import Config
from src.core.logger import get_logger
from src.core.models import MatchModel
from src.core.shared_types import LoadOutcome
from src.db.repository import SlotRepository
from src.scoring.match import GAMES_PER_ROW, ROW_COUNT, MatchState, new_match_state
from src.scoring.schedule import ROSTER_SIZE

_log = get_logger("services.persistence")

# Inner values are loose (shape is checked here, ranges are not) but strict: a stored value is either kept exactly
# as it is, or the record is rejected. Never converted.
StoredValue = StrictInt | StrictFloat | StrictStr | None


# --- SCHEMA OF THE PERSISTED RECORD ---
class PersistedPlayer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[StrictStr] = ""
    hcap: StoredValue = 0


class PersistedCell(BaseModel):
    model_config = ConfigDict(extra="ignore")

    h: StoredValue = ""
    a: StoredValue = ""


Roster = Annotated[
    list[PersistedPlayer], Field(min_length=ROSTER_SIZE, max_length=ROSTER_SIZE)
]
ScoreRow = Annotated[
    list[PersistedCell], Field(min_length=GAMES_PER_ROW, max_length=GAMES_PER_ROW)
]


class PersistedMatch(BaseModel):
    """Shape of a score sheet written by the current version. Unknown keys (e.g. a retired `exchange`) are ignored."""

    model_config = ConfigDict(extra="ignore")

    home: Roster
    away: Roster
    scores: Annotated[list[ScoreRow], Field(min_length=ROW_COUNT, max_length=ROW_COUNT)]

    def to_model(self) -> MatchModel:
        data = self.model_dump()
        for roster in (data["home"], data["away"]):
            for player in roster:
                if player["name"] is None:
                    player["name"] = ""
        return MatchModel(home=data["home"], away=data["away"], scores=data["scores"])


@dataclass
class LoadResult:
    """Tagged outcome of reading the slot. `state` is always usable, whatever the outcome."""

    outcome: LoadOutcome
    state: MatchState
    reason: Optional[str] = None

    @property
    def is_default(self) -> bool:
        return self.outcome != LoadOutcome.LOADED


def storage_key(version: str, prefix: str = Config.STORAGE_PREFIX) -> str:
    return f"{prefix}-v{version}"


class MatchPersistence:
    """Persistence Gateway: owns the mapping from application version to storage slot."""

    def __init__(
        self,
        repository: SlotRepository,
        version: str = Config.APP_VERSION,
        prefix: str = Config.STORAGE_PREFIX,
    ) -> None:
        self.repo = repository
        self.version = version
        self.prefix = prefix

    @property
    def key(self) -> str:
        return storage_key(self.version, self.prefix)

    def save(self, state: MatchState) -> None:
        """Store the full score sheet. Durable once this returns."""
        payload = json.dumps(asdict(state.to_model()))
        self.repo.write_slot(self.key, payload)
        _log.debug(f"Saved match state to slot {self.key!r}")

    def load(self) -> MatchState:
        return self.inspect().state

    def inspect(self) -> LoadResult:
        """Read the slot and validate it, reporting which step (if any) forced a fresh sheet."""
        raw = self.repo.read_slot(self.key)
        if raw is None:
            return self._fallback(LoadOutcome.MISSING, "no data stored")

        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as e:
            return self._fallback(LoadOutcome.UNPARSEABLE, str(e))

        try:
            parsed = PersistedMatch.model_validate(data)
        except ValidationError as e:
            return self._fallback(
                LoadOutcome.INCOMPATIBLE, f"{e.error_count()} schema error(s)"
            )

        return LoadResult(LoadOutcome.LOADED, MatchState.from_model(parsed.to_model()))

    def stale_keys(self) -> list[str]:
        """Slots written by other versions of this application. Their contents are never read."""
        own_prefix = f"{self.prefix}-v"
        return [
            key
            for key in self.repo.list_slots()
            if key.startswith(own_prefix) and key != self.key
        ]

    def purge_stale(self) -> list[str]:
        """Delete the slots of other versions. Returns the removed keys."""
        removed = [key for key in self.stale_keys() if self.repo.delete_slot(key)]
        if removed:
            _log.info(f"Removed {len(removed)} stale slot(s): {', '.join(removed)}")
        return removed

    def _fallback(self, outcome: LoadOutcome, reason: str) -> LoadResult:
        if outcome == LoadOutcome.MISSING:
            _log.debug(f"Nothing stored in slot {self.key!r}, starting a fresh sheet")
        else:
            _log.warning(
                f"Discarding stored match in slot {self.key!r} ({outcome}): {reason}"
            )
        return LoadResult(outcome, new_match_state(), reason)
