
# Where the previous run's fingerprint lives.

# The pipeline only talks to the StateStore protocol, so tests (or a future
# backend) can swap the file for something else. A state file that cannot
# be read for any reason is the same as no state file: the run is treated
# as a first run and notifies.

import json
import logging
from pathlib import Path
from typing import Protocol

from status_notifier.config import DEFAULT_STATE_FILE
from status_notifier.models import PersistedState

log = logging.getLogger(__name__)


class StateStore(Protocol):
    def load(self) -> PersistedState | None: ...

    def save(self, state: PersistedState) -> None: ...


class FileStateStore:
    """JSON file holding {"fingerprint": ..., "updatedAt": ...}."""

    def __init__(self, path: str | Path = DEFAULT_STATE_FILE) -> None:
        self.path = Path(path)

    def load(self) -> PersistedState | None:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            log.info("No state file at %s; treating this as the first run.", self.path)
            return None
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return None

        if not isinstance(raw, dict) or not isinstance(raw.get("fingerprint"), str):
            log.warning("Ignoring malformed state file %s", self.path)
            return None

        updated_at = raw.get("updatedAt")
        return PersistedState(
            fingerprint=raw["fingerprint"],
            updated_at=updated_at if isinstance(updated_at, str) else "",
        )

    def save(self, state: PersistedState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(state.to_dict(), indent=2), encoding="utf-8")
        log.debug("Wrote state to %s", self.path)


class MemoryStateStore:
    """In-process StateStore; keeps a count of saves for assertions."""

    def __init__(self, state: PersistedState | None = None) -> None:
        self.state = state
        self.saves = 0

    def load(self) -> PersistedState | None:
        return self.state

    def save(self, state: PersistedState) -> None:
        self.state = state
        self.saves += 1
