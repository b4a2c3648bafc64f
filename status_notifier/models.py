import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

log = logging.getLogger(__name__)

INCIDENT = "Incident"
MAINTENANCE = "Maintenance"


def parse_dt(value: Any) -> datetime | None:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    The summary returns strings like '2026-03-14T09:12:00.000Z', but nothing
    guarantees the field is a string at all, so anything unparsable yields
    None instead of raising. Naive values are read as UTC.
    """
    if not value or not isinstance(value, str):
        return None

    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        log.debug("Could not parse datetime string: %r", value)
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso(dt: datetime | None) -> str:
    """ISO 8601 UTC with millisecond precision, e.g. 2026-03-14T09:12:00.000Z"""
    if dt is None:
        return "unknown"
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class StatusEntry:
    """
    One active incident or maintenance, normalized from the summary.

    Rebuilt from scratch on every run. update_key starts as None and is
    filled in by the detail enricher when the entry's page yields one.
    """
    kind: str                      # Incident | Maintenance
    id: str | None
    name: str
    status: str
    impact: str | None             # always set for incidents, optional for maintenances
    summary_updated_at: str | None # raw summary value; ordering and display only
    url: str
    update_key: str | None = None

    @property
    def summary_updated_dt(self) -> datetime | None:
        return parse_dt(self.summary_updated_at)


@dataclass(frozen=True)
class LatestUpdate:
    """The most recent update block found on an entry's detail page."""
    state: str        # Investigating | Identified | Monitoring | Resolved | Update
    timestamp: str    # as displayed, e.g. "March 14, 2026 at 9:12 AM"
    message: str


@dataclass
class PersistedState:
    fingerprint: str
    updated_at: str

    def to_dict(self) -> dict[str, str]:
        return {"fingerprint": self.fingerprint, "updatedAt": self.updated_at}
