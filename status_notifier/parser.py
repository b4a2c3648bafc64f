
# parses the summary.json response into StatusEntry objects, one per active
# incident or maintenance.

# Design decisions:
#   - Nothing in here raises: absent or non-list arrays become [], non-object
#     records become {}, and every field has a fallback.
#   - None is treated as "absent" at every step of a fallback chain.
#   - Incidents come before maintenances, then one stable sort orders the
#     whole list newest-first by the summary timestamp. Missing/unparsable
#     timestamps sort last.

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from status_notifier.config import STATUS_ORIGIN
from status_notifier.models import INCIDENT, MAINTENANCE, StatusEntry, parse_dt

UNKNOWN = "UNKNOWN"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _records(data: Mapping, key: str) -> list[Mapping]:
    items = data.get(key)
    if not isinstance(items, list):
        return []
    return [item if isinstance(item, Mapping) else {} for item in items]


def _sort_key(entry: StatusEntry) -> datetime:
    return entry.summary_updated_dt or _OLDEST


def _incident(x: Mapping) -> StatusEntry:
    return StatusEntry(
        kind=INCIDENT,
        id=_first(x.get("id"), x.get("url"), x.get("name")),
        name=_first(x.get("name"), "Unnamed incident"),
        status=_first(x.get("status"), UNKNOWN),
        impact=_first(x.get("impact"), UNKNOWN),
        summary_updated_at=_first(x.get("updatedAt"), x.get("started")),
        url=_first(x.get("url"), STATUS_ORIGIN),
    )


def _maintenance(x: Mapping) -> StatusEntry:
    return StatusEntry(
        kind=MAINTENANCE,
        id=_first(x.get("id"), x.get("url"), x.get("name")),
        name=_first(x.get("name"), "Unnamed maintenance"),
        status=_first(x.get("status"), UNKNOWN),
        impact=x.get("impact"),
        summary_updated_at=_first(x.get("updatedAt"), x.get("start")),
        url=_first(x.get("url"), STATUS_ORIGIN),
    )


def pick_entries(data: Any) -> list[StatusEntry]:
    """
    Normalize a summary.json payload.

    Returns one StatusEntry per item of activeIncidents and
    activeMaintenances, newest first.
    """
    if not isinstance(data, Mapping):
        data = {}

    entries = [_incident(x) for x in _records(data, "activeIncidents")]
    entries += [_maintenance(x) for x in _records(data, "activeMaintenances")]

    # sorted() is stable under reverse=True, so ties keep their input order
    return sorted(entries, key=_sort_key, reverse=True)
