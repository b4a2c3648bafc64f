import json

from status_notifier.models import PersistedState, StatusEntry


def make_fingerprint(entries: list[StatusEntry]) -> str:
    """
    Serialize the change-relevant fields of entries, in order.

    Why the summary's updatedAt is left out:

    The summary bumps updatedAt on edits that change nothing a reader would
    care about, and on some incidents it moves without any new update being
    posted. Using it would re-notify on every such bump. The update key read
    off the detail page (state + timestamp + message prefix) only moves when
    a new update is actually posted, so that is what goes in instead.

    The result is only ever compared for equality. Key order is fixed by
    the dict literal, so equal entry lists always give equal strings.
    """
    return json.dumps(
        [
            {
                "kind": e.kind,
                "id": e.id,
                "status": e.status,
                "impact": e.impact,
                "name": e.name,
                "url": e.url,
                "latestUpdateKey": e.update_key,
            }
            for e in entries
        ],
        ensure_ascii=False,
    )


def has_changed(previous: PersistedState | None, fingerprint: str) -> bool:
    """No previous state counts as a change, so the first run always notifies."""
    return previous is None or previous.fingerprint != fingerprint
