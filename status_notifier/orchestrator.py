
# StatusCheck: one pass of the notifier pipeline.

# Steps, strictly in order:
#   fetch summary -> normalize -> enrich from detail pages -> fingerprint
#   -> compare with stored state -> (on change) notify -> save state
#
# The state is saved only after the webhook accepted the message. If the
# post fails the exception propagates, the old state stays on disk, and the
# next scheduled run retries the same notification.

import logging
from collections.abc import Callable
from datetime import datetime, timezone

import aiohttp

from status_notifier.config import REQUEST_TIMEOUT_SECONDS, USER_AGENT, Settings
from status_notifier.differ import has_changed, make_fingerprint
from status_notifier.enricher import DetailEnricher
from status_notifier.handlers import WebhookNotifier
from status_notifier.http_client import StatusPageClient
from status_notifier.models import PersistedState, format_iso
from status_notifier.parser import pick_entries
from status_notifier.store import FileStateStore, StateStore

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class StatusCheck:

    def __init__(
        self,
        client: StatusPageClient,
        enricher: DetailEnricher,
        notifier: WebhookNotifier,
        store: StateStore,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self._enricher = enricher
        self._notifier = notifier
        self._store = store
        self._clock = clock

    async def run_once(self) -> bool:
        """Run the pipeline once. Returns True when a change was notified."""
        data = await self._client.get_summary()
        entries = pick_entries(data)
        log.info("Summary lists %d active entries.", len(entries))

        await self._enricher.enrich(entries)
        fingerprint = make_fingerprint(entries)

        previous = self._store.load()
        if not has_changed(previous, fingerprint):
            log.info("No change detected.")
            return False

        now = self._clock()
        await self._notifier.notify(entries, now)
        self._store.save(PersistedState(fingerprint=fingerprint, updated_at=format_iso(now)))

        log.info("Change detected; notified + saved state.")
        return True


async def run_check(settings: Settings, store: StateStore | None = None) -> bool:
    """Wire the real components around one shared aiohttp session and run once."""
    async with aiohttp.ClientSession(
        headers={"User-Agent": USER_AGENT},
        timeout=aiohttp.ClientTimeout(total=REQUEST_TIMEOUT_SECONDS),
    ) as session:
        client = StatusPageClient(
            session,
            summary_url=settings.summary_url,
            origin=settings.status_origin,
        )
        check = StatusCheck(
            client=client,
            enricher=DetailEnricher(client),
            notifier=WebhookNotifier(session, settings.webhook_url),
            store=store if store is not None else FileStateStore(settings.state_file),
        )
        return await check.run_once()
