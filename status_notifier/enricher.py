
# DetailEnricher: fills in StatusEntry.update_key from each entry's detail page.

# Pages are fetched one at a time, in entry order. That keeps the load on
# the status page to a single in-flight request; if this ever needs to go
# faster, put an explicit cap (a semaphore) on it rather than gathering
# every page at once.
#
# A failure for one entry (network error, timeout, unexpected page shape)
# only costs that entry its update key. It is logged and the loop moves on.

import logging

from status_notifier.http_client import StatusPageClient
from status_notifier.models import StatusEntry

log = logging.getLogger(__name__)


class DetailEnricher:

    def __init__(self, client: StatusPageClient) -> None:
        self._client = client

    async def enrich(self, entries: list[StatusEntry]) -> list[StatusEntry]:
        """Set update_key on every entry in place and return the same list."""
        for entry in entries:
            try:
                entry.update_key = await self._client.fetch_latest_update_key(entry.url)
            except Exception as exc:
                log.warning("Could not read latest update for %s: %r", entry.url, exc)
                entry.update_key = None

        found = sum(1 for e in entries if e.update_key)
        log.info("Detail pages gave an update key for %d/%d entries.", found, len(entries))
        return entries
