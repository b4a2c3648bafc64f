
# Read side of the status page: the JSON summary and the HTML detail pages.

# The summary fetch is all-or-nothing: a bad status or a body that is not
# JSON raises SummaryFetchError and the run stops there. Detail pages are a
# best-effort extra signal, so a bad status simply yields None.

import asyncio
import json
import logging
from typing import Any

import aiohttp

from status_notifier.config import STATUS_ORIGIN, SUMMARY_URL
from status_notifier.errors import SummaryFetchError
from status_notifier.extractor import extract_latest_update, html_to_lines, make_update_key

log = logging.getLogger(__name__)


class StatusPageClient:
    """
    Wraps an aiohttp.ClientSession for the two kinds of status page GETs.

    The session is owned by the caller, which sets the User-Agent and the
    request timeout once for every request made through it.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        summary_url: str = SUMMARY_URL,
        origin: str = STATUS_ORIGIN,
    ) -> None:
        self._session = session
        self.summary_url = summary_url
        self.origin = origin

    async def get_summary(self) -> dict[str, Any]:
        """
        GET summary.json and return the decoded document.

        Raises:
            SummaryFetchError            on non-2xx status, undecodable JSON, or a
                                         document that is not a JSON object
            aiohttp.ClientError          on connection failures
            asyncio.TimeoutError         on request timeout
        """
        try:
            async with self._session.get(self.summary_url) as resp:
                if not resp.ok:
                    raise SummaryFetchError(self.summary_url, f"HTTP {resp.status}")
                # the endpoint does not always label itself application/json
                data = await resp.json(content_type=None)

        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SummaryFetchError(self.summary_url, f"invalid JSON: {exc}") from exc
        except asyncio.TimeoutError:
            log.warning("Timeout fetching %s", self.summary_url)
            raise

        # an empty body decodes to None, same as a literal null
        if not isinstance(data, dict):
            raise SummaryFetchError(
                self.summary_url, f"invalid JSON: expected an object, got {type(data).__name__}"
            )
        return data

    def is_detail_url(self, url: str | None) -> bool:
        return isinstance(url, str) and url.startswith(self.origin)

    async def get_detail_html(self, url: str) -> str | None:
        """Return the page body, or None on a non-2xx status."""
        async with self._session.get(url) as resp:
            if not resp.ok:
                log.warning("HTTP %s fetching detail page %s", resp.status, url)
                return None
            return await resp.text(errors="replace")

    async def fetch_latest_update_key(self, url: str | None) -> str | None:
        """
        Fetch a detail page and derive its update key.

        URLs outside the status page origin are skipped without a request.
        Network errors propagate; the enricher decides what to do with them.
        """
        if not self.is_detail_url(url):
            log.debug("Skipping detail fetch for off-origin url %r", url)
            return None

        html = await self.get_detail_html(url)
        if html is None:
            return None

        latest = extract_latest_update(html_to_lines(html))
        if latest is None:
            log.debug("No update block found on %s", url)
            return None
        return make_update_key(latest)
