
# Notification handlers: the output layer of the pipeline.

# All formatting decisions live here. StatusEntry stays a plain data
# container with no display logic.

# Discord caps `content` at 2000 characters. Only the first
# MAX_NOTIFIED_ENTRIES entries are rendered, and the finished message is
# cut to MAX_WEBHOOK_CONTENT_LEN as a last resort for very long names.

import logging
from datetime import datetime

import aiohttp

from status_notifier.config import MAX_NOTIFIED_ENTRIES, MAX_WEBHOOK_CONTENT_LEN, STATUS_ORIGIN
from status_notifier.errors import WebhookDeliveryError
from status_notifier.extractor import pretty_update_key
from status_notifier.models import INCIDENT, StatusEntry, format_iso

log = logging.getLogger(__name__)

ENTRIES_HEADER = "🔔 Fluxer status update detected:"
ALL_CLEAR_HEADER = "✅ Fluxer status: **All systems operational**"


def _truncate(text: str, limit: int = MAX_WEBHOOK_CONTENT_LEN) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def format_entry(e: StatusEntry) -> str:
    extra = f" • impact: {e.impact}" if e.kind == INCIDENT else ""
    return (
        f"**[{e.kind}]** {e.name}\n"
        f"Status: `{e.status}`{extra}\n"
        f"Latest update: {pretty_update_key(e.update_key)}\n"
        f"Summary updatedAt: {format_iso(e.summary_updated_dt)}\n"
        f"{e.url}"
    )


def format_entries_message(entries: list[StatusEntry]) -> str:
    blocks = [format_entry(e) for e in entries[:MAX_NOTIFIED_ENTRIES]]
    return _truncate(f"{ENTRIES_HEADER}\n\n" + "\n\n".join(blocks))


def format_all_clear_message(checked_at: datetime) -> str:
    return (
        f"{ALL_CLEAR_HEADER}\n"
        f"{STATUS_ORIGIN}\n"
        f"Checked: {format_iso(checked_at)}"
    )


class WebhookNotifier:
    """
    Posts one message per run to a Discord-compatible webhook.

    Any non-2xx answer raises WebhookDeliveryError with the status and body,
    which aborts the run before the new state is written. The next run then
    sees the same change and tries again.
    """

    def __init__(self, session: aiohttp.ClientSession, webhook_url: str) -> None:
        self._session = session
        self._webhook_url = webhook_url

    async def send(self, content: str) -> None:
        async with self._session.post(self._webhook_url, json={"content": content}) as resp:
            if not resp.ok:
                try:
                    body = await resp.text()
                except (aiohttp.ClientError, UnicodeDecodeError):
                    body = ""
                raise WebhookDeliveryError(resp.status, body)
        log.debug("Webhook accepted message (%d chars)", len(content))

    async def notify(self, entries: list[StatusEntry], checked_at: datetime) -> None:
        if entries:
            shown = min(len(entries), MAX_NOTIFIED_ENTRIES)
            log.info("Posting %d of %d active entries to webhook.", shown, len(entries))
            await self.send(format_entries_message(entries))
        else:
            log.info("No active incidents or maintenances; posting all-clear.")
            await self.send(format_all_clear_message(checked_at))
