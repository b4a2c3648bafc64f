
# Pulls the most recent posted update out of an incident/maintenance page.

# The page is server-rendered HTML with no stable ids or classes, so this
# works on plain text lines rather than on the DOM:
#
#     Updates
#     Monitoring
#     March 14, 2026 at 9:12 AM
#     A fix has been rolled out and we are watching error rates.
#     Identified
#     ...
#
# Everything page-shape specific lives here. The rest of the pipeline only
# sees extract_latest_update(lines) -> LatestUpdate | None.

import re

from bs4 import BeautifulSoup

from status_notifier.config import (
    FOOTER_LINE,
    FOOTER_PREFIX,
    KNOWN_UPDATE_STATES,
    MAX_UPDATE_MESSAGE_LEN,
    UPDATES_MARKER,
)
from status_notifier.models import LatestUpdate

_MONTH_TS_RE = re.compile(
    r"(January|February|March|April|May|June|July|August|September|October|November|December)"
    r"\s+[0-9]{1,2},\s+[0-9]{4}\s+at\s+[0-9]{1,2}:[0-9]{2}\s+(AM|PM)"
)


def html_to_lines(html: str) -> list[str]:
    """Reduce an HTML page to its trimmed, non-empty text lines."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()

    # every tag boundary becomes a line break; &nbsp; decodes to U+00A0
    text = soup.get_text(separator="\n").replace("\xa0", " ")
    return [line.strip() for line in text.split("\n") if line.strip()]


def _is_footer(line: str) -> bool:
    return line == FOOTER_LINE or line.startswith(FOOTER_PREFIX)


def extract_latest_update(lines: list[str]) -> LatestUpdate | None:
    """
    Find the first state/timestamp/message block after the "Updates" marker.

    Returns None when the marker, a known state label, or a timestamp line
    following that label is missing. The message is truncated to
    MAX_UPDATE_MESSAGE_LEN characters.
    """
    try:
        start = lines.index(UPDATES_MARKER)
    except ValueError:
        return None

    state: str | None = None
    ts: str | None = None
    message: list[str] = []

    for line in lines[start + 1:]:
        if state is None:
            if line in KNOWN_UPDATE_STATES:
                state = line
            continue

        if ts is None:
            if _MONTH_TS_RE.fullmatch(line):
                ts = line
            continue

        if line in KNOWN_UPDATE_STATES or _is_footer(line):
            break
        message.append(line)

    if state is None or ts is None:
        return None

    text = " ".join(message).strip()
    return LatestUpdate(state=state, timestamp=ts, message=text[:MAX_UPDATE_MESSAGE_LEN])


def make_update_key(update: LatestUpdate) -> str:
    """Stable change signal: state|timestamp|message."""
    return f"{update.state}|{update.timestamp}|{update.message}"


def pretty_update_key(update_key: str | None) -> str:
    """'Monitoring • March 14, 2026 at 9:12 AM', or 'unknown' without a key."""
    if not update_key:
        return "unknown"
    return " • ".join(update_key.split("|")[:2])
