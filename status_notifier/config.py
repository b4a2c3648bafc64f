import os
from collections.abc import Mapping
from dataclasses import dataclass

from status_notifier.errors import ConfigError

SUMMARY_URL: str = "https://fluxerstatus.com/summary.json"
STATUS_ORIGIN: str = "https://fluxerstatus.com/"   # detail pages outside this prefix are never fetched
USER_AGENT: str = "fluxer-discord-notifier/1.0"
REQUEST_TIMEOUT_SECONDS: int = 10

DEFAULT_STATE_FILE: str = "state.json"
DEFAULT_LOG_LEVEL: str = "INFO"

MAX_NOTIFIED_ENTRIES: int = 10
MAX_UPDATE_MESSAGE_LEN: int = 160
MAX_WEBHOOK_CONTENT_LEN: int = 2000  # Discord's hard limit for `content`

# labels the status page uses to head each posted update
KNOWN_UPDATE_STATES: frozenset[str] = frozenset({
    "Investigating",
    "Identified",
    "Monitoring",
    "Resolved",
    "Update",
})

UPDATES_MARKER: str = "Updates"
FOOTER_LINE: str = "Show current status"
FOOTER_PREFIX: str = "Powered by"


@dataclass(frozen=True)
class Settings:
    webhook_url: str
    state_file: str = DEFAULT_STATE_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    summary_url: str = SUMMARY_URL
    status_origin: str = STATUS_ORIGIN


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from environment variables.

    DISCORD_WEBHOOK_URL is required; STATE_FILE and LOG_LEVEL are optional.
    Blank values are treated the same as missing ones.
    """
    env = os.environ if environ is None else environ

    webhook_url = (env.get("DISCORD_WEBHOOK_URL") or "").strip()
    if not webhook_url:
        raise ConfigError("Missing DISCORD_WEBHOOK_URL env var.")

    return Settings(
        webhook_url=webhook_url,
        state_file=(env.get("STATE_FILE") or "").strip() or DEFAULT_STATE_FILE,
        log_level=(env.get("LOG_LEVEL") or "").strip().upper() or DEFAULT_LOG_LEVEL,
    )
